# setup.py

from setuptools import setup, find_packages

setup(
    name="childsize",
    version="0.1.0",
    description="Per-directory file count and size statistics with rich CLI output",
    author="Max Carlson",
    author_email="carlsonamax@gmail.com",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "rich>=12.6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "childsize=childsize.cli:main"
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
