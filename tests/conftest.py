import sys
from pathlib import Path

import pytest

# Ensure the childsize package is importable when running tests from a checkout
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


def make_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.write(b"x" * size)
    return path


@pytest.fixture
def sample_tree(tmp_path):
    """a/1.txt (10 B), a/2.txt (30 B), b/3.txt (20 B)."""
    root = tmp_path / "root"
    make_file(root / "a" / "1.txt", 10)
    make_file(root / "a" / "2.txt", 30)
    make_file(root / "b" / "3.txt", 20)
    return root
