from __future__ import annotations

import io
import json
import os
import sys

import pytest
from rich.console import Console

from childsize import cli
from childsize.config import SUMMARY_LABEL, RunConfig
from childsize.globfilter import GlobFilter


def test_plain_output_sorted_by_total(sample_tree, capsys):
    rc = cli.main([str(sample_tree), "-f", "plain", "-s", "total"])
    assert rc == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        f"1 20 20 20 20 {sample_tree / 'b'}",
        f"2 40 20 30 10 {sample_tree / 'a'}",
    ]


def test_plain_output_with_summary_and_reverse(sample_tree, capsys):
    rc = cli.main([str(sample_tree), "--format", "plain", "--reverse", "--summary"])
    assert rc == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].endswith(str(sample_tree / "a"))
    assert lines[1].endswith(str(sample_tree / "b"))
    assert set(lines[2]) == {"-"}
    assert lines[3] == f"3 60 20 30 10 {SUMMARY_LABEL}"


def test_json_output_with_glob(sample_tree, capsys):
    (sample_tree / "b" / "trace.log").write_bytes(b"x" * 7)
    rc = cli.main([str(sample_tree), "-f", "json", "-g", "*.log", "-S"])
    assert rc == 0
    doc = json.loads(capsys.readouterr().out)
    assert [e["key"] for e in doc["entries"]] == [str(sample_tree / "b")]
    assert doc["summary"]["total"] == 7


def test_unmatched_glob_reports_empty_summary(sample_tree, capsys):
    rc = cli.main([str(sample_tree), "-f", "plain", "-g", "*.log", "-S"])
    assert rc == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[-1] == f"0 0 0 - - {SUMMARY_LABEL}"
    assert len(lines) == 2


def test_table_output(sample_tree, capsys):
    rc = cli.main([str(sample_tree), "-S", "-H"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Count" in out and "Directory" in out
    assert str(sample_tree / "a") in out
    assert "60 B" in out
    assert SUMMARY_LABEL in out


def test_invalid_glob_aborts_before_walking(sample_tree, capsys, monkeypatch):
    def boom(*args, **kwargs):
        raise AssertionError("collect must not run")

    monkeypatch.setattr(cli, "collect", boom)
    rc = cli.main([str(sample_tree), "-g", "*.[ch"])
    assert rc == 2
    captured = capsys.readouterr()
    assert "invalid glob pattern" in captured.err
    assert captured.out == ""


def test_missing_root_still_reports(sample_tree, tmp_path, capsys):
    rc = cli.main([str(tmp_path / "missing"), str(sample_tree / "a"), "-f", "plain"])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [f"2 40 20 30 10 {sample_tree / 'a'}"]


def test_jobs_and_top(sample_tree, capsys):
    rc = cli.main([str(sample_tree / "a"), str(sample_tree / "b"), "-j", "2", "-n", "1", "-r", "-f", "plain"])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [f"2 40 20 30 10 {sample_tree / 'a'}"]


@pytest.mark.parametrize("argv", [["-j", "0"], ["-n", "-1"], ["-s", "median"]])
def test_bad_arguments_exit_with_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(argv)
    assert excinfo.value.code == 2


def test_defaults_to_current_directory(sample_tree, capsys, monkeypatch):
    monkeypatch.chdir(sample_tree)
    rc = cli.main(["-f", "plain", "-s", "count"])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == ["1 20 20 20 20 b", "2 40 20 30 10 a"]


def test_progress_spinner_on_terminal(sample_tree):
    console = Console(file=io.StringIO(), force_terminal=True, width=120)
    cfg = RunConfig(roots=[str(sample_tree / "a"), str(sample_tree / "b")], progress=True, jobs=2)
    agg = cli._run_collect(cfg, GlobFilter(), console)
    assert agg.finalized
    assert agg.summary.count == 3


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="needs byte-string file names")
@pytest.mark.parametrize("fmt", ["plain", "table"])
def test_non_utf8_directory_name_is_reported(tmp_path, capsys, fmt):
    bad = os.path.join(os.fsencode(tmp_path), b"caf\xe9")
    os.mkdir(bad)
    with open(os.path.join(bad, b"f.txt"), "wb") as fh:
        fh.write(b"x" * 5)

    rc = cli.main([str(tmp_path), "-f", fmt])
    assert rc == 0
    out = capsys.readouterr().out
    assert str(tmp_path / "caf\ufffd") in out
