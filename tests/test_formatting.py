import subprocess
from unittest import mock

import pytest

from cordl.formatting import FormattingError, collect_files, format_files


@pytest.fixture
def tree(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "small.hpp").write_text("a")
    (tmp_path / "sub" / "big.hpp").write_text("a" * 100)
    (tmp_path / "mid.hpp").write_text("a" * 10)
    return tmp_path


def test_collect_files_sorted_largest_first(tree):
    files = collect_files(tree)
    assert [f.name for f in files] == ["big.hpp", "mid.hpp", "small.hpp"]
    sizes = [f.stat().st_size for f in files]
    assert sizes == sorted(sizes, reverse=True)


def test_collect_files_skips_directories(tree):
    assert all(f.is_file() for f in collect_files(tree))
    assert len(collect_files(tree)) == 3


def test_collect_files_missing_root(tmp_path):
    with pytest.raises(FileNotFoundError):
        collect_files(tmp_path / "nope")


def _ok(args, **kwargs):
    return subprocess.CompletedProcess(args, 0, stdout=b"", stderr=b"")


def test_format_files_runs_clang_format_on_each(tree):
    with mock.patch("cordl.formatting.subprocess.run", side_effect=_ok) as run:
        formatted = format_files(tree)
    called = sorted(call.args[0][2] for call in run.call_args_list)
    assert called == sorted(str(p) for p in collect_files(tree))
    assert all(call.args[0][:2] == ["clang-format", "-i"] for call in run.call_args_list)
    assert formatted == collect_files(tree)


def test_format_files_nonzero_exit(tree):
    def fail(args, **kwargs):
        return subprocess.CompletedProcess(args, 1, stdout=b"", stderr=b"bad")

    with mock.patch("cordl.formatting.subprocess.run", side_effect=fail):
        with pytest.raises(FormattingError):
            format_files(tree)


def test_format_files_missing_tool(tree):
    with mock.patch(
        "cordl.formatting.subprocess.run", side_effect=FileNotFoundError("clang-format")
    ):
        with pytest.raises(FormattingError, match="clang-format"):
            format_files(tree)


def test_format_files_empty_tree(tmp_path):
    with mock.patch("cordl.formatting.subprocess.run", side_effect=_ok) as run:
        assert format_files(tmp_path) == []
    assert run.call_count == 0