"""Running clang-format over a tree of generated headers."""

from __future__ import annotations

import logging
import os
import subprocess
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List, Union

log = logging.getLogger(__name__)

CLANG_FORMAT = "clang-format"


class FormattingError(RuntimeError):
    """Raised when clang-format cannot be started or fails on a file."""


def collect_files(root: Union[str, os.PathLike]) -> List[Path]:
    """Every regular file under ``root``, largest first."""
    root_path = Path(root)
    if not root_path.is_dir():
        raise FileNotFoundError(f"No such directory: {root_path}")

    def size(path: Path) -> int:
        try:
            return path.stat().st_size
        except OSError:
            return 0

    files = [p for p in root_path.rglob("*") if p.is_file()]
    return sorted(files, key=size, reverse=True)


def _format_one(index: int, total: int, path: Path) -> Path:
    log.info("Formatting [%d/%d] %s", index + 1, total, path)
    try:
        result = subprocess.run(
            [CLANG_FORMAT, "-i", str(path)], capture_output=True
        )
    except FileNotFoundError as exc:
        raise FormattingError(
            "You may be missing clang-format. Ensure it is on PATH"
        ) from exc

    if result.stderr:
        stderr = result.stderr
        if isinstance(stderr, bytes):
            stderr = stderr.decode("utf-8", errors="replace")
        log.error("Error %s %s", path, stderr)

    if result.returncode != 0:
        raise FormattingError(
            f"clang-format exited with status {result.returncode} on {path}"
        )
    return path


def format_files(root: Union[str, os.PathLike]) -> List[Path]:
    """Format every file under ``root`` in place, in parallel, largest first.

    Returns the formatted files in the order they were submitted.
    """
    log.info("Formatting!")
    files = collect_files(root)
    total = len(files)
    log.info("%d files across %d threads", total, os.cpu_count() or 1)

    with ThreadPoolExecutor() as pool:
        futures = [
            pool.submit(_format_one, index, total, path)
            for index, path in enumerate(files)
        ]
        formatted = [future.result() for future in futures]

    log.info("Done formatting!")
    return formatted