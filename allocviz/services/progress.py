from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

"""Progress display for batch file inspection (tqdm, TTY only).

On a non-TTY stdout (CI, pipes) no bar is created so the labeled log lines
stay free of control sequences.
"""

__all__ = [
    "FileProgress",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class FileProgress:
    """One bar over a list of source files, updated once per file."""

    def __init__(self, total_files: int, *, description: str = "Inspecting files") -> None:
        self.total_files = total_files
        self.description = description
        self.done = 0
        self.failed = 0
        self.enabled = is_tty_enabled()
        self.pbar: tqdm[Any] | None = None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                ncols=80,
                ascii=True,
            )

    def start_file(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, success: bool = True) -> None:
        self.done += 1
        if not success:
            self.failed += 1
        if self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_postfix(ok=self.done - self.failed, failed=self.failed)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> FileProgress:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
