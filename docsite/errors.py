"""Error taxonomy for docsite pipeline stages."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class DocsiteError(RuntimeError):
    """Raised when a pipeline stage cannot complete."""

    def __init__(self, message: str, *, stage: str, target: Path | str | None = None) -> None:
        super().__init__(message)
        self.stage = stage
        self.target = target


class SiteIOError(DocsiteError):
    """A file could not be read or written, or a command could not be spawned."""


class UpstreamFailure(DocsiteError):
    """The external documentation generator exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int) -> None:
        rendered = " ".join(command)
        super().__init__(
            f"Command `{rendered}` exited with status {returncode}",
            stage="generate",
            target=rendered,
        )
        self.command = list(command)
        self.returncode = returncode


__all__ = ["DocsiteError", "SiteIOError", "UpstreamFailure"]
