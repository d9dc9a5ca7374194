"""Open the built documentation in the platform's default browser."""

from __future__ import annotations

import shlex
import subprocess
import sys
from pathlib import Path
from typing import Callable, Iterable, List

from .logging import get_logger

_OPENERS = {
    "darwin": ["open"],
    "win32": ["cmd", "/c", "start", ""],
}
_DEFAULT_OPENER = ["xdg-open"]


def resolve_index(path: Path | str, crate: str | None = None) -> Path:
    """Return the index page for a built site, a crate folder or a file."""
    target = Path(path).expanduser()
    if target.is_file():
        return target.resolve()
    candidates = []
    if crate:
        candidates.append(target / crate / "index.html")
    candidates.append(target / "index.html")
    for candidate in candidates:
        if candidate.is_file():
            return candidate.resolve()
    raise FileNotFoundError(f"No index.html found under {target}")


def opener_command(platform: str | None = None, override: str | None = None) -> List[str]:
    if override:
        return shlex.split(override)
    platform = platform or sys.platform
    return list(_OPENERS.get(platform, _DEFAULT_OPENER))


def open_docs(
    path: Path | str,
    *,
    crate: str | None = None,
    opener: str | None = None,
    runner: Callable[..., int] | None = None,
) -> int:
    """Launch the opener on the site's index page and return its exit code."""
    index = resolve_index(path, crate)
    command = opener_command(override=opener) + [str(index)]
    get_logger("opener").info("Opening %s", index)
    run = runner or _default_runner
    return run(command)


def _default_runner(args: Iterable[str]) -> int:
    return subprocess.run(list(args), check=False).returncode


__all__ = ["open_docs", "opener_command", "resolve_index"]
