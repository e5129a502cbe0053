# favsync Scoped Directory
# Working-directory switch that is always undone on scope exit

import logging
import os
from pathlib import Path
from types import TracebackType
from typing import Optional

logger = logging.getLogger(__name__)


class DirectoryChangeError(Exception):
    """Exception raised when the working directory cannot be switched."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot change directory to {str(path)!r}: {cause}")


class ScopedDirectory:
    """
    Context manager that switches into ``path`` and restores the previous
    working directory on every exit path.

    The working directory is process-wide, so guards must be used strictly
    one after another; entering a guard that is already active raises.
    Restoration failures are logged as warnings and never raised, so they
    cannot mask an error propagating out of the block.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self.original: Optional[Path] = None

    @property
    def active(self) -> bool:
        """True between a successful enter and the matching exit."""
        return self.original is not None

    def __enter__(self) -> "ScopedDirectory":
        if self.active:
            raise RuntimeError(f"ScopedDirectory for {self.path} is already active")

        try:
            original = Path.cwd()
            os.chdir(self.path)
        except OSError as e:
            raise DirectoryChangeError(self.path, e) from e

        self.original = original
        logger.debug("Entered %s (from %s)", self.path, original)
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        original = self.original
        self.original = None
        if original is None:
            return

        try:
            os.chdir(original)
        except OSError as e:
            logger.warning("Cannot change back to original directory %s: %s", original, e)
