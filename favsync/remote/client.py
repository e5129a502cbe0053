# favsync Remote Client
# fav command execution for Bilibili session and favorite-list operations

import logging
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)


class RemoteError(Exception):
    """Exception raised for fav client errors."""

    def __init__(self, message: str, returncode: int = 1, stderr: str = ""):
        self.message = message
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)

    def __str__(self) -> str:
        if self.stderr:
            return f"{self.message}: {self.stderr}"
        return self.message


class FavClient:
    """
    Thin wrapper around the ``fav`` executable.

    Every call runs in the process working directory, so per-collection
    calls are expected to happen inside a ScopedDirectory.
    """

    def __init__(self, binary: str = "fav", *, timeout: Optional[float] = None):
        """
        Initialize client.

        Args:
            binary: fav executable name or path.
            timeout: Optional per-call timeout in seconds.
        """
        self.binary = binary
        self.timeout = timeout

    def _run(
        self,
        *args: str,
        redact: bool = False,
    ) -> subprocess.CompletedProcess[str]:
        """
        Run a fav command.

        Args:
            *args: fav command arguments.
            redact: Hide arguments in logs and errors.

        Returns:
            CompletedProcess with result.

        Raises:
            RemoteError: If the command fails, times out, or fav is missing.
        """
        cmd = [self.binary, *args]
        shown = self.binary + " " + (args[0] if redact else " ".join(args))
        logger.debug("Running %s", shown)
        try:
            result = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise RemoteError(f"{self.binary} command not found. Is fav installed?")
        except subprocess.TimeoutExpired:
            raise RemoteError(f"fav command timed out after {self.timeout}s: {shown}")

        if result.returncode != 0:
            raise RemoteError(
                f"fav command failed: {shown}",
                returncode=result.returncode,
                stderr=result.stderr.strip() if result.stderr else "",
            )
        return result

    def establish_session(self, cookie: str) -> None:
        """Log in with browser cookies."""
        self._run("auth", "usecookies", cookie, redact=True)

    def check_session(self) -> None:
        """Probe whether the stored session is still accepted."""
        self._run("check")

    def refresh_metadata(self, *, prune: bool = False) -> None:
        """
        Fetch favorite-list metadata.

        Args:
            prune: Drop entries that disappeared remotely.
        """
        args = ["fetch"]
        if prune:
            args.append("--prune")
        self._run(*args)

    def activate_collection(self, collection_id: int) -> None:
        """Mark a favorite list as tracked."""
        self._run("activate", "set", str(collection_id))

    def deactivate_collection(self, collection_id: int) -> None:
        """Stop tracking a favorite list."""
        self._run("deactivate", "set", str(collection_id))

    def pull_content(self) -> None:
        """Download pending items of the activated favorite lists."""
        self._run("pull")
