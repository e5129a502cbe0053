# favsync Sync Scheduler
# Top-level loop: validate session, sync every favorite list, sleep

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from favsync.config.schema import SyncConfiguration
from favsync.remote.client import FavClient, RemoteError
from favsync.sync.pipeline import CollectionSyncPipeline, PipelineError
from favsync.sync.session import CriticalFailure, SessionGate

logger = logging.getLogger(__name__)

SEPARATOR = "=" * 50


class SchedulerState(str, Enum):
    """Lifecycle state of the scheduler."""

    INITIALIZING = "initializing"
    VALIDATING_SESSION = "validating_session"
    PREPARING_DIRECTORIES = "preparing_directories"
    GLOBAL_REFRESH = "global_refresh"
    ROUND_START = "round_start"
    PROCESSING_COLLECTIONS = "processing_collections"
    SLEEPING = "sleeping"
    TERMINATED = "terminated"


class DirectoryPreparationError(Exception):
    """Exception raised when a target directory cannot be created."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to create directory {path}: {cause}")


@dataclass
class RoundResult:
    """Result of one pass over all favorite lists."""

    round_number: int
    attempted: int = 0
    succeeded: int = 0
    failures: list[PipelineError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if every favorite list synced."""
        return not self.failures


class SyncScheduler:
    """
    Drives the sync loop.

    Startup validates the session, creates the target directories and runs
    one global metadata refresh; any failure there is fatal. Each round then
    re-validates the session and runs every favorite list through the
    pipeline, logging and recording per-list failures without stopping.
    """

    def __init__(
        self,
        config: SyncConfiguration,
        client: FavClient,
        session_gate: SessionGate,
        pipeline: Optional[CollectionSyncPipeline] = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.client = client
        self.session_gate = session_gate
        self.pipeline = pipeline or CollectionSyncPipeline(client)
        self._sleep = sleep
        self.state = SchedulerState.INITIALIZING
        self.rounds_completed = 0
        self.last_result: Optional[RoundResult] = None

    def run(
        self,
        max_rounds: Optional[int] = None,
        on_round: Optional[Callable[[RoundResult], None]] = None,
    ) -> None:
        """
        Start up and loop.

        Args:
            max_rounds: Stop after this many rounds. None loops forever.
            on_round: Optional callback receiving each RoundResult.

        Raises:
            CriticalFailure: On login failure or session expiry.
            DirectoryPreparationError: If a target directory cannot be created.
            RemoteError: If the initial global refresh fails.
        """
        self.startup()

        while max_rounds is None or self.rounds_completed < max_rounds:
            result = self.run_round()
            if on_round is not None:
                on_round(result)

            if max_rounds is not None and self.rounds_completed >= max_rounds:
                break

            self.state = SchedulerState.SLEEPING
            logger.info("All favorite lists processed, sleeping %s seconds...", self.config.interval)
            self._sleep(self.config.interval)

    def startup(self) -> None:
        """Validate the session, prepare directories, run the global refresh."""
        self.state = SchedulerState.VALIDATING_SESSION
        try:
            self.session_gate.validate_startup()
        except CriticalFailure:
            self.state = SchedulerState.TERMINATED
            raise

        self.state = SchedulerState.PREPARING_DIRECTORIES
        self.prepare_directories()

        self.state = SchedulerState.GLOBAL_REFRESH
        logger.info("Running initial global metadata fetch...")
        try:
            self.client.refresh_metadata(prune=False)
        except RemoteError:
            self.state = SchedulerState.TERMINATED
            raise
        logger.info(SEPARATOR)

    def prepare_directories(self) -> list[Path]:
        """
        Create every target directory.

        Returns:
            List of directories that were created.

        Raises:
            DirectoryPreparationError: If a directory cannot be created.
        """
        logger.info("Preparing local directories...")
        created: list[Path] = []
        for path in self.config.target_directories():
            if path.is_dir():
                continue
            try:
                path.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                self.state = SchedulerState.TERMINATED
                raise DirectoryPreparationError(path, e) from e
            created.append(path)
        logger.info("Directories ready.")
        return created

    def run_round(self) -> RoundResult:
        """
        Validate the session, then sync every favorite list once.

        Returns:
            RoundResult for this round.

        Raises:
            CriticalFailure: If the session expired.
        """
        self.state = SchedulerState.VALIDATING_SESSION
        try:
            self.session_gate.validate_round()
        except CriticalFailure:
            self.state = SchedulerState.TERMINATED
            raise

        self.state = SchedulerState.ROUND_START
        result = RoundResult(round_number=self.rounds_completed + 1)
        logger.info("Starting sync round %s...", result.round_number)

        self.state = SchedulerState.PROCESSING_COLLECTIONS
        for collection_id, directory in self.config.collections():
            result.attempted += 1
            try:
                self.pipeline.run(collection_id, directory)
            except PipelineError as e:
                logger.error("Error while processing favorite list %s (%s): %s", collection_id, directory, e.cause)
                result.failures.append(e)
            else:
                result.succeeded += 1

        logger.info(SEPARATOR)
        self.rounds_completed += 1
        self.last_result = result
        return result
