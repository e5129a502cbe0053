# favsync Collection Pipeline
# Fixed activate -> fetch -> pull -> deactivate sequence for one favorite list

import logging
from pathlib import Path

from favsync.remote.client import FavClient, RemoteError
from favsync.sync.directory import DirectoryChangeError, ScopedDirectory

logger = logging.getLogger(__name__)

STEP_ENTER = "enter_directory"
STEP_ACTIVATE = "activate"
STEP_REFRESH = "refresh"
STEP_PULL = "pull"
STEP_DEACTIVATE = "deactivate"


class PipelineError(Exception):
    """Failure of one favorite list; isolated from the rest of the round."""

    def __init__(self, collection_id: int, directory: str | Path, step: str, cause: Exception):
        self.collection_id = collection_id
        self.directory = str(directory)
        self.step = step
        self.cause = cause
        super().__init__(f"Favorite list {collection_id} ({self.directory}) failed at {step}: {cause}")


class CollectionSyncPipeline:
    """
    Syncs one favorite list into its directory.

    The steps run in order inside a ScopedDirectory; the first failure
    aborts the rest. Deactivation only runs once activate, refresh and pull
    have succeeded, so a failure can leave the list activated until the
    next round activates it again.
    """

    def __init__(self, client: FavClient):
        self.client = client

    def run(self, collection_id: int, directory: str | Path) -> None:
        """
        Sync a favorite list.

        Args:
            collection_id: Favorite list id.
            directory: Local target directory.

        Raises:
            PipelineError: Wrapping the first failing step.
        """
        logger.info("--- Processing favorite list %s (%s) ---", collection_id, directory)

        step = STEP_ENTER
        activated = False
        try:
            with ScopedDirectory(directory):
                step = STEP_ACTIVATE
                logger.info("  -> activating favorite list %s", collection_id)
                self.client.activate_collection(collection_id)
                activated = True

                step = STEP_REFRESH
                logger.info("  -> checking for updates...")
                self.client.refresh_metadata(prune=False)

                step = STEP_PULL
                logger.info("  -> pulling videos...")
                self.client.pull_content()

                step = STEP_DEACTIVATE
                logger.info("  -> deactivating favorite list %s", collection_id)
                self.client.deactivate_collection(collection_id)
                activated = False
        except (DirectoryChangeError, RemoteError) as e:
            if activated:
                logger.warning("Favorite list %s left activated after failure at %s", collection_id, step)
            raise PipelineError(collection_id, directory, step, e) from e

        logger.info("--- Favorite list %s done ---", collection_id)
