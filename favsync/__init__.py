"""favsync - periodic Bilibili favorite-list synchronization.

Drives the external ``fav`` client on a fixed interval, syncing each
configured favorite list into its own local directory and emailing an
alert when the session can no longer be used.
"""

__version__ = "1.0.0"
__author__ = "favsync contributors"

__all__ = [
    "__version__",
    "SyncConfiguration",
    "load_config",
    "FavClient",
    "RemoteError",
    "NotificationDispatcher",
    "ScopedDirectory",
    "SessionGate",
    "CollectionSyncPipeline",
    "SyncScheduler",
    "RoundResult",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name == "SyncConfiguration":
        from favsync.config.schema import SyncConfiguration

        return SyncConfiguration
    if name == "load_config":
        from favsync.config.loader import load_config

        return load_config
    if name in ("FavClient", "RemoteError"):
        from favsync.remote import client

        return getattr(client, name)
    if name == "NotificationDispatcher":
        from favsync.notify.mailer import NotificationDispatcher

        return NotificationDispatcher
    if name in ("ScopedDirectory", "SessionGate", "CollectionSyncPipeline", "SyncScheduler", "RoundResult"):
        from favsync import sync

        return getattr(sync, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
