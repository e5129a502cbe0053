# favsync Remote Module
# Wrapper around the external fav client

from favsync.remote.client import FavClient, RemoteError

__all__ = [
    "FavClient",
    "RemoteError",
]
