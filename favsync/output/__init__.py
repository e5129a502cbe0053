# favsync Output Module
# Rich console output

from favsync.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
