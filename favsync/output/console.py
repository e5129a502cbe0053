# favsync Console Output
# Rich-based console output for the interactive commands

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from favsync.config.schema import SyncConfiguration
from favsync.notify.mailer import is_delivery_enabled
from favsync.sync.scheduler import RoundResult


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for configuration and sync results.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
        """
        self.verbose = verbose
        self._console = RichConsole(no_color=not colored)

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}", highlight=False, soft_wrap=True)

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}", highlight=False, soft_wrap=True)

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]", soft_wrap=True)

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]", soft_wrap=True)

    def print_config_summary(self, config_path: str, config: SyncConfiguration) -> None:
        """Print configuration summary."""
        notifications = "enabled" if config.smtp and is_delivery_enabled(config.smtp.sender_password) else "disabled"
        self._console.print(
            Panel(
                f"Config: {escape(config_path)}\n"
                f"Interval: {config.interval}s\n"
                f"Favorite lists: {len(config.favorite_list)}\n"
                f"Email alerts: {notifications}\n"
                f"fav client: {escape(config.client.binary)}",
                title="favsync Configuration",
                border_style="blue",
            )
        )

    def print_collections(self, config: SyncConfiguration) -> None:
        """Print the favorite list -> directory table."""
        if not config.favorite_list:
            self._console.print("[dim]No favorite lists configured[/dim]")
            return

        table = Table(show_header=True, header_style="bold")
        table.add_column("Favorite list", style="cyan")
        table.add_column("Directory")

        for collection_id, directory in config.collections():
            table.add_row(str(collection_id), escape(directory))

        self._console.print(table)

    def print_round_result(self, result: RoundResult) -> None:
        """Print the summary of one sync round."""
        for failure in result.failures:
            cause = escape(str(failure.cause))
            self._console.print(
                f"    [red]✗[/red] {failure.collection_id} ({escape(failure.directory)}) at {failure.step}: {cause}",
                highlight=False,
            )

        body = (
            f"Favorite lists: {result.succeeded}/{result.attempted} synced\n"
            f"Failures: {len(result.failures)}"
        )
        if result.success:
            self._console.print(
                Panel(f"[green]Round {result.round_number} completed[/green]\n{body}", title="Summary", border_style="green")
            )
        else:
            self._console.print(
                Panel(
                    f"[red]Round {result.round_number} completed with errors[/red]\n{body}",
                    title="Summary",
                    border_style="red",
                )
            )


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
