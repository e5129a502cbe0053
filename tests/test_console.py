# Tests for favsync.output.console
# Rich-based console output

from io import StringIO

from rich.console import Console as RichConsole

from favsync.config.schema import SyncConfiguration
from favsync.output.console import Console, create_console
from favsync.remote.client import RemoteError
from favsync.sync.pipeline import PipelineError
from favsync.sync.scheduler import RoundResult


def _make_console(verbose: bool = False) -> Console:
    """Create a console with captured output."""
    console = Console(verbose=verbose, colored=False)
    console._console = RichConsole(file=StringIO(), no_color=True, width=120)
    return console


def _get_output(console: Console) -> str:
    """Get captured output from console."""
    console._console.file.seek(0)
    return console._console.file.read()


class TestConsoleBasic:
    """Tests for basic console methods."""

    def test_print(self):
        c = _make_console()
        c.print("hello world")
        assert "hello world" in _get_output(c)

    def test_print_error(self):
        c = _make_console()
        c.print_error("something failed")
        output = _get_output(c)
        assert "Error:" in output
        assert "something failed" in output

    def test_print_error_keeps_brackets(self):
        c = _make_console()
        c.print_error("[favsync] Bilibili session expired")
        assert "[favsync] Bilibili session expired" in _get_output(c)

    def test_print_warning(self):
        c = _make_console()
        c.print_warning("be careful")
        output = _get_output(c)
        assert "Warning:" in output
        assert "be careful" in output

    def test_print_success(self):
        c = _make_console()
        c.print_success("all good")
        assert "all good" in _get_output(c)

    def test_print_info(self):
        c = _make_console()
        c.print_info("fyi")
        assert "fyi" in _get_output(c)


class TestConfigOutput:
    """Tests for configuration display."""

    def test_config_summary(self, sync_config: SyncConfiguration):
        c = _make_console()
        c.print_config_summary("/etc/favsync.yaml", sync_config)
        output = _get_output(c)
        assert "/etc/favsync.yaml" in output
        assert "Interval: 60s" in output
        assert "Favorite lists: 2" in output
        assert "Email alerts: enabled" in output

    def test_config_summary_alerts_disabled(self, sample_config: dict):
        sample_config["smtp"]["sender_password"] = "null"
        c = _make_console()
        c.print_config_summary("config.yaml", SyncConfiguration.model_validate(sample_config))
        assert "Email alerts: disabled" in _get_output(c)

    def test_collections_table(self, sync_config: SyncConfiguration):
        c = _make_console()
        c.print_collections(sync_config)
        output = _get_output(c)
        assert "100" in output
        assert "200" in output

    def test_no_collections(self, sample_config: dict):
        sample_config["favorite_list"] = {}
        c = _make_console()
        c.print_collections(SyncConfiguration.model_validate(sample_config))
        assert "No favorite lists configured" in _get_output(c)

    def test_bracketed_directory_shown_verbatim(self, sample_config: dict):
        sample_config["favorite_list"] = {"100": "./videos/[/music]", "200": "[UP] list"}
        c = _make_console()
        c.print_collections(SyncConfiguration.model_validate(sample_config))
        output = _get_output(c)
        assert "./videos/[/music]" in output
        assert "[UP] list" in output


class TestRoundResult:
    """Tests for round summary display."""

    def test_successful_round(self):
        c = _make_console()
        c.print_round_result(RoundResult(round_number=2, attempted=3, succeeded=3))
        output = _get_output(c)
        assert "Round 2 completed" in output
        assert "3/3 synced" in output

    def test_round_with_failures(self):
        c = _make_console()
        failure = PipelineError(100, "./a", "activate", RemoteError("denied"))
        c.print_round_result(RoundResult(round_number=1, attempted=2, succeeded=1, failures=[failure]))
        output = _get_output(c)
        assert "completed with errors" in output
        assert "100 (./a) at activate" in output
        assert "Failures: 1" in output

    def test_failure_with_bracketed_path_and_stderr(self):
        c = _make_console()
        cause = RemoteError("fav command failed: fav pull", stderr="[error] rate limited")
        failure = PipelineError(1, "./videos/[/music]", "pull", cause)
        c.print_round_result(RoundResult(round_number=1, attempted=1, succeeded=0, failures=[failure]))
        output = _get_output(c)
        assert "1 (./videos/[/music]) at pull" in output
        assert "[error] rate limited" in output


def test_create_console():
    c = create_console(verbose=True, colored=False)
    assert isinstance(c, Console)
    assert c.verbose is True
