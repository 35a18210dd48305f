#!/usr/bin/env python3
"""
Integration tests for pipeline CLI.

Runs the commands end to end against temporary journal checkouts. git is
replaced by a stub so no network or real repository is needed.
"""
import subprocess

import pytest
from click.testing import CliRunner

from phlog.pipeline.cli import cli

from conftest import entry_text


@pytest.fixture
def runner():
    """Create Click test runner."""
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path):
    """Invoke the CLI with logs kept below tmp_path."""
    def _invoke(*args):
        return runner.invoke(cli, ["--log-dir", str(tmp_path / "logs"), *args])
    return _invoke


@pytest.fixture
def journal(make_repo):
    """Checkout with entries in two consecutive years."""
    return make_repo(
        ("2023", "12", "27", entry_text(
            "2023-12-27",
            end="2023-12-30",
            topic="37C3",
            body="Wir waren auf dem [[https://events.ccc.de|Congress]].\n",
            media=("congress.jpg",),
        )),
        ("2024", "01", "09", entry_text(
            "2024-01-09",
            topic="Plenum",
            body="Siehe [[:plenum:2024-01|Protokoll]].\n",
        )),
    )


@pytest.fixture
def fake_git(monkeypatch):
    """Replace git with a stub answering every command successfully."""
    calls = []

    def _run(command, **kwargs):
        calls.append(command)
        return subprocess.CompletedProcess(command, 0, stdout="Already up to date.\n", stderr="")

    monkeypatch.setattr(subprocess, "run", _run)
    return calls


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self, runner):
        """Test that CLI help message works."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Kitchen log to gopher phlog pipeline" in result.output

    @pytest.mark.parametrize("command", ["sync", "check", "build", "run-all"])
    def test_command_help(self, runner, command):
        """Every command has help."""
        result = runner.invoke(cli, [command, "--help"])
        assert result.exit_code == 0

    def test_build_help_lists_options(self, runner):
        """Output options are available on build."""
        result = runner.invoke(cli, ["build", "--help"])
        for option in ("--repo-dir", "--output-dir", "--media-url", "--template"):
            assert option in result.output


class TestCheck:
    """Test the check command."""

    def test_reports_counts(self, invoke, journal):
        """Entries and months are counted without writing pages."""
        result = invoke("check", "-r", str(journal))
        assert result.exit_code == 0
        assert "2 entries across 2 months" in result.output

    def test_parse_error_exits(self, invoke, make_repo):
        """A malformed entry fails the parse stage."""
        root = make_repo(("2023", "12", "01", "BEGIN: 2023-12-01\nno body"))
        result = invoke("check", "-r", str(root))
        assert result.exit_code == 1
        assert "[parse] MalformedEntry" in result.output

    def test_non_utf8_entry_exits(self, invoke, make_repo):
        """A Latin-1 encoded entry fails the parse stage cleanly."""
        root = make_repo()
        path = root / "2023" / "12" / "02"
        path.parent.mkdir(parents=True)
        path.write_bytes("BEGIN: 2023-12-02\nTOPIC: Lötworkshop\n\nbody\n".encode("latin-1"))
        result = invoke("build", "-r", str(root), "-g", str(root.parent / "gopher"))
        assert result.exit_code == 1
        assert "[parse] MalformedEntry" in result.output
        assert "not valid UTF-8" in result.output

    def test_second_blank_line_exits(self, invoke, make_repo):
        """An entry body with a further blank line fails the parse stage."""
        root = make_repo(("2023", "12", "01", entry_text("2023-12-01", body="one\n\ntwo\n")))
        result = invoke("check", "-r", str(root))
        assert result.exit_code == 1
        assert "[parse] MalformedEntry" in result.output

    def test_bad_date_exits(self, invoke, make_repo):
        """An invalid date fails the parse stage."""
        root = make_repo(("2023", "12", "01", entry_text("2023-12-99")))
        result = invoke("check", "-r", str(root))
        assert result.exit_code == 1
        assert "[parse] DateParseError" in result.output


class TestBuild:
    """Test the build command."""

    def test_writes_month_pages(self, invoke, journal, tmp_path):
        """Each month gets an index.gph with footnotes."""
        output = tmp_path / "gopher"
        result = invoke(
            "build", "-r", str(journal), "-g", str(output),
            "-i", "https://media.example/",
        )
        assert result.exit_code == 0, result.output
        assert "2 entries, 2 pages written" in result.output

        december = (output / "2023" / "12-December" / "index.gph").read_text(encoding="utf-8")
        assert "Wednesday, 27. December 2023 bis Saturday, 30. December 2023" in december
        assert "Wir waren auf dem [Congress][LINK:1]." in december
        assert "[h|[LINK 1]: Congress|URL:https://events.ccc.de|" in december
        assert "[h|[BILD 1]|URL:https://media.example/congress.jpg|" in december

        january = (output / "2024" / "01-January" / "index.gph").read_text(encoding="utf-8")
        assert "Tuesday, 9. January 2024" in january
        assert "?id=plenum:2024-01|" in january

    def test_rebuild_leaves_pages_unchanged(self, invoke, journal, tmp_path):
        """A second identical build writes nothing."""
        output = tmp_path / "gopher"
        invoke("build", "-r", str(journal), "-g", str(output))
        result = invoke("build", "-r", str(journal), "-g", str(output))
        assert result.exit_code == 0
        assert "0 pages written, 2 unchanged" in result.output

    def test_config_file(self, invoke, journal, tmp_path):
        """Values from the config file reach the pages."""
        output = tmp_path / "gopher"
        config = tmp_path / "phlog.yml"
        config.write_text(
            f"repo_dir: {journal}\noutput_dir: {output}\n"
            "gopher_host: gopher.example\ngopher_port: 7070\n",
            encoding="utf-8",
        )
        result = invoke("-c", str(config), "build")
        assert result.exit_code == 0, result.output
        page = (output / "2024" / "01-January" / "index.gph").read_text(encoding="utf-8")
        assert "|gopher.example|7070]" in page

    def test_custom_template(self, invoke, journal, tmp_path):
        """A template path option replaces the bundled template."""
        template = tmp_path / "simple.gph"
        template.write_text("{{ page.month }} {{ page.year }}\n", encoding="utf-8")
        output = tmp_path / "gopher"
        result = invoke("build", "-r", str(journal), "-g", str(output), "-t", str(template))
        assert result.exit_code == 0, result.output
        assert (output / "2023" / "12-December" / "index.gph").read_text(
            encoding="utf-8"
        ) == "12-December 2023\n"

    def test_missing_template_exits(self, invoke, journal, tmp_path):
        """A missing template fails the render stage."""
        result = invoke(
            "build", "-r", str(journal), "-g", str(tmp_path / "gopher"),
            "-t", str(tmp_path / "missing.gph"),
        )
        assert result.exit_code == 1
        assert "[render] RenderError" in result.output

    def test_invalid_config_exits(self, invoke, tmp_path):
        """Broken config files fail before any stage runs."""
        config = tmp_path / "phlog.yml"
        config.write_text("unknown_key: 1\n", encoding="utf-8")
        result = invoke("-c", str(config), "build")
        assert result.exit_code == 1
        assert "[config] ConfigError" in result.output


class TestSyncAndRunAll:
    """Test commands touching git."""

    def test_sync_existing_checkout(self, invoke, journal, fake_git):
        """sync resets and pulls an existing checkout."""
        (journal / ".git").mkdir()
        result = invoke("sync", "-r", str(journal), "-u", "https://example.org/log.git")
        assert result.exit_code == 0, result.output
        assert "Getting repository https://example.org/log.git" in result.output
        assert "Repository already up to date" in result.output
        assert [c[1] for c in fake_git] == ["reset", "pull"]

    def test_sync_failure_exits(self, invoke, journal, monkeypatch):
        """A failing git command fails the fetch stage."""
        def _fail(command, **kwargs):
            raise subprocess.CalledProcessError(1, command, stderr="fatal: no remote")

        monkeypatch.setattr(subprocess, "run", _fail)
        (journal / ".git").mkdir()
        result = invoke("sync", "-r", str(journal))
        assert result.exit_code == 1
        assert "[fetch] SyncError" in result.output

    def test_run_all(self, invoke, journal, fake_git, tmp_path):
        """run-all syncs, parses and renders."""
        (journal / ".git").mkdir()
        output = tmp_path / "gopher"
        result = invoke("run-all", "-r", str(journal), "-g", str(output))
        assert result.exit_code == 0, result.output
        assert (output / "2023" / "12-December" / "index.gph").is_file()
        assert result.output.rstrip().endswith("Done")

    def test_run_all_clones_missing_checkout(self, invoke, fake_git, tmp_path):
        """Without a checkout run-all clones first."""
        repo = tmp_path / "fresh"
        result = invoke("run-all", "-r", str(repo), "-g", str(tmp_path / "gopher"))
        assert fake_git[0][:2] == ["git", "clone"]
        assert result.exit_code == 1
        assert "[parse]" in result.output
