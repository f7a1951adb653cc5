"""Integration tests for the convex-typegen CLI."""

import json

from click.testing import CliRunner

from convex_typegen import __version__
from convex_typegen.cli import cli
from convex_typegen.utils.exit_codes import ExitCodes


def test_version():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands():
    runner = CliRunner()
    result = runner.invoke(cli, ["-h"])
    assert result.exit_code == 0
    for command in ("generate", "scan", "watch"):
        assert command in result.output


def test_generate_options():
    runner = CliRunner()
    result = runner.invoke(cli, ["generate", "--help"])
    assert result.exit_code == 0
    for option in ("--root", "--out", "--convex-dir", "--import-path", "--no-hooks"):
        assert option in result.output


class TestGenerateCommand:
    def test_writes_types(self, convex_project):
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--root", str(convex_project)])
        assert result.exit_code == ExitCodes.SUCCESS, result.output
        assert "WRITTEN" in result.output
        assert (convex_project / "src" / "types" / "convex.ts").is_file()

    def test_second_run_reports_unchanged(self, convex_project):
        runner = CliRunner()
        runner.invoke(cli, ["generate", "--root", str(convex_project)])
        result = runner.invoke(cli, ["generate", "--root", str(convex_project)])
        assert result.exit_code == ExitCodes.SUCCESS
        assert "UNCHANGED" in result.output

    def test_custom_output_and_no_hooks(self, convex_project):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["generate", "--root", str(convex_project), "--out", "types/api.ts", "--no-hooks", "--quiet"],
        )
        assert result.exit_code == ExitCodes.SUCCESS, result.output
        content = (convex_project / "types" / "api.ts").read_text(encoding="utf-8")
        assert "export type GetCurrentArgs" in content
        assert "useQuery" not in content

    def test_missing_marker_exits_skipped(self, convex_project):
        (convex_project / "convex" / "_generated" / "dataModel.d.ts").unlink()
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--root", str(convex_project)])
        assert result.exit_code == ExitCodes.SKIPPED
        assert "SKIPPED" in result.output
        assert not (convex_project / "src").exists()

    def test_write_failure_exits_write_failed(self, convex_project):
        (convex_project / "blocker").write_text("")
        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--root", str(convex_project), "--out", "blocker/x.ts"])
        assert result.exit_code == ExitCodes.WRITE_FAILED
        assert "ERROR" in result.output

    def test_unexpected_error_logged_under_root(self, convex_project, tmp_path, monkeypatch):
        def boom(config):
            raise RuntimeError("renderer exploded")

        monkeypatch.setattr("convex_typegen.commands.generate.generate_types", boom)
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)

        runner = CliRunner()
        result = runner.invoke(cli, ["generate", "--root", str(convex_project)])

        assert result.exit_code == 1
        assert "renderer exploded" in result.output
        error_log = convex_project / ".convex-typegen" / "error.log"
        assert error_log.is_file()
        assert "RuntimeError: renderer exploded" in error_log.read_text(encoding="utf-8")
        assert not (elsewhere / ".convex-typegen").exists()


class TestScanCommand:
    def test_json_output(self, convex_project):
        runner = CliRunner()
        result = runner.invoke(cli, ["scan", "--root", str(convex_project), "--json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["tables"] == ["users", "articles"]
        assert [f["name"] for f in data["functions"]][-1] == "users/getCurrent"
        assert not (convex_project / "src").exists()

    def test_table_output(self, convex_project):
        runner = CliRunner()
        result = runner.invoke(cli, ["scan", "--root", str(convex_project)])
        assert result.exit_code == 0, result.output
        assert "TABLES" in result.output
        assert "FUNCTIONS" in result.output
        assert "users, articles" in result.output

    def test_missing_convex_dir(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["scan", "--root", str(tmp_path)])
        assert result.exit_code == ExitCodes.SKIPPED


def test_watch_requires_convex_dir(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["watch", "--root", str(tmp_path)])
    assert result.exit_code == ExitCodes.SKIPPED
