"""Tests for CLI module."""

import logging

import pytest
from unittest.mock import patch, AsyncMock

from dutybridge.composition_root import create_incident_provider, create_service_provider
from dutybridge.infrastructure.plugin import INCIDENT_HANDLERS, SERVICE_HANDLERS
from dutybridge.presentation.cli.cli import async_main, main


class TestCLIHelp:
    @pytest.mark.asyncio
    async def test_no_command_prints_help(self, capsys):
        code = await async_main([])
        captured = capsys.readouterr()
        assert code == 2
        assert "incident-plugin" in captured.err
        assert captured.out == ""

    @pytest.mark.asyncio
    async def test_help_flag(self):
        with pytest.raises(SystemExit, match="0"):
            await async_main(["--help"])

    @pytest.mark.asyncio
    async def test_unknown_command(self):
        with pytest.raises(SystemExit, match="2"):
            await async_main(["alert-plugin"])


class TestPluginCommands:
    @pytest.mark.asyncio
    async def test_incident_plugin_serves_incident_methods(self, tmp_path):
        with patch("dutybridge.presentation.cli.cli.run_plugin", new_callable=AsyncMock) as run:
            code = await async_main(["--settings", str(tmp_path / "none.json"), "incident-plugin"])

        assert code == 0
        host = run.await_args.args[0]
        assert host.methods == sorted(INCIDENT_HANDLERS)
        assert host._factory is create_incident_provider

    @pytest.mark.asyncio
    async def test_service_plugin_serves_service_methods(self, tmp_path):
        with patch("dutybridge.presentation.cli.cli.run_plugin", new_callable=AsyncMock) as run:
            code = await async_main(["--settings", str(tmp_path / "none.json"), "service-plugin"])

        assert code == 0
        host = run.await_args.args[0]
        assert host.methods == sorted(SERVICE_HANDLERS)
        assert host._factory is create_service_provider

    @pytest.mark.asyncio
    async def test_debug_flag_sets_level(self, tmp_path):
        with patch("dutybridge.presentation.cli.cli.run_plugin", new_callable=AsyncMock):
            await async_main(["--debug", "--settings", str(tmp_path / "none.json"), "incident-plugin"])
        assert logging.getLogger("dutybridge").level == logging.DEBUG

    @pytest.mark.asyncio
    async def test_settings_level_used_without_flags(self, tmp_path):
        settings = tmp_path / "dutybridge.json"
        settings.write_text('{"log_level": "error"}')
        with patch("dutybridge.presentation.cli.cli.run_plugin", new_callable=AsyncMock):
            await async_main(["--settings", str(settings), "incident-plugin"])
        assert logging.getLogger("dutybridge").level == logging.ERROR

    @pytest.mark.asyncio
    async def test_insecure_telemetry_rejected(self, tmp_path, capsys):
        settings = tmp_path / "dutybridge.json"
        settings.write_text('{"telemetry": {"endpoint": "http://otel.example.com:4317"}}')
        with patch("dutybridge.presentation.cli.cli.run_plugin", new_callable=AsyncMock) as run:
            code = await async_main(["--settings", str(settings), "incident-plugin"])

        assert code == 1
        run.assert_not_awaited()
        assert "insecure=True" in capsys.readouterr().err

    @pytest.mark.asyncio
    async def test_plugin_failure_exit_code(self, tmp_path, capsys):
        failing = AsyncMock(side_effect=OSError("stdin closed"))
        with patch("dutybridge.presentation.cli.cli.run_plugin", failing):
            code = await async_main(["--settings", str(tmp_path / "none.json"), "service-plugin"])

        assert code == 1
        assert "stdin closed" in capsys.readouterr().err


class TestMain:
    def test_exit_code(self, tmp_path):
        with patch("dutybridge.presentation.cli.cli.run_plugin", new_callable=AsyncMock), \
             pytest.raises(SystemExit) as exc_info:
            main(["--settings", str(tmp_path / "none.json"), "incident-plugin"])
        assert exc_info.value.code == 0
