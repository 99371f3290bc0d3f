"""Tests for the command-line entry point."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from sysstatus.health.engine import Report, Status
from sysstatus.health.monitor import RunResult
from sysstatus.health.store import PersistedState
from sysstatus.health.summary import build_alert
from sysstatus.main import build_parser, main
from sysstatus.notifications import ConsoleChannel, MailChannel, Output


class TestParser:
    @pytest.mark.parametrize("value,expected", [("mail", Output.MAIL), ("stdout", Output.STDOUT)])
    def test_valid_outputs(self, value: str, expected: Output) -> None:
        assert build_parser().parse_args(["--output", value]).output is expected

    @pytest.mark.parametrize("argv", [["--output", "pager"], ["--output", "MAIL"], []])
    def test_invalid_output_is_fatal(self, argv: list[str], capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(argv)
        assert exc_info.value.code == 2

    def test_error_message(self, capsys) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--output", "pager"])
        assert "valid outputs are `mail` and `stdout`" in capsys.readouterr().err


def _result(alert: bool) -> RunResult:
    reports = [("disk", Report(Status.CRITICAL if alert else Status.NOMINAL, "disk"))]
    return RunResult(
        reports=reports,
        should_alert=alert,
        state=PersistedState(["disk"]),
        alert=build_alert([r for _, r in reports]) if alert else None,
        persisted=True,
        delivered=alert,
    )


class TestMain:
    @patch("sysstatus.main.HealthMonitor")
    def test_selects_console_channel(self, mock_monitor_cls) -> None:
        mock_monitor_cls.return_value.run_once.return_value = _result(alert=False)
        main(["--output", "stdout"])
        channel = mock_monitor_cls.call_args.kwargs["channel"]
        assert isinstance(channel, ConsoleChannel)

    @patch("sysstatus.main.HealthMonitor")
    def test_selects_mail_channel(self, mock_monitor_cls) -> None:
        mock_monitor_cls.return_value.run_once.return_value = _result(alert=True)
        main(["--output", "mail"])
        channel = mock_monitor_cls.call_args.kwargs["channel"]
        assert isinstance(channel, MailChannel)

    @patch("sysstatus.main.HealthMonitor")
    def test_bad_output_never_runs(self, mock_monitor_cls) -> None:
        with pytest.raises(SystemExit):
            main(["--output", "carrier-pigeon"])
        mock_monitor_cls.assert_not_called()

    def test_end_to_end_stdout(self, tmp_path, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sysstatus.health.store.settings.persistence_path", str(tmp_path / "state.json"))
        failing = MagicMock()
        failing.report.side_effect = OSError("no bus")
        checks = [("failed_units", failing)]
        with patch("sysstatus.health.monitor.default_checks", return_value=checks):
            main(["--output", "stdout"])
        out = capsys.readouterr().out
        assert out.startswith("[!] ")
        assert "1 warning, 0 nominal" in out
        assert "- Error: OSError: no bus" in out
        assert (tmp_path / "state.json").read_text().strip() == '{\n  "failed_units": "warning"\n}'
