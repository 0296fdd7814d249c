from __future__ import annotations

import io
from datetime import datetime, timezone

from balancekit.adapters.api_errors import ApiServerError
from balancekit.adapters.balance_mock import BalanceServiceMock
from balancekit.app import main as app_main
from balancekit.app.console_view import ConsoleBalanceView
from balancekit.app.controller import AppController
from balancekit.app.ui_queue import UiCallQueue
from balancekit.domain.entities import BalanceResponse, ViewState
from balancekit.viewmodels.settings_vm import SettingsVM

T1 = datetime(2021, 6, 2, 10, 0, 0, tzinfo=timezone.utc)


def _controller(service: BalanceServiceMock) -> tuple[AppController, UiCallQueue]:
    ui = UiCallQueue()
    return AppController(SettingsVM(), post=ui.post, service=service), ui


def test_appear_then_fail_then_manual_retry_succeeds():
    service = BalanceServiceMock(
        outcomes=[ApiServerError("down", status=503), BalanceResponse(balance=42.0, date=T1)]
    )
    controller, ui = _controller(service)
    vm = controller.vm
    history: list[ViewState] = []
    vm.state.subscribe(history.append)
    try:
        vm.view_did_appear()
        assert ui.run_until(lambda: vm.state.value.is_idle, timeout_s=5)
        assert vm.state.value.did_fail is True
        assert vm.last_error.code == "SERVER_ERROR"

        vm.refresh_button_was_tapped()
        assert vm.state.value.did_fail is False
        assert ui.run_until(lambda: vm.state.value.is_idle, timeout_s=5)
    finally:
        controller.shutdown()

    assert vm.state.value == ViewState(balance=42.0, fetched_at=T1)
    assert service.calls == 2
    assert [(s.is_refreshing, s.did_fail) for s in history] == [
        (False, False),
        (True, False),
        (False, True),
        (True, False),
        (False, False),
    ]


def test_console_view_renders_through_real_executor():
    service = BalanceServiceMock(outcomes=[BalanceResponse(balance=99.5, date=T1)])
    controller, ui = _controller(service)
    stream = io.StringIO()
    view = ConsoleBalanceView(controller.vm, stream=stream, format_date=lambda when: "earlier")
    try:
        view.bind()
        view.did_appear()
        assert ui.run_until(lambda: controller.vm.state.value.is_idle, timeout_s=5)
    finally:
        view.close()
        controller.shutdown()

    assert stream.getvalue().splitlines()[-1].endswith("Balance $99.50 [refresh: r] Last updated earlier")


def test_cli_mock_run_succeeds_and_persists_settings(tmp_path, capsys):
    code = app_main.main(
        ["--mock", "--settings-dir", str(tmp_path), "--save-settings", "--timeout", "3"]
    )

    assert code == 0
    assert "Balance $1,234.50" in capsys.readouterr().out
    assert (tmp_path / "user_settings.json").exists()


def test_cli_rejects_invalid_url():
    assert app_main.main(["--mock", "--url", "not-a-url"]) == 2


def test_cli_interactive_commands(capsys):
    stdin = io.StringIO("b\nf\nwhat\nq\n")

    code = app_main.main(["--mock", "--interactive"], stdin=stdin)

    out = capsys.readouterr().out
    assert code == 0
    assert "******" in out
    assert "Unknown command 'what'" in out
