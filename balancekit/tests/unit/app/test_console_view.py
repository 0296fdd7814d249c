import io

from balancekit.app.console_view import ConsoleBalanceView
from balancekit.tests.unit.viewmodels.helpers import T1, make_vm
from balancekit.viewmodels import balance_format as fmt


def _view():
    vm, fetch, ui = make_vm()
    stream = io.StringIO()
    view = ConsoleBalanceView(vm, stream=stream, format_date=lambda when: "moments ago")
    return view, vm, fetch, ui, stream


def _lines(stream):
    return [line.split(" ", 1)[1] for line in stream.getvalue().splitlines()]


def test_bind_renders_current_state_once():
    view, _, _, _, stream = _view()

    view.bind()

    assert _lines(stream) == ["Balance -- [refresh: r]"]


def test_refresh_cycle_updates_fields_and_renders():
    view, vm, fetch, ui, stream = _view()
    view.bind()

    view.did_appear()
    assert view.fields["spinner"] is True
    assert view.fields["refresh_hidden"] is True
    assert view.fields["info"] == "Refreshing..."

    fetch.succeed(42.0, T1)
    ui.flush()

    assert view.fields["value"] == "$42.00"
    assert view.fields["spinner"] is False
    assert _lines(stream)[-1] == "Balance $42.00 [refresh: r] Last updated moments ago"


def test_failure_is_rendered_with_error_marker():
    view, _, fetch, ui, stream = _view()
    view.bind()
    view.did_appear()

    fetch.fail()
    ui.flush()

    assert view.fields["info_color"] == "red"
    assert _lines(stream)[-1].endswith("! Refresh failed. Tap refresh to try again.")


def test_commands_forward_lifecycle_signals():
    view, vm, _, _, stream = _view()
    view.bind()

    assert view.handle_command("b")
    assert vm.state.value.is_redacted is True
    assert view.fields["overlay_hidden"] is False
    assert "******" in _lines(stream)[-1]

    assert view.handle_command("foreground")
    assert vm.state.value.is_redacted is False
    assert view.fields["value_alpha"] == 1.0

    assert not view.handle_command("dance")


def test_close_stops_rendering():
    view, vm, _, _, stream = _view()
    view.bind()
    view.close()

    vm.will_resign_active()

    assert len(_lines(stream)) == 1
    assert vm.state.subscriber_count == 0


def test_redaction_dims_value_with_formatter_alpha():
    view, vm, _, _, _ = _view()
    view.bind()

    vm.will_resign_active()
    assert view.fields["value_alpha"] == fmt.value_alpha(vm.state.value)
    assert view.fields["value_alpha"] == fmt.REDACTED_VALUE_ALPHA

    vm.did_become_active()
    assert view.fields["value_alpha"] == 1.0
    assert view.fields["overlay_hidden"] is True
