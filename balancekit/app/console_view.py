"""Text view that binds to ``BalanceVM`` and renders each change as a line."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import Dict, Optional, TextIO

from ..viewmodels import balance_format as fmt
from ..viewmodels.balance_format import DateFormatter
from ..viewmodels.balance_vm import BalanceVM
from ..viewmodels.observable import SubscriptionBag


class ConsoleBalanceView:
    """UI-only rendering: holds widget-like fields and prints them on change."""

    COMMANDS = {
        "r": "refresh",
        "refresh": "refresh",
        "b": "background",
        "background": "background",
        "f": "foreground",
        "foreground": "foreground",
    }

    def __init__(
        self,
        vm: BalanceVM,
        *,
        stream: Optional[TextIO] = None,
        format_date: DateFormatter = fmt.relative_date,
    ) -> None:
        self.vm = vm
        self.stream = stream or sys.stdout
        self.format_date = format_date
        self.fields: Dict[str, object] = {
            "refresh_hidden": False,
            "spinner": False,
            "value": fmt.PLACEHOLDER,
            "info": "",
            "info_color": "gray",
            "value_alpha": 1.0,
            "overlay_hidden": True,
        }
        self._bindings = SubscriptionBag()
        self._bound = False

    def bind(self) -> None:
        """Attach bindings and render the current state once."""
        if self._bound:
            return
        state = self.vm.state
        format_date = self.format_date
        self._bindings.add(state.observe(lambda s: s.is_refreshing, self._set_refreshing))
        self._bindings.add(state.observe(fmt.formatted_balance, lambda v: self._set("value", v)))
        self._bindings.add(
            state.observe(lambda s: fmt.info_text(s, format_date), lambda v: self._set("info", v))
        )
        self._bindings.add(state.observe(fmt.info_color, lambda v: self._set("info_color", v)))
        self._bindings.add(state.observe(fmt.value_alpha, lambda v: self._set("value_alpha", v)))
        self._bindings.add(state.observe(lambda s: s.is_redacted, self._set_overlay))
        self._bound = True
        # Registered last so every field above is current when it renders.
        self._bindings.add(state.subscribe(lambda _state: self.render()))

    def close(self) -> None:
        self._bindings.cancel_all()
        self._bound = False

    # ---- events forwarded to the view-model ----
    def did_appear(self) -> None:
        self.vm.view_did_appear()

    def handle_command(self, text: str) -> bool:
        """Forward a typed command. Returns ``False`` for unknown input."""
        command = self.COMMANDS.get(text.strip().lower())
        if command == "refresh":
            self.vm.refresh_button_was_tapped()
        elif command == "background":
            self.vm.will_resign_active()
        elif command == "foreground":
            self.vm.did_become_active()
        else:
            return False
        return True

    # ---- rendering ----
    def render_line(self) -> str:
        value = "******" if not self.fields["overlay_hidden"] else str(self.fields["value"])
        status = "[refreshing]" if self.fields["spinner"] else "[refresh: r]"
        info = str(self.fields["info"])
        if info and self.fields["info_color"] == "red":
            info = f"! {info}"
        stamp = datetime.now().strftime("%H:%M:%S")
        return f"{stamp} Balance {value} {status} {info}".rstrip()

    def render(self) -> None:
        if not self._bound:
            return
        self.stream.write(self.render_line() + "\n")
        self.stream.flush()

    def _set(self, key: str, value: object) -> None:
        self.fields[key] = value

    def _set_refreshing(self, refreshing: bool) -> None:
        self.fields["refresh_hidden"] = refreshing
        self.fields["spinner"] = refreshing

    def _set_overlay(self, redacted: bool) -> None:
        self.fields["overlay_hidden"] = not redacted


__all__ = ["ConsoleBalanceView"]
