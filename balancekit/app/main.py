# balancekit/app/main.py
from __future__ import annotations

import argparse
import logging
import sys
import threading
from typing import Optional, Sequence, TextIO

from ..adapters.storage_local import StorageLocal
from ..utils import logging as logging_utils
from ..viewmodels.settings_vm import SettingsVM
from .console_view import ConsoleBalanceView
from .controller import AppController
from .ui_queue import UiCallQueue

_log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="balancekit",
        description="Fetch and display the account balance.",
    )
    parser.add_argument("--url", help="Balance endpoint URL (overrides settings).")
    parser.add_argument("--timeout", type=int, help="Request timeout in seconds.")
    parser.add_argument("--mock", action="store_true", help="Use the offline balance service.")
    parser.add_argument(
        "--settings-dir",
        help="Directory holding user_settings.json. Settings are not persisted without it.",
    )
    parser.add_argument("--save-settings", action="store_true", help="Persist the effective settings.")
    parser.add_argument("--debug", action="store_true", help="Enable DEBUG logging.")
    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Read commands from stdin: r(efresh), b(ackground), f(oreground), q(uit).",
    )
    return parser


def load_settings(args: argparse.Namespace) -> SettingsVM:
    settings = SettingsVM()
    storage = StorageLocal(args.settings_dir) if args.settings_dir else None
    if storage is not None:
        payload = storage.load_user_settings()
        if payload:
            settings.apply_dict(payload)
            _log.debug("Loaded settings from %s", storage.settings_path)
        settings.on_save = storage.save_user_settings
    if args.url:
        settings.balance_url = args.url
    if args.timeout is not None:
        settings.request_timeout_s = args.timeout
    if args.debug:
        settings.set_debug_logging(True)
    if not settings.is_valid():
        raise ValueError(f"Invalid settings: {settings.to_dict()}")
    if args.save_settings and storage is not None:
        settings.cmd_save()
    return settings


def run_once(controller: AppController, ui: UiCallQueue, view: ConsoleBalanceView) -> int:
    vm = controller.vm
    view.bind()
    view.did_appear()
    timeout = controller.settings_vm.request_timeout_s * (controller.settings_vm.retries + 1) + 5
    finished = ui.run_until(lambda: vm.state.value.is_idle, timeout_s=timeout)
    if not finished:
        _log.error("Balance refresh did not finish within %ss", timeout)
        return 1
    return 1 if vm.state.value.did_fail else 0


def run_interactive(
    controller: AppController,
    ui: UiCallQueue,
    view: ConsoleBalanceView,
    stdin: TextIO,
) -> int:
    done = threading.Event()

    def _on_line(line: str) -> None:
        text = line.strip()
        if text.lower() in {"q", "quit", "exit"}:
            done.set()
            return
        if text and not view.handle_command(text):
            view.stream.write(f"Unknown command '{text}'. Use r, b, f or q.\n")

    def _reader() -> None:
        for line in stdin:
            ui.post(lambda line=line: _on_line(line))
        ui.post(done.set)

    view.bind()
    view.did_appear()
    threading.Thread(target=_reader, name="stdin-reader", daemon=True).start()
    ui.run_until(done.is_set)
    return 1 if controller.vm.state.value.did_fail else 0


def main(argv: Optional[Sequence[str]] = None, *, stdin: Optional[TextIO] = None) -> int:
    args = build_parser().parse_args(argv)
    logging_utils.configure_root()
    try:
        settings = load_settings(args)
    except ValueError as exc:
        _log.error("%s", exc)
        return 2
    level = logging_utils.apply_preferences(settings.debug_logging)
    _log.debug("Log level %s", logging_utils.level_name(level))

    ui = UiCallQueue()
    controller = AppController(settings, post=ui.post, use_mock=args.mock)
    view = ConsoleBalanceView(controller.vm)
    try:
        if args.interactive:
            return run_interactive(controller, ui, view, stdin or sys.stdin)
        return run_once(controller, ui, view)
    finally:
        view.close()
        controller.shutdown()


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
