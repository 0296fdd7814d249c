"""Adapter and use-case wiring for the balance app runtime.

This module owns construction of the balance service adapter, the fetch
executor, the ``FetchBalance`` use case and the ``BalanceVM`` from values in
:class:`balancekit.viewmodels.settings_vm.SettingsVM`.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from ..adapters.balance_mock import BalanceServiceMock
from ..adapters.balance_rest import BalanceRestAdapter
from ..domain.ports import BalanceService
from ..usecases.fetch_balance import FetchBalance
from ..viewmodels.balance_vm import BalanceVM, PostFn
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and own runtime adapters, use cases and the balance view-model.

    Call chain:
        ``balancekit.app.main.run`` creates one instance, reads ``vm`` to bind
        the view, and calls ``shutdown`` on exit.
    """

    def __init__(
        self,
        settings_vm: SettingsVM,
        *,
        post: PostFn,
        service: Optional[BalanceService] = None,
        use_mock: bool = False,
    ) -> None:
        """Build dependencies from settings.

        Args:
            settings_vm: Settings state with the balance URL and timeouts.
            post: Schedules a callable on the UI thread.
            service: Explicit service, mainly for tests. Overrides ``use_mock``.
            use_mock: Use the offline ``BalanceServiceMock``.
        """
        self._log = logging.getLogger(__name__)
        self.settings_vm = settings_vm
        if service is None:
            service = BalanceServiceMock(delay_s=0.3) if use_mock else self._build_rest_adapter()
        self.service = service
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="balance-fetch")
        self.uc_fetch_balance = FetchBalance(service=self.service, executor=self.executor)
        self.vm = BalanceVM(self.uc_fetch_balance, post=post)
        self._log.debug("Balance service: %s", type(self.service).__name__)

    def _build_rest_adapter(self) -> BalanceRestAdapter:
        return BalanceRestAdapter(
            self.settings_vm.balance_url,
            api_key=self.settings_vm.api_key or None,
            request_timeout_s=self.settings_vm.request_timeout_s,
            retries=self.settings_vm.retries,
        )

    def shutdown(self) -> None:
        """Close the view-model and wait for any running fetch to finish."""
        self.vm.close()
        self.executor.shutdown(wait=True)


__all__ = ["AppController"]
