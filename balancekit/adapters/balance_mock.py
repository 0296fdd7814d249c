from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Union

from balancekit.domain.entities import BalanceResponse
from balancekit.domain.ports import BalanceService

Outcome = Union[BalanceResponse, Exception]


@dataclass
class BalanceServiceMock(BalanceService):
    """Offline substitute for ``BalanceRestAdapter`` with scripted outcomes.

    Outcomes are consumed in order; an exception outcome is raised. Once the
    script runs out the last response is repeated, or a fresh one is produced
    when no response was ever scripted.
    """

    outcomes: List[Outcome] = field(default_factory=list)
    delay_s: float = 0.0
    calls: int = 0

    def __post_init__(self) -> None:
        self._last: Optional[BalanceResponse] = None

    def refresh_balance(self) -> BalanceResponse:
        self.calls += 1
        if self.delay_s > 0:
            time.sleep(self.delay_s)
        if self.outcomes:
            outcome = self.outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            self._last = outcome
            return outcome
        if self._last is None:
            self._last = BalanceResponse(
                balance=1234.5,
                date=datetime.now(timezone.utc).replace(microsecond=0),
            )
        return self._last


__all__ = ["BalanceServiceMock"]
