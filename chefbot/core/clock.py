"""Time source injected into the runtime so handlers stay testable."""

from __future__ import annotations

import time
from datetime import datetime
from typing import Protocol


class Clock(Protocol):
    def millis(self) -> int:
        """Monotonic milliseconds, used for cooldowns and uptime."""
        ...

    def now(self) -> datetime:
        """Local wall-clock time."""
        ...


class SystemClock:
    def millis(self) -> int:
        return int(time.monotonic() * 1000)

    def now(self) -> datetime:
        return datetime.now()
