from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class RateMeter:
    """Exponential moving average of the sample ingest rate (Hz)."""

    smoothing: float = 0.9
    rate_hz: float = 0.0
    clock: Callable[[], float] = time.perf_counter
    _last_ts: float | None = field(default=None, repr=False)

    def tick(self, now: float | None = None) -> float:
        now = self.clock() if now is None else now
        if self._last_ts is not None:
            dt = max(now - self._last_ts, 1e-9)
            inst = 1.0 / dt
            self.rate_hz = inst if self.rate_hz <= 0 else (self.smoothing * self.rate_hz + (1 - self.smoothing) * inst)
        self._last_ts = now
        return self.rate_hz
