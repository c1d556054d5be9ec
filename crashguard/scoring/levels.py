from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

from crashguard.scoring.types import DangerLevel


def clamp_percentage(score: float) -> int:
    """Round half up and clamp to [0, 100]."""
    return max(0, min(100, int(math.floor(score + 0.5))))


def fixed(value: float, digits: int = 1) -> str:
    """
    Format with `digits` decimals, rounding exact ties away from zero.

    Works on the exact binary value of the float, so 3.25 -> "3.3" while
    1.005 (stored just below) -> "1.00".
    """
    quantum = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def danger_level(danger_percentage: int) -> DangerLevel:
    if danger_percentage >= 80:
        return DangerLevel.CRITICAL
    if danger_percentage >= 60:
        return DangerLevel.HIGH
    return DangerLevel.MODERATE
