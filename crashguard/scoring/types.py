from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from crashguard.scoring.vector_math import ensure_finite

NORMAL_REASON = "Normal operation"


class VehicleProfile(str, Enum):
    CAR = "car"
    SCOOTER = "scooter"


class DangerLevel(str, Enum):
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


@dataclass(frozen=True)
class Sample:
    """One IMU observation. Acceleration in g (resting ~ (0, 0, 1)), angular velocity in deg/s."""

    acc_x: float
    acc_y: float
    acc_z: float
    gyro_x: float
    gyro_y: float
    gyro_z: float
    timestamp: float = 0.0

    def __post_init__(self):
        ensure_finite(*self.values())

    def values(self) -> Tuple[float, float, float, float, float, float]:
        return (self.acc_x, self.acc_y, self.acc_z, self.gyro_x, self.gyro_y, self.gyro_z)


@dataclass(frozen=True)
class DangerResult:
    is_accident: bool
    danger_percentage: int
    reason: str = NORMAL_REASON
    triggers: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_triggers(cls, score: int, triggers: list[str], threshold: int) -> "DangerResult":
        return cls(
            is_accident=score >= threshold,
            danger_percentage=score,
            reason=", ".join(triggers) or NORMAL_REASON,
            triggers=tuple(triggers),
        )

    def to_dict(self) -> dict:
        return {
            "is_accident": self.is_accident,
            "danger_percentage": self.danger_percentage,
            "reason": self.reason,
        }
