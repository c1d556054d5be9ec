from __future__ import annotations

from typing import List

from crashguard.scoring.levels import clamp_percentage, fixed
from crashguard.scoring.types import DangerResult
from crashguard.scoring.vector_math import acceleration_delta, ensure_finite, total_rotation

# Light two-wheelers: tipping is the common failure, impacts are judged on a higher bar.
TIPPING_Z = 0.5  # |accZ| below this means tilted past ~60 degrees
IMPACT_G = 3.5
SEVERE_IMPACT_G = 6.0
TUMBLING_DPS = 300.0

ACCIDENT_THRESHOLD = 50


def score_scooter(
    acc_x: float,
    acc_y: float,
    acc_z: float,
    gyro_x: float,
    gyro_y: float,
    gyro_z: float,
) -> DangerResult:
    ensure_finite(acc_x, acc_y, acc_z, gyro_x, gyro_y, gyro_z)
    delta = acceleration_delta(acc_x, acc_y, acc_z)

    score = 0.0
    triggers: List[str] = []

    if abs(acc_z) < TIPPING_Z:
        score += 65
        triggers.append("Vehicle tipped over")

    if delta > IMPACT_G:
        # 40% at 3.5g, +15% per extra g
        score += 40 + (delta - IMPACT_G) * 15
        label = "Severe impact" if delta > SEVERE_IMPACT_G else "Hard impact"
        triggers.append(f"{label} ({fixed(delta)}G)")

    rotation = total_rotation(gyro_x, gyro_y, gyro_z)
    if rotation > TUMBLING_DPS:
        score += rotation / 10
        triggers.append("Tumbling detected")

    return DangerResult.from_triggers(clamp_percentage(score), triggers, ACCIDENT_THRESHOLD)
