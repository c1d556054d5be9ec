"""
Car scorer.

Cars are a stable platform: any sustained tilt is abnormal, so orientation
carries most of the weight, followed by longitudinal/vertical impact, side
impact and yaw spin. Orientation rules are skipped in freefall because the
gravity reference is unreliable there.
"""

from __future__ import annotations

import math
from typing import List

from crashguard.scoring.levels import clamp_percentage, fixed
from crashguard.scoring.types import DangerResult
from crashguard.scoring.vector_math import acceleration_delta, ensure_finite, lateral_g, total_acceleration

FREEFALL_G = 0.5
INVERTED_Z = -0.3
ON_SIDE_Z = 0.3
TILT_Z = 0.85  # ~30 degrees

IMPACT_G = 2.5
SEVERE_G = 5.0
CATASTROPHIC_G = 8.0
LATERAL_G = 2.0
SPIN_DPS = 90.0

ACCIDENT_THRESHOLD = 55


def _tilt(acc_z: float):
    """Return (danger, label) for the orientation rule, or None when upright."""
    if acc_z <= INVERTED_Z:
        return 100.0, "Vehicle Rollover (Inverted)"
    if acc_z < ON_SIDE_Z:
        return 95.0, "Vehicle Rollover (On Side)"
    if acc_z < TILT_Z:
        # 50% at 30 degrees up to 85% at ~70 degrees
        severity = (TILT_Z - acc_z) / (TILT_Z - ON_SIDE_Z)
        angle = math.degrees(math.acos(acc_z))
        return 50 + severity * 35, f"Abnormal Vehicle Tilt ({fixed(angle, 0)}°)"
    return None


def score_car(
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

    if total_acceleration(acc_x, acc_y, acc_z) > FREEFALL_G:
        tilt = _tilt(acc_z)
        if tilt is not None:
            score += tilt[0]
            triggers.append(tilt[1])

    if delta > IMPACT_G:
        score += 30 + (delta - IMPACT_G) * 10
        if delta > CATASTROPHIC_G:
            label = "Catastrophic Impact"
        elif delta > SEVERE_G:
            label = "Severe Collision"
        else:
            label = "Collision Detected"
        triggers.append(f"{label} ({fixed(delta)}G)")

    side = lateral_g(acc_x, acc_y)
    if side > LATERAL_G:
        score += 40 + (side - LATERAL_G) * 15
        triggers.append(f"Lateral Impact ({fixed(side)}G)")

    if abs(gyro_z) > SPIN_DPS:
        score += 25
        triggers.append("Loss of control (Spin)")

    return DangerResult.from_triggers(clamp_percentage(score), triggers, ACCIDENT_THRESHOLD)
