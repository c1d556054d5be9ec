from __future__ import annotations

import math
from typing import Dict, Iterable, List

import numpy as np

from crashguard.errors import InvalidSampleError

RESTING_G = 1.0


def ensure_finite(*values: float) -> None:
    for v in values:
        try:
            ok = math.isfinite(v)
        except TypeError:
            raise InvalidSampleError(f"Sensor value is not numeric: {v!r}") from None
        if not ok:
            raise InvalidSampleError(f"Sensor value is not finite: {v!r}")


def magnitude3(a: float, b: float, c: float) -> float:
    return math.sqrt(a * a + b * b + c * c)


def total_acceleration(acc_x: float, acc_y: float, acc_z: float) -> float:
    return magnitude3(acc_x, acc_y, acc_z)


def acceleration_delta(acc_x: float, acc_y: float, acc_z: float) -> float:
    """Deviation of the acceleration magnitude from resting gravity."""
    return abs(total_acceleration(acc_x, acc_y, acc_z) - RESTING_G)


def lateral_g(acc_x: float, acc_y: float) -> float:
    return magnitude3(acc_x, acc_y, 0.0)


def total_rotation(gyro_x: float, gyro_y: float, gyro_z: float) -> float:
    return magnitude3(gyro_x, gyro_y, gyro_z)


def peak_stats(samples: Iterable) -> Dict[str, float]:
    """
    Batch magnitudes over a recording, for reporting only.
    Accepts Sample objects (anything with .values()).
    """
    rows = [s.values() for s in samples]
    if not rows:
        return {"count": 0, "peak_total_g": 0.0, "peak_delta_g": 0.0, "peak_rotation_dps": 0.0, "mean_delta_g": 0.0}
    arr = np.asarray(rows, dtype=float)
    total = np.linalg.norm(arr[:, 0:3], axis=1)
    delta = np.abs(total - RESTING_G)
    rotation = np.linalg.norm(arr[:, 3:6], axis=1)
    return {
        "count": int(arr.shape[0]),
        "peak_total_g": float(total.max()),
        "peak_delta_g": float(delta.max()),
        "peak_rotation_dps": float(rotation.max()),
        "mean_delta_g": float(delta.mean()),
    }


class PeakTracker:
    """
    Running version of peak_stats for unbounded streams.
    Buffers at most `chunk_size` samples, reducing each full chunk with numpy.
    """

    def __init__(self, chunk_size: int = 1024):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
        self.chunk_size = chunk_size
        self._pending: List = []
        self._count = 0
        self._delta_sum = 0.0
        self._peaks = {"peak_total_g": 0.0, "peak_delta_g": 0.0, "peak_rotation_dps": 0.0}

    def update(self, sample) -> None:
        self._pending.append(sample)
        if len(self._pending) >= self.chunk_size:
            self._flush()

    def _flush(self) -> None:
        if not self._pending:
            return
        stats = peak_stats(self._pending)
        self._pending.clear()
        self._count += stats["count"]
        self._delta_sum += stats["mean_delta_g"] * stats["count"]
        for key in self._peaks:
            self._peaks[key] = max(self._peaks[key], stats[key])

    def result(self) -> Dict[str, float]:
        self._flush()
        mean_delta = self._delta_sum / self._count if self._count else 0.0
        return {"count": self._count, **self._peaks, "mean_delta_g": mean_delta}
