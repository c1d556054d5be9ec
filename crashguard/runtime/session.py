from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, replace
from typing import Any, Callable, Deque, Dict, Optional, Tuple

from crashguard.scoring.profiles import as_profile, scorer_for
from crashguard.scoring.types import DangerResult, Sample, VehicleProfile
from crashguard.utils.logger import get_logger

INSUFFICIENT_DATA = "Insufficient data"
NOISE_FILTERED = "Noise filtered"
CONFIRMED_SUFFIX = " (Confirmed)"


@dataclass(frozen=True)
class DetectionConfig:
    window_size: int = 10
    min_readings: int = 5
    confirm_span: int = 3
    confirm_min_hits: int = 2
    confirm_bonus: int = 15
    noise_penalty: int = 20

    def __post_init__(self):
        if not 1 <= self.min_readings <= self.window_size:
            raise ValueError(
                f"min_readings must be in [1, window_size]: min_readings={self.min_readings} window_size={self.window_size}"
            )
        if not 1 <= self.confirm_min_hits <= self.confirm_span:
            raise ValueError(
                f"confirm_min_hits must be in [1, confirm_span]: hits={self.confirm_min_hits} span={self.confirm_span}"
            )
        if self.confirm_bonus < 0 or self.noise_penalty < 0:
            raise ValueError("confirm_bonus and noise_penalty must be non-negative")

    @classmethod
    def from_dict(cls, section: Optional[Dict[str, Any]]) -> "DetectionConfig":
        section = section or {}
        defaults = cls()
        return cls(
            window_size=int(section.get("window_size", defaults.window_size)),
            min_readings=int(section.get("min_readings", defaults.min_readings)),
            confirm_span=int(section.get("confirm_span", defaults.confirm_span)),
            confirm_min_hits=int(section.get("confirm_min_hits", defaults.confirm_min_hits)),
            confirm_bonus=int(section.get("confirm_bonus", defaults.confirm_bonus)),
            noise_penalty=int(section.get("noise_penalty", defaults.noise_penalty)),
        )


class DetectionSession:
    """
    Sliding-window crash detector for one device.

    The latest sample is scored with the active vehicle profile; a positive
    score is only reported once the most recent samples corroborate it.
    Not thread-safe: one caller owns a session.
    """

    def __init__(
        self,
        profile: VehicleProfile | str = VehicleProfile.SCOOTER,
        config: Optional[DetectionConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config or DetectionConfig()
        self.clock = clock
        self.logger = get_logger(__name__)
        self._profile = as_profile(profile)
        self._scorer = scorer_for(self._profile)
        self._window: Deque[Sample] = deque(maxlen=self.config.window_size)

    @property
    def profile(self) -> VehicleProfile:
        return self._profile

    @property
    def window(self) -> Tuple[Sample, ...]:
        return tuple(self._window)

    def __len__(self) -> int:
        return len(self._window)

    def set_vehicle_type(self, profile: VehicleProfile | str) -> None:
        new_profile = as_profile(profile)
        self.logger.info("Vehicle profile %s -> %s", self._profile.value, new_profile.value)
        self._profile = new_profile
        self._scorer = scorer_for(new_profile)
        self.reset()

    def add_reading(
        self,
        acc_x: float,
        acc_y: float,
        acc_z: float,
        gyro_x: float,
        gyro_y: float,
        gyro_z: float,
    ) -> Sample:
        sample = Sample(acc_x, acc_y, acc_z, gyro_x, gyro_y, gyro_z, timestamp=self.clock())
        self._window.append(sample)
        return sample

    def add_sample(self, sample: Sample) -> None:
        self._window.append(sample)

    def reset(self) -> None:
        if self._window:
            self.logger.info("Cleared %d buffered readings", len(self._window))
        self._window.clear()

    def _score(self, sample: Sample) -> DangerResult:
        return self._scorer(*sample.values())

    def detect_with_history(self) -> DangerResult:
        cfg = self.config
        if len(self._window) < cfg.min_readings:
            return DangerResult(is_accident=False, danger_percentage=0, reason=INSUFFICIENT_DATA)

        candidate = self._score(self._window[-1])
        self.logger.debug(
            "[%s] latest score=%d accident=%s reason=%s",
            self._profile.value,
            candidate.danger_percentage,
            candidate.is_accident,
            candidate.reason,
        )
        if not candidate.is_accident:
            return candidate

        # The latest sample is part of the span and counts toward its own corroboration.
        recent = list(self._window)[-cfg.confirm_span :]
        hits = sum(1 for s in recent if self._score(s).is_accident)

        if hits >= cfg.confirm_min_hits:
            confirmed = replace(
                candidate,
                danger_percentage=min(100, candidate.danger_percentage + cfg.confirm_bonus),
                reason=candidate.reason + CONFIRMED_SUFFIX,
            )
            self.logger.warning(
                "[%s] accident confirmed (%d/%d recent): %d%% %s",
                self._profile.value,
                hits,
                len(recent),
                confirmed.danger_percentage,
                confirmed.reason,
            )
            return confirmed

        self.logger.info(
            "[%s] spike suppressed (%d/%d recent): %s",
            self._profile.value,
            hits,
            len(recent),
            candidate.reason,
        )
        return DangerResult(
            is_accident=False,
            danger_percentage=max(0, candidate.danger_percentage - cfg.noise_penalty),
            reason=NOISE_FILTERED,
        )
