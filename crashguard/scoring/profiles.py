from __future__ import annotations

from typing import Callable, Dict

from crashguard.scoring import car, scooter
from crashguard.scoring.types import DangerResult, Sample, VehicleProfile

Scorer = Callable[[float, float, float, float, float, float], DangerResult]

SCORERS: Dict[VehicleProfile, Scorer] = {
    VehicleProfile.CAR: car.score_car,
    VehicleProfile.SCOOTER: scooter.score_scooter,
}

THRESHOLDS: Dict[VehicleProfile, int] = {
    VehicleProfile.CAR: car.ACCIDENT_THRESHOLD,
    VehicleProfile.SCOOTER: scooter.ACCIDENT_THRESHOLD,
}


def as_profile(profile: VehicleProfile | str) -> VehicleProfile:
    return profile if isinstance(profile, VehicleProfile) else VehicleProfile(str(profile).lower())


def scorer_for(profile: VehicleProfile | str) -> Scorer:
    return SCORERS[as_profile(profile)]


def accident_threshold(profile: VehicleProfile | str) -> int:
    return THRESHOLDS[as_profile(profile)]


def score_sample(profile: VehicleProfile | str, sample: Sample) -> DangerResult:
    return scorer_for(profile)(*sample.values())
