import itertools

import pytest

from crashguard.errors import InvalidSampleError
from crashguard.runtime.session import DetectionConfig, DetectionSession
from crashguard.scoring.types import VehicleProfile

NORMAL = (0.0, 0.0, 1.0, 0.0, 0.0, 0.0)
CAR_SPIKE = (0.0, 0.0, 7.0, 0.0, 0.0, 0.0)  # car score 65, "Severe Collision (6.0G)"


def make_session(profile="car", **kwargs):
    return DetectionSession(profile=profile, clock=itertools.count(1).__next__, **kwargs)


def push(session, reading, times=1):
    for _ in range(times):
        session.add_reading(*reading)


def test_default_profile_is_scooter():
    assert DetectionSession().profile is VehicleProfile.SCOOTER


def test_insufficient_data_below_min_readings():
    session = make_session()
    push(session, CAR_SPIKE, 4)
    result = session.detect_with_history()
    assert result.reason == "Insufficient data"
    assert not result.is_accident
    assert result.danger_percentage == 0


def test_negative_latest_is_returned_unchanged():
    session = make_session()
    push(session, NORMAL, 5)
    result = session.detect_with_history()
    assert not result.is_accident
    assert result.reason == "Normal operation"
    assert result.danger_percentage == 0


def test_persistent_impact_is_confirmed():
    session = make_session()
    push(session, CAR_SPIKE, 5)
    result = session.detect_with_history()
    assert result.is_accident
    assert result.reason == "Severe Collision (6.0G) (Confirmed)"
    assert result.reason.endswith("(Confirmed)")
    assert result.danger_percentage == 65 + 15


def test_confirmation_bonus_is_capped():
    session = make_session()
    push(session, (0.0, 0.0, 9.0, 0.0, 0.0, 0.0), 5)  # 85 before bonus
    result = session.detect_with_history()
    assert result.is_accident
    assert result.danger_percentage == 100


def test_single_spike_is_filtered_as_noise():
    session = make_session()
    push(session, NORMAL, 4)
    push(session, CAR_SPIKE)
    result = session.detect_with_history()
    assert not result.is_accident
    assert result.reason == "Noise filtered"
    assert result.danger_percentage == 65 - 20


def test_latest_sample_counts_toward_its_own_confirmation():
    session = make_session()
    push(session, NORMAL, 3)
    push(session, CAR_SPIKE, 2)
    result = session.detect_with_history()
    assert result.is_accident
    assert result.danger_percentage == 80


def test_set_vehicle_type_clears_window():
    session = make_session()
    push(session, CAR_SPIKE, 10)
    session.set_vehicle_type("scooter")
    assert session.profile is VehicleProfile.SCOOTER
    assert len(session) == 0
    assert session.detect_with_history().reason == "Insufficient data"


def test_reset_keeps_profile():
    session = make_session()
    push(session, CAR_SPIKE, 6)
    session.reset()
    assert len(session) == 0
    assert session.profile is VehicleProfile.CAR


def test_profile_switch_changes_scorer():
    lateral = (3.0, 0.0, 1.0, 0.0, 0.0, 0.0)
    session = make_session(profile="scooter")
    push(session, lateral, 5)
    assert session.detect_with_history().danger_percentage == 0

    session.set_vehicle_type(VehicleProfile.CAR)
    push(session, lateral, 5)
    result = session.detect_with_history()
    assert result.is_accident
    assert result.danger_percentage == 70


def test_window_evicts_oldest_and_confirms_on_last_three():
    session = make_session()
    push(session, CAR_SPIKE, 9)
    push(session, NORMAL, 2)
    push(session, CAR_SPIKE)

    window = session.window
    assert len(window) == 10
    assert [s.timestamp for s in window] == list(range(3, 13))

    # seven spikes remain in the window but only one is among the last three
    result = session.detect_with_history()
    assert not result.is_accident
    assert result.reason == "Noise filtered"


def test_add_reading_rejects_non_finite_values():
    session = make_session()
    push(session, NORMAL, 2)
    with pytest.raises(InvalidSampleError):
        session.add_reading(0.0, float("nan"), 1.0, 0.0, 0.0, 0.0)
    assert len(session) == 2


def test_custom_config():
    cfg = DetectionConfig.from_dict({"window_size": 4, "min_readings": 2, "confirm_span": 2, "confirm_min_hits": 2})
    session = make_session(config=cfg)
    push(session, NORMAL)
    push(session, CAR_SPIKE)
    assert session.detect_with_history().reason == "Noise filtered"
    push(session, CAR_SPIKE, 4)
    assert len(session) == 4
    assert session.detect_with_history().is_accident


def test_config_validation():
    with pytest.raises(ValueError):
        DetectionConfig(window_size=3, min_readings=5)
    with pytest.raises(ValueError):
        DetectionConfig(confirm_span=2, confirm_min_hits=3)
    with pytest.raises(ValueError):
        DetectionConfig(noise_penalty=-1)
    assert DetectionConfig.from_dict(None) == DetectionConfig()
