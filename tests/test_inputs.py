import json

import pytest

from crashguard.errors import InvalidSampleError
from crashguard.inputs.payload import sample_from_payload
from crashguard.inputs.recorded_input import RecordedInput


def test_payload_with_device_keys():
    sample = sample_from_payload({"accX": 0.1, "accY": "0.2", "accZ": 0.98, "gyroX": 1, "gyroY": 2, "gyroZ": 3, "timestamp": 12.5})
    assert sample.values() == (0.1, 0.2, 0.98, 1.0, 2.0, 3.0)
    assert sample.timestamp == 12.5


def test_payload_with_snake_case_keys_and_explicit_timestamp():
    payload = {"acc_x": 0, "acc_y": 0, "acc_z": 1, "gyro_x": 0, "gyro_y": 0, "gyro_z": 0, "timestamp": 3}
    assert sample_from_payload(payload, timestamp=9.0).timestamp == 9.0


@pytest.mark.parametrize(
    "payload",
    [
        {"accX": 0, "accY": 0, "accZ": 1, "gyroX": 0, "gyroY": 0},
        {"accX": "abc", "accY": 0, "accZ": 1, "gyroX": 0, "gyroY": 0, "gyroZ": 0},
        {"accX": True, "accY": 0, "accZ": 1, "gyroX": 0, "gyroY": 0, "gyroZ": 0},
        {"accX": "nan", "accY": 0, "accZ": 1, "gyroX": 0, "gyroY": 0, "gyroZ": 0},
    ],
)
def test_bad_payloads_raise(payload):
    with pytest.raises(InvalidSampleError):
        sample_from_payload(payload)


def test_recorded_csv(tmp_path):
    path = tmp_path / "ride.csv"
    path.write_text("timestamp,accX,accY,accZ,gyroX,gyroY,gyroZ\n0.0,0,0,1,0,0,0\n0.1,0,0,7,0,0,0\n")
    source = RecordedInput(path)
    samples = list(source.samples())
    assert len(samples) == 2
    assert samples[1].acc_z == 7.0
    assert samples[1].timestamp == pytest.approx(0.1)


def test_recorded_jsonl_skips_bad_records(tmp_path):
    path = tmp_path / "ride.jsonl"
    good = {"accX": 0, "accY": 0, "accZ": 1, "gyroX": 0, "gyroY": 0, "gyroZ": 0}
    lines = [json.dumps(good), "{not json", json.dumps({"accX": 1}), "", json.dumps(good)]
    path.write_text("\n".join(lines) + "\n")

    source = RecordedInput(path)
    assert len(list(source.samples())) == 2
    assert source.skipped == 2

    strict = RecordedInput(path, strict=True)
    with pytest.raises(InvalidSampleError):
        list(strict.samples())


def test_missing_recording(tmp_path):
    with pytest.raises(FileNotFoundError):
        RecordedInput(tmp_path / "missing.csv")
    inert = RecordedInput(tmp_path / "missing.csv", allow_missing=True)
    assert list(inert.samples()) == []


def test_unsupported_format(tmp_path):
    with pytest.raises(ValueError):
        RecordedInput(tmp_path / "ride.txt")
