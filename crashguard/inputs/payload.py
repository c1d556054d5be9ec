from __future__ import annotations

from typing import Any, Mapping, Optional

from crashguard.errors import InvalidSampleError
from crashguard.scoring.types import Sample

# Device firmware publishes camelCase keys; recordings exported by other tools use snake_case.
FIELDS = (
    ("acc_x", "accX"),
    ("acc_y", "accY"),
    ("acc_z", "accZ"),
    ("gyro_x", "gyroX"),
    ("gyro_y", "gyroY"),
    ("gyro_z", "gyroZ"),
)


def _number(value: Any, key: str) -> float:
    if isinstance(value, bool):
        raise InvalidSampleError(f"Field {key!r} is not numeric: {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise InvalidSampleError(f"Field {key!r} is not numeric: {value!r}") from None


def sample_from_payload(payload: Mapping[str, Any], timestamp: Optional[float] = None) -> Sample:
    """Build a Sample from one device message. An explicit timestamp wins over the payload's."""
    values = []
    for snake, camel in FIELDS:
        if camel in payload and payload[camel] not in (None, ""):
            values.append(_number(payload[camel], camel))
        elif snake in payload and payload[snake] not in (None, ""):
            values.append(_number(payload[snake], snake))
        else:
            raise InvalidSampleError(f"Missing sensor field {camel!r}")

    if timestamp is None:
        raw_ts = payload.get("timestamp")
        timestamp = _number(raw_ts, "timestamp") if raw_ts not in (None, "") else 0.0
    return Sample(*values, timestamp=timestamp)
