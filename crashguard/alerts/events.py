from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional

from crashguard.scoring.levels import danger_level
from crashguard.scoring.types import DangerLevel, DangerResult, VehicleProfile


class AlertType(str, Enum):
    USER_CONFIRMATION = "user_confirmation"  # private heads-up, user may still cancel
    EMERGENCY_ALERT = "emergency_alert"  # sent to emergency contacts


@dataclass
class AccidentEvent:
    sample_index: int
    timestamp: float
    profile: VehicleProfile
    danger_percentage: int
    reason: str
    level: DangerLevel
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_result(
        cls,
        result: DangerResult,
        *,
        sample_index: int,
        timestamp: float,
        profile: VehicleProfile,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> "AccidentEvent":
        return cls(
            sample_index=sample_index,
            timestamp=timestamp,
            profile=profile,
            danger_percentage=result.danger_percentage,
            reason=result.reason,
            level=danger_level(result.danger_percentage),
            latitude=latitude,
            longitude=longitude,
        )

    @property
    def has_location(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["profile"] = self.profile.value
        d["level"] = self.level.value
        return d


def maps_link(latitude: float, longitude: float) -> str:
    return f"https://www.google.com/maps?q={latitude},{longitude}"


def build_alert_payload(
    event: AccidentEvent,
    alert_type: AlertType | str,
    user_email: Optional[str] = None,
    contact: Optional[str] = None,
    dashboard_url: Optional[str] = None,
) -> Dict[str, Any]:
    """Request body for the external alert-delivery function."""
    if not event.has_location:
        raise ValueError("Alert payload requires latitude and longitude")
    alert_type = AlertType(alert_type)
    payload: Dict[str, Any] = {
        "latitude": float(event.latitude),
        "longitude": float(event.longitude),
        "dangerPercentage": int(event.danger_percentage),
        "emailType": alert_type.value,
    }
    if user_email:
        payload["userEmail"] = user_email
    if contact:
        payload["contact1"] = contact
    if dashboard_url:
        payload["dashboardUrl"] = dashboard_url
    return payload
