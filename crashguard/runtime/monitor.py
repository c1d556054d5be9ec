from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from crashguard.alerts.events import AccidentEvent
from crashguard.alerts.sinks import AlertSink
from crashguard.runtime.session import INSUFFICIENT_DATA, NOISE_FILTERED, DetectionSession
from crashguard.scoring.types import DangerResult, Sample, VehicleProfile
from crashguard.utils.logger import get_logger
from crashguard.utils.timing import RateMeter


class CrashMonitor:
    """
    Feeds a DetectionSession sample by sample and forwards accident verdicts.

    Events go out on the rising edge only: a run of consecutive accident
    verdicts produces one event.
    """

    def __init__(
        self,
        session: DetectionSession,
        sinks: Iterable[AlertSink] = (),
        poll_every: int = 1,
    ):
        if poll_every < 1:
            raise ValueError(f"poll_every must be >= 1, got {poll_every}")
        self.session = session
        self.sinks: List[AlertSink] = list(sinks)
        self.poll_every = poll_every
        self.logger = get_logger(__name__)
        self.rate = RateMeter()
        self.samples_seen = 0
        self.verdicts: Counter = Counter()
        self.events: List[AccidentEvent] = []
        self.peak_danger = 0
        self._in_accident = False

    @property
    def in_accident(self) -> bool:
        return self._in_accident

    def reset(self) -> None:
        """Clear the session window and re-arm edge triggering. Counters are kept."""
        self.session.reset()
        self._in_accident = False

    def set_vehicle_type(self, profile: VehicleProfile | str) -> None:
        self.session.set_vehicle_type(profile)
        self._in_accident = False

    def push(
        self,
        sample: Sample,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
    ) -> Optional[DangerResult]:
        """Ingest one sample; returns the verdict when this sample triggered a poll."""
        self.session.add_sample(sample)
        self.samples_seen += 1
        self.rate.tick()

        if self.samples_seen % self.poll_every != 0:
            return None

        result = self.session.detect_with_history()
        self.verdicts[self._verdict_key(result)] += 1
        self.peak_danger = max(self.peak_danger, result.danger_percentage)

        if result.is_accident and not self._in_accident:
            event = AccidentEvent.from_result(
                result,
                sample_index=self.samples_seen,
                timestamp=sample.timestamp,
                profile=self.session.profile,
                latitude=latitude,
                longitude=longitude,
            )
            self._emit(event)
        self._in_accident = result.is_accident
        return result

    @staticmethod
    def _verdict_key(result: DangerResult) -> str:
        if result.is_accident:
            return "accident"
        if result.reason in (INSUFFICIENT_DATA, NOISE_FILTERED):
            return result.reason.lower().replace(" ", "_")
        return "normal"

    def _emit(self, event: AccidentEvent) -> None:
        self.events.append(event)
        self.logger.warning(
            "Accident event #%d at sample %d: %s %d%% (%s)",
            len(self.events),
            event.sample_index,
            event.level.value,
            event.danger_percentage,
            event.reason,
        )
        for sink in self.sinks:
            sink.send(event)

    def summary(self) -> Dict[str, Any]:
        return {
            "profile": self.session.profile.value,
            "samples": self.samples_seen,
            "polls": sum(self.verdicts.values()),
            "verdicts": dict(self.verdicts),
            "events": len(self.events),
            "peak_danger": self.peak_danger,
            "ingest_rate_hz": round(self.rate.rate_hz, 2),
        }
