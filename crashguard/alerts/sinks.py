import abc
import json
from pathlib import Path
from typing import List

from crashguard.alerts.events import AccidentEvent


class AlertSink(abc.ABC):
    @abc.abstractmethod
    def send(self, event: AccidentEvent) -> None:
        ...


class MemorySink(AlertSink):
    def __init__(self):
        self.events: List[AccidentEvent] = []

    def send(self, event: AccidentEvent) -> None:
        self.events.append(event)


class JsonlAlertLog(AlertSink):
    def __init__(self, run_dir: Path):
        self.log_path = Path(run_dir) / "alert_events.jsonl"
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.log_path.touch(exist_ok=True)

    def send(self, event: AccidentEvent) -> None:
        record = event.to_dict()
        record["timestamp"] = round(event.timestamp, 3)
        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(record) + "\n")
