from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from crashguard.alerts.sinks import AlertSink, JsonlAlertLog
from crashguard.inputs.recorded_input import RecordedInput
from crashguard.runtime.monitor import CrashMonitor
from crashguard.runtime.session import DetectionConfig, DetectionSession
from crashguard.scoring.types import VehicleProfile
from crashguard.scoring.vector_math import PeakTracker
from crashguard.utils.config import get, load_config
from crashguard.utils.logger import setup_logger


def make_run_dir(base_dir: str | Path) -> Path:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = Path(base_dir) / f"run_{ts}"
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def build_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="crashguard - replay an IMU recording through the crash detector")
    parser.add_argument("--config", default=None, help="Path to YAML config (defaults built in)")
    parser.add_argument("--input", required=True, help="Recorded sensor log (.csv or .jsonl)")
    parser.add_argument("--vehicle", choices=[p.value for p in VehicleProfile], default=None)
    parser.add_argument("--poll-every", type=int, default=None, help="Evaluate every N samples")
    parser.add_argument("--output-dir", default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_argparser().parse_args(argv)

    cfg: Dict[str, Any] = load_config(args.config)

    output_base = args.output_dir or get(cfg, "runtime.output_dir", "results")
    run_dir = make_run_dir(output_base)
    logger = setup_logger(log_dir=run_dir, level=get(cfg, "runtime.log_level", "INFO"))

    console = Console()
    console.print(f"[bold]crashguard[/bold] run dir: {run_dir}")

    vehicle = args.vehicle or get(cfg, "detection.vehicle", VehicleProfile.SCOOTER.value)
    session = DetectionSession(profile=vehicle, config=DetectionConfig.from_dict(get(cfg, "detection", {})))
    logger.info("Vehicle profile: %s, window=%d", session.profile.value, session.config.window_size)

    sinks: List[AlertSink] = []
    if bool(get(cfg, "alerts.event_log", True)):
        sinks.append(JsonlAlertLog(run_dir))
    poll_every = args.poll_every or int(get(cfg, "monitor.poll_every", 1))
    monitor = CrashMonitor(session, sinks=sinks, poll_every=poll_every)

    source = RecordedInput(args.input)
    logger.info("Input recording: %s", args.input)
    save_metrics = bool(get(cfg, "runtime.save_metrics", True))

    frames: List[Dict[str, Any]] = []
    peaks = PeakTracker()
    source.start()
    try:
        for sample in tqdm(source.samples(), desc="Replaying", unit="sample"):
            peaks.update(sample)
            result = monitor.push(sample)
            if save_metrics and result is not None:
                frames.append({"index": monitor.samples_seen, "timestamp": sample.timestamp, **result.to_dict()})
    finally:
        source.stop()

    summary = monitor.summary()
    summary["skipped_records"] = source.skipped

    if save_metrics:
        metrics = {
            "project": cfg.get("project", {}),
            "input": {"path": str(args.input)},
            "detection": asdict(session.config),
            "peaks": peaks.result(),
            "summary": summary,
            "events": [e.to_dict() for e in monitor.events],
            "frames": frames,
        }
        metrics_path = run_dir / "metrics.json"
        metrics_path.write_text(json.dumps(metrics, indent=2), encoding="utf-8")
        logger.info("Saved metrics: %s", metrics_path)

    table = Table(title="Replay summary")
    table.add_column("metric")
    table.add_column("value", justify="right")
    for key in ("profile", "samples", "polls", "events", "peak_danger", "skipped_records"):
        table.add_row(key, str(summary[key]))
    for verdict, count in sorted(summary["verdicts"].items()):
        table.add_row(f"verdict:{verdict}", str(count))
    console.print(table)

    logger.info("Done.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
