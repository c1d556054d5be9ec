import json
from collections import Counter
from pathlib import Path


def generate_report(run_dir: Path):
    events_file = run_dir / "alert_events.jsonl"
    report_file = run_dir / "alert_report.json"

    levels = []
    reasons = []
    times = []
    dangers = []

    if not events_file.exists():
        print(f"No events file found at {events_file}")
        return

    with events_file.open() as f:
        for line in f:
            if not line.strip():
                continue
            e = json.loads(line)
            levels.append(e.get("level"))
            reasons.append(e.get("reason"))
            times.append(e.get("timestamp"))
            dangers.append(e.get("danger_percentage", 0))

    report = {
        "total_events": len(levels),
        "level_counts": dict(Counter(levels)),
        "reasons": dict(Counter(reasons)),
        "max_danger_percentage": max(dangers) if dangers else None,
        "first_event_time_s": min(times) if times else None,
        "last_event_time_s": max(times) if times else None,
    }

    with report_file.open("w") as f:
        json.dump(report, f, indent=2)

    print(f"Alert report written to {report_file}")


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 2:
        print("Usage: python scripts/generate_alert_report.py <run_dir>")
        sys.exit(1)
    generate_report(Path(sys.argv[1]))
