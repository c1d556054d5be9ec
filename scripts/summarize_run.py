#!/usr/bin/env python3
import json
import sys
from pathlib import Path
from statistics import mean, median


def pct(n, d):
    return (100.0 * n / d) if d else 0.0


def main():
    if len(sys.argv) < 2:
        print("Usage: python scripts/summarize_run.py results/run_YYYYMMDD_HHMMSS")
        sys.exit(1)

    run_dir = Path(sys.argv[1])
    metrics_path = run_dir / "metrics.json"
    if not metrics_path.exists():
        raise FileNotFoundError(f"Missing: {metrics_path}")

    m = json.loads(metrics_path.read_text())
    frames = m.get("frames", [])
    n = len(frames)
    if n == 0:
        print("No verdicts found in metrics.json")
        return

    counts = {"accident": 0, "noise_filtered": 0, "insufficient_data": 0, "normal": 0}
    danger = []
    for f in frames:
        reason = f.get("reason", "")
        if f.get("is_accident"):
            counts["accident"] += 1
        elif reason == "Noise filtered":
            counts["noise_filtered"] += 1
        elif reason == "Insufficient data":
            counts["insufficient_data"] += 1
        else:
            counts["normal"] += 1
        if reason != "Insufficient data":
            danger.append(f.get("danger_percentage", 0))

    summary = m.get("summary", {})
    peaks = m.get("peaks", {})

    print("\n================ CRASHGUARD RUN SUMMARY ================")
    print(f"Run dir: {run_dir}")
    print(f"Profile: {summary.get('profile', '?')}")
    print(f"Samples: {summary.get('samples', n)}  polls: {n}  skipped records: {summary.get('skipped_records', 0)}")

    print("\nVerdict distribution:")
    for k in ["normal", "accident", "noise_filtered", "insufficient_data"]:
        c = counts[k]
        print(f"  {k:18s}: {c:5d} ({pct(c, n):.1f}%)")

    if danger:
        print(f"\nDanger %  avg={mean(danger):.1f}  med={median(danger):.1f}  max={max(danger)}")
    if peaks:
        print(
            f"Peaks     total={peaks.get('peak_total_g', 0):.2f}g  delta={peaks.get('peak_delta_g', 0):.2f}g"
            f"  rotation={peaks.get('peak_rotation_dps', 0):.0f}deg/s"
        )

    print(f"\nAccident events: {len(m.get('events', []))}")
    print("========================================================\n")


if __name__ == "__main__":
    main()
