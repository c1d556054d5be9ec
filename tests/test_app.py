import json

from crashguard.app import main


def test_replay_writes_metrics_and_events(tmp_path):
    rows = ["timestamp,accX,accY,accZ,gyroX,gyroY,gyroZ"]
    for i in range(4):
        rows.append(f"{i * 0.1:.1f},0,0,1,0,0,0")
    for i in range(4, 8):
        rows.append(f"{i * 0.1:.1f},0,0,7,0,0,0")
    recording = tmp_path / "ride.csv"
    recording.write_text("\n".join(rows) + "\n")

    out = tmp_path / "results"
    assert main(["--input", str(recording), "--vehicle", "car", "--output-dir", str(out)]) == 0

    run_dirs = list(out.glob("run_*"))
    assert len(run_dirs) == 1
    metrics = json.loads((run_dirs[0] / "metrics.json").read_text())
    assert metrics["summary"]["profile"] == "car"
    assert metrics["summary"]["samples"] == 8
    assert metrics["summary"]["events"] == 1
    assert len(metrics["frames"]) == 8
    assert metrics["peaks"]["peak_total_g"] == 7.0

    events = (run_dirs[0] / "alert_events.jsonl").read_text().splitlines()
    assert len(events) == 1
    assert json.loads(events[0])["danger_percentage"] == 80
