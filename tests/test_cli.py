import json
import os
import subprocess
import sys
from pathlib import Path

import jsonschema

from p2data import COUNT_RESULTS, FULL_RESULTS, OBS

ROOT = Path(__file__).parents[1]
SCHEMA = json.loads((ROOT / "schemas" / "metrics.schema.json").read_text(encoding="utf-8"))


def run_cli(*args, stdin=None, env=None):
    return subprocess.run(
        [sys.executable, "-m", "psquared.cli", *args],
        input=stdin,
        capture_output=True,
        text=True,
        cwd=ROOT,
        env=env,
        timeout=60,
    )


def write_obs(tmp_path: Path) -> Path:
    data = tmp_path / "obs.txt"
    data.write_text("# latency samples\n" + "\n".join(str(x) for x in OBS) + "\n", encoding="utf-8")
    return data


def test_quantile_json_matches_fixture(tmp_path):
    data = write_obs(tmp_path)
    out = tmp_path / "q.json"
    proc = run_cli("quantile", str(data), "--p", "0.5", "--json", str(out), "--no-color")
    assert proc.returncode == 0, proc.stderr
    snap = json.loads(out.read_text(encoding="utf-8"))
    jsonschema.Draft202012Validator(SCHEMA).validate(snap)
    assert [row["count"] for row in snap["markers"]] == COUNT_RESULTS
    for row, expected in zip(snap["markers"], FULL_RESULTS):
        assert abs(row["estimate"] - expected) < 1e-5
    assert "\x1b[" not in proc.stdout
    assert "p_quantile" in proc.stdout


def test_histogram_from_stdin(tmp_path):
    out = tmp_path / "h.json"
    lines = "\n".join(json.dumps({"value": x}) for x in OBS)
    proc = run_cli("histogram", "-", "--buckets", "4", "--json", str(out), "--no-color", stdin=lines)
    assert proc.returncode == 0, proc.stderr
    snap = json.loads(out.read_text(encoding="utf-8"))
    jsonschema.Draft202012Validator(SCHEMA).validate(snap)
    assert snap["kind"] == "histogram"
    assert snap["observations"] == 20
    assert [row["count"] for row in snap["markers"]] == COUNT_RESULTS


def test_not_ready_output(tmp_path):
    data = tmp_path / "few.txt"
    data.write_text("1\n2\n", encoding="utf-8")
    proc = run_cli("quantile", str(data), "--no-color")
    assert proc.returncode == 0, proc.stderr
    assert "not ready" in proc.stdout
    assert "n/a" in proc.stdout


def test_progress_every(tmp_path):
    data = write_obs(tmp_path)
    proc = run_cli("quantile", str(data), "--preset", "median", "--every", "5", "--no-color")
    assert proc.returncode == 0, proc.stderr
    progress = [line for line in proc.stdout.splitlines() if line.startswith("[")]
    assert [line.split("]")[0] for line in progress] == ["[5", "[10", "[15", "[20"]


def test_unparseable_lines_are_logged(tmp_path):
    data = tmp_path / "mixed.txt"
    data.write_text("1\n2\nnot-a-number\n3\n4\n5\nnan\n", encoding="utf-8")
    proc = run_cli("quantile", str(data), "--no-color")
    assert proc.returncode == 0
    assert "[psquared] WARNING: line 3" in proc.stderr
    assert "not ready" not in proc.stdout


def test_bad_parameters_exit_2(tmp_path):
    data = write_obs(tmp_path)
    proc = run_cli("quantile", str(data), "--p", "1.0")
    assert proc.returncode == 2
    assert "0 < p < 1" in proc.stderr
    proc = run_cli("histogram", str(data), "--buckets", "3")
    assert proc.returncode == 2
    assert "buckets out of range" in proc.stderr


def test_missing_file_exit_2(tmp_path):
    proc = run_cli("quantile", str(tmp_path / "nope.txt"))
    assert proc.returncode == 2
    assert "cannot read" in proc.stderr


def test_color_output_if_forced(tmp_path):
    data = write_obs(tmp_path)
    env = os.environ.copy()
    env["FORCE_COLOR"] = "1"
    proc = run_cli("histogram", str(data), "--buckets", "4", env=env)
    assert proc.returncode == 0, proc.stderr
    # Accept plain output if rich could not colour (rare Windows CI cases)
    if "\x1b[" not in proc.stdout:
        assert "HistogramEstimator(4 buckets)" in proc.stdout


def test_json_output_is_strict_with_infinite_input(tmp_path):
    data = tmp_path / "inf.txt"
    data.write_text("1\n2\n3\n4\ninf\n5\n", encoding="utf-8")
    out = tmp_path / "inf.json"
    proc = run_cli("quantile", str(data), "--json", str(out), "--no-color")
    assert proc.returncode == 0, proc.stderr
    text = out.read_text(encoding="utf-8")
    assert "Infinity" not in text

    def _reject(token):
        raise ValueError(token)

    snap = json.loads(text, parse_constant=_reject)
    jsonschema.Draft202012Validator(SCHEMA).validate(snap)
    assert snap["markers"][-1]["estimate"] is None
