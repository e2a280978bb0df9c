import json
from pathlib import Path

import pytest

from tools.reference_vectors import (
    VectorConfig,
    VectorMismatch,
    build_reference_vectors,
    compare_vectors,
    load_vectors,
    main,
)


def test_default_bundle_matches_published_vectors() -> None:
    bundle = build_reference_vectors(VectorConfig())

    assert bundle["config"] == {"seed": 42, "stream": 54, "count": 6, "bound": 6}
    assert bundle["next_uint"] == [
        "0xa15c02b7",
        "0x7b47f409",
        "0xba1d3330",
        "0x83d2f293",
        "0xbfa4784b",
        "0xcbed606e",
    ]
    assert bundle["next_bounded"] == [3, 3, 2, 1, 1, 4]
    assert bundle["next_single"] == pytest.approx(0.63031018, abs=1e-7)
    assert bundle["next_double"] == pytest.approx(0.6303102186438938, abs=1e-15)


def test_compare_vectors_reports_first_difference() -> None:
    expected = build_reference_vectors(VectorConfig(count=4))
    actual = build_reference_vectors(VectorConfig(count=4))
    actual["next_bounded"][2] = 5

    mismatch = compare_vectors(expected, actual)

    assert mismatch == {"field": "next_bounded", "index": 2, "expected": 2, "actual": 5}
    assert compare_vectors(expected, expected) is None


def test_write_then_check_round_trip_passes(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    bundle_path = tmp_path / "vectors.json"
    log_path = tmp_path / "logs" / "runs.jsonl"

    assert main(["--seed", "7", "--stream", "8", "--output", str(bundle_path)]) == 0
    assert main(["--check", str(bundle_path), "--log", str(log_path)]) == 0

    out = capsys.readouterr().out
    assert out.count("PASS seed=7 stream=8") == 2

    rows = [json.loads(line) for line in log_path.read_text(encoding="utf-8").splitlines()]
    assert len(rows) == 1
    assert rows[0]["status"] == "PASS"
    assert rows[0]["config"]["seed"] == 7
    assert rows[0]["mismatch"] is None
    assert "logged_at" in rows[0]


def test_check_detects_tampered_bundle(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    bundle_path = tmp_path / "vectors.json"
    log_path = tmp_path / "runs.jsonl"
    bundle = build_reference_vectors(VectorConfig())
    bundle["next_uint"][3] = "0x00000000"
    bundle_path.write_text(json.dumps(bundle), encoding="utf-8")

    assert main(["--check", str(bundle_path), "--log", str(log_path)]) == 1
    assert main(["--check", str(bundle_path), "--allow-mismatch"]) == 0

    assert "FAIL seed=42 stream=54 field=next_uint index=3" in capsys.readouterr().out
    row = json.loads(log_path.read_text(encoding="utf-8").splitlines()[0])
    assert row["status"] == "FAIL"
    assert row["mismatch"]["index"] == 3


def test_load_vectors_rejects_unknown_schema(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"schema_version": 99}), encoding="utf-8")

    with pytest.raises(VectorMismatch, match="schema version"):
        load_vectors(path)


def test_load_vectors_rejects_missing_keys(tmp_path: Path) -> None:
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({"schema_version": 1, "config": {}}), encoding="utf-8")

    with pytest.raises(VectorMismatch, match="missing keys"):
        load_vectors(path)

    bundle = build_reference_vectors(VectorConfig())
    bundle["config"] = {"seed": 1}
    path.write_text(json.dumps(bundle), encoding="utf-8")

    with pytest.raises(
        VectorMismatch, match=r"config missing keys: \['stream', 'count', 'bound'\]"
    ):
        load_vectors(path)
    with pytest.raises(VectorMismatch, match="config missing keys"):
        main(["--check", str(path)])


def test_from_entropy_records_drawn_pair(tmp_path: Path) -> None:
    bundle_path = tmp_path / "entropy.json"

    assert main(["--from-entropy", "--output", str(bundle_path)]) == 0

    saved = json.loads(bundle_path.read_text(encoding="utf-8"))
    replay = build_reference_vectors(
        VectorConfig(
            seed=saved["config"]["seed"],
            stream=saved["config"]["stream"],
            count=6,
            bound=6,
        )
    )
    assert compare_vectors(saved, replay) is None
