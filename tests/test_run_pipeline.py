import json
import sys
from pathlib import Path

import pytest

import src.run_pipeline as run_pipeline
from src.processing.pipeline import compute_index


def test_run_pipeline_writes_outputs(monkeypatch, tmp_path, sample_collection):
    source = tmp_path / "districts.geojson"
    source.write_text(json.dumps(sample_collection), encoding="utf-8")
    output_dir = tmp_path / "exports"

    monkeypatch.setattr(
        sys,
        "argv",
        [
            "prog",
            "--input", str(source),
            "--weights", "0.5", "0.2", "0.2", "0.1",
            "--output-dir", str(output_dir),
        ],
    )

    with pytest.raises(SystemExit) as exc:
        run_pipeline.main()

    assert exc.value.code == 0

    scored = json.loads((output_dir / "tlbi_latest.geojson").read_text(encoding="utf-8"))
    style = json.loads((output_dir / "tlbi_style.json").read_text(encoding="utf-8"))

    assert len(scored["features"]) == 6
    assert scored["features"][3]["properties"]["TLBI"] is None
    assert style["field"] == "TLBI"
    assert style["fill_color"][0] == "step"
    assert len(style["legend"]) == len(style["breaks"]) - 1


def test_run_pipeline_missing_input(monkeypatch, tmp_path):
    monkeypatch.setattr(
        sys, "argv", ["prog", "--input", str(tmp_path / "missing.geojson")]
    )

    with pytest.raises(SystemExit) as exc:
        run_pipeline.main()

    assert exc.value.code == 1


def test_run_pipeline_rejects_malformed_input(monkeypatch, tmp_path):
    source = tmp_path / "bad.geojson"
    source.write_text(json.dumps({"type": "Feature"}), encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["prog", "--input", str(source)])

    with pytest.raises(SystemExit) as exc:
        run_pipeline.main()

    assert exc.value.code == 1


def test_run_export_versioned(tmp_path, sample_collection):
    result = compute_index(sample_collection)

    exports = run_pipeline.run_export(result, output_dir=str(tmp_path), versioned=True)

    assert exports["versioned_path"] is not None
    assert len(list(tmp_path.glob("tlbi_*.geojson"))) == 2
    assert len(exports["checksum"]) == 64


def test_run_pipeline_stdout_is_only_the_report(monkeypatch, capsys, tmp_path, sample_collection):
    source = tmp_path / "districts.geojson"
    source.write_text(json.dumps(sample_collection), encoding="utf-8")
    monkeypatch.setattr(run_pipeline.settings, "ENVIRONMENT", "production", raising=False)
    monkeypatch.setattr(
        sys,
        "argv",
        ["prog", "--input", str(source), "--output-dir", str(tmp_path / "out"), "--log-level", "DEBUG"],
    )

    with pytest.raises(SystemExit) as exc:
        run_pipeline.main()

    captured = capsys.readouterr()
    report = json.loads(captured.out)

    assert exc.value.code == 0
    assert report["summary"]["count"] == 6
    assert report["breaks"] == json.loads(
        (tmp_path / "out" / "tlbi_style.json").read_text(encoding="utf-8")
    )["breaks"]
    assert "Pipeline complete" in captured.err


def test_run_pipeline_writes_log_file(monkeypatch, tmp_path, sample_collection):
    source = tmp_path / "districts.geojson"
    source.write_text(json.dumps(sample_collection), encoding="utf-8")
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(
        sys,
        "argv",
        ["prog", "--input", str(source), "--output-dir", str(tmp_path / "out"), "--log-dir", str(log_dir)],
    )

    with pytest.raises(SystemExit):
        run_pipeline.main()

    files = list(log_dir.iterdir())
    assert len(files) == 1
    assert files[0].name.startswith("pipeline_")


def test_run_pipeline_rejects_unknown_log_level(monkeypatch, tmp_path):
    monkeypatch.setattr(
        sys, "argv", ["prog", "--input", str(tmp_path / "x.geojson"), "--log-level", "LOUD"]
    )

    with pytest.raises(SystemExit) as exc:
        run_pipeline.main()

    assert exc.value.code == 2


def test_style_sidecar_has_legend_header(tmp_path, sample_collection):
    result = compute_index(sample_collection)

    exports = run_pipeline.run_export(result, output_dir=str(tmp_path))
    style = json.loads(Path(exports["style_path"]).read_text(encoding="utf-8"))

    assert style["legend_header"]["title"] == "Total Living Burden Index"
    assert len(style["legend_header"]["components"]) == 4
