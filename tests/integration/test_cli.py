import json
from pathlib import Path

import pytest

from cli.main import main


def test_cli_xor_preset_prints_triples(tmp_path, capsys):
    run_dir = tmp_path / "xor"
    main(["--preset", "xor", "--iterations", "20", "--run-dir", str(run_dir)])
    out = capsys.readouterr().out

    assert "Before training:" in out
    assert "After training:" in out
    assert out.count("X: [0.0, 1.0]") == 2
    assert "T: [1.0]" in out
    summary = json.loads(out.strip().splitlines()[-1])
    assert summary["steps"] == 80
    assert (run_dir / "metrics.jsonl").exists()
    assert (run_dir / "summary.json").exists()


def test_cli_lists_presets(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--list-presets"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.split() == ["and", "or", "xor"]


def test_cli_config_override_and_dump(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    override = tmp_path / "override.json"
    override.write_text(json.dumps({"train": {"iterations": 2, "run_dir": "runs/custom"}}))
    dump = tmp_path / "resolved.json"

    main(["--preset", "and", "--config", str(override), "--seed", "11", "--dump-config", str(dump)])

    resolved = json.loads(dump.read_text())
    assert resolved["train"]["iterations"] == 2
    assert resolved["model"]["seed"] == 11
    assert resolved["data"]["name"] == "and"
    assert (Path("runs/custom") / "metrics.csv").exists()


def test_cli_enable_plots_writes_loss_curve(tmp_path):
    pytest.importorskip("matplotlib")
    run_dir = tmp_path / "plots"
    main(["--iterations", "5", "--run-dir", str(run_dir), "--enable-plots"])
    assert (run_dir / "run.png").exists()


def test_cli_default_xor_run_reaches_targets(tmp_path, capsys):
    run_dir = tmp_path / "xor-full"
    main(["--run-dir", str(run_dir)])
    payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])

    assert payload["steps"] == 4000
    summary = json.loads(Path(payload["summary"]).read_text())
    assert summary["max_abs_error"]["after"] < 0.1
    assert summary["max_abs_error"]["after"] < summary["max_abs_error"]["before"]
