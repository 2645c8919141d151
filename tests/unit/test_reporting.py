import csv
import json

import numpy as np
import pytest

from scarecrow.reporting import LossLog, max_abs_error, plot_run, write_loss_table


def test_loss_log_tracks_delta_and_best(tmp_path):
    log = LossLog(tmp_path / "losses.jsonl")
    for epoch, loss in enumerate([0.5, 0.3, 0.4], start=1):
        log.on_epoch(epoch, {"loss": loss})

    records = [json.loads(line) for line in log.path.read_text().splitlines()]
    assert [r["iteration"] for r in records] == [1, 2, 3]
    assert records[0]["delta"] is None
    assert records[1]["delta"] == pytest.approx(-0.2)
    assert records[2]["delta"] == pytest.approx(0.1)
    assert [r["best"] for r in records] == [0.5, 0.3, 0.3]


def test_loss_table_numbers_iterations_from_one(tmp_path):
    path = write_loss_table(tmp_path / "losses.csv", [0.25, 0.125])
    with path.open() as handle:
        rows = list(csv.DictReader(handle))
    assert [int(row["iteration"]) for row in rows] == [1, 2]
    assert [float(row["loss"]) for row in rows] == [0.25, 0.125]


def test_max_abs_error_takes_the_worst_sample():
    outputs = [np.array([0.1]), np.array([0.7])]
    targets = [np.array([0.0]), np.array([1.0])]
    assert max_abs_error(outputs, targets) == pytest.approx(0.3)
    assert max_abs_error([], []) == 0.0


def test_plot_run_skips_empty_history(tmp_path):
    assert plot_run(tmp_path, [], [], []) is None
    assert not (tmp_path / "run.png").exists()


def test_plot_run_writes_figure(tmp_path):
    pytest.importorskip("matplotlib")
    path = plot_run(tmp_path, [0.5, 0.25], [np.array([0.2])], [np.array([0.0])])
    assert path == tmp_path / "run.png"
    assert path.exists()
