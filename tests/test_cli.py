#!filepath: tests/test_cli.py
import json

import pandas as pd
import pytest
from typer.testing import CliRunner

from lintrain.cli import app
from lintrain.utils.logger import logs

runner = CliRunner()


@pytest.fixture(autouse=True)
def keep_test_logger(monkeypatch):
    # CLI 会重新配置 sink，测试中保持静默
    monkeypatch.setattr(logs, "configure", lambda cfg: logs)


@pytest.fixture
def csv_file(tmp_path):
    rows = []
    for i in range(1, 6):
        rows.append({"label": "pos", "x": float(i), "bias": 1.0})
        rows.append({"label": "neg", "x": -float(i), "bias": 1.0})
    path = tmp_path / "train.csv"
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "v0.1.0" in result.output


def test_train_and_inspect(tmp_path, csv_file):
    out = tmp_path / "model"
    result = runner.invoke(
        app,
        [
            "train",
            str(csv_file),
            "--out", str(out),
            "--opt", "model=linear_svm",
            "--opt", "iters=3",
        ],
    )

    assert result.exit_code == 0, result.output
    meta = json.loads((out / "artifact.json").read_text())
    assert meta["model_type"] == "linear_svm"
    assert sorted(meta["categories"]) == ["neg", "pos"]
    assert "--iters 3" in meta["arg_string"]

    result = runner.invoke(app, ["inspect", str(out)])
    assert result.exit_code == 0
    assert "linear_svm" in result.output


def test_incompatible_options_exit_with_error(tmp_path, csv_file):
    result = runner.invoke(
        app,
        ["train", str(csv_file), "--out", str(tmp_path / "m"), "--opt", "model=mira"],
    )

    assert result.exit_code == 2
    assert not (tmp_path / "m").exists()
