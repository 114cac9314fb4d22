import json
from pathlib import Path

import pytest

from nnplayground.core.errors import InvalidArgument
from nnplayground.training import pipelines


def _config(run_dir: Path, **train) -> dict:
    config = {
        "data": {"name": "gaussian", "options": {"count": 40, "seed": 0}},
        "model": {"hidden": [3], "activation": "tanh"},
        "train": {
            "epochs": 6,
            "lr": 0.05,
            "seed": 1,
            "log_every": 2,
            "run_dir": str(run_dir),
            "enable_plots": False,
        },
    }
    config["train"].update(train)
    return config


def test_pipeline_writes_metrics(tmp_path, capsys):
    result = pipelines.run_pipeline(_config(tmp_path / "run"))
    assert result.epochs == 6
    assert result.plots == ()
    records = [json.loads(line) for line in Path(result.metrics_path).read_text().splitlines()]
    assert [r["epoch"] for r in records] == [2, 4, 6]
    assert records[-1]["loss"] == pytest.approx(result.loss)
    assert records[-1]["accuracy"] == pytest.approx(result.accuracy)
    assert (tmp_path / "run" / "metrics.csv").exists()
    out = capsys.readouterr().out
    assert "=== nnplayground run ===" in out
    assert "[2, 3, 1]" in out


def test_last_epoch_is_always_logged(tmp_path):
    result = pipelines.run_pipeline(_config(tmp_path / "run", epochs=5, log_every=2))
    records = [json.loads(line) for line in Path(result.metrics_path).read_text().splitlines()]
    assert [r["epoch"] for r in records] == [2, 4, 5]


def test_pipeline_determinism(tmp_path):
    first = pipelines.run_pipeline(_config(tmp_path / "a"))
    second = pipelines.run_pipeline(_config(tmp_path / "b"))
    assert Path(first.metrics_path).read_text() == Path(second.metrics_path).read_text()


def test_pipeline_plots(tmp_path):
    result = pipelines.run_pipeline(_config(tmp_path / "run", enable_plots=True, plot_resolution=10))
    names = sorted(Path(p).name for p in result.plots)
    assert names == ["decision_boundary.png", "loss.png", "network.png"]


def test_presets_include_builtin_and_file_presets():
    names = set(pipelines.presets())
    assert {"xor-relu", "circle-relu", "spiral-tanh", "gaussian-sigmoid"} <= names
    assert "spiral-deep" in names
    deep = pipelines.load_preset("spiral-deep")
    assert deep["model"]["hidden"] == [8, 8, 8, 8]


def test_load_preset_returns_copies():
    preset = pipelines.load_preset("xor-relu")
    preset["model"]["hidden"].append(99)
    assert pipelines.load_preset("xor-relu")["model"]["hidden"] == [4, 4]


def test_unknown_preset():
    with pytest.raises(KeyError):
        pipelines.load_preset("does-not-exist")


def test_missing_section(tmp_path):
    config = _config(tmp_path)
    del config["model"]
    with pytest.raises(KeyError):
        pipelines.run_pipeline(config)


def test_invalid_model_config(tmp_path):
    config = _config(tmp_path)
    config["model"]["hidden"] = [0]
    with pytest.raises(InvalidArgument):
        pipelines.run_pipeline(config)


def test_merge_config():
    base = {"train": {"lr": 0.1, "epochs": 5}, "model": {"hidden": [4]}}
    merged = pipelines.merge_config(base, {"train": {"lr": 0.5}, "model": {"hidden": [2, 2]}})
    assert merged == {"train": {"lr": 0.5, "epochs": 5}, "model": {"hidden": [2, 2]}}


def test_xor_preset_converges(tmp_path):
    config = pipelines.load_preset("xor-relu")
    config["train"]["run_dir"] = str(tmp_path / "xor")
    result = pipelines.run_pipeline(config)
    assert result.epochs == 500
    assert result.accuracy > 0.9
