import csv
import json

from nnplayground.core.network import create_engine
from nnplayground.data import generate
from nnplayground.reporting import CsvSink, JsonlSink, PlotAdapter


def read_jsonl(path):
    return [json.loads(line) for line in path.read_text().splitlines() if line.strip()]


def test_jsonl_sink_records(tmp_path):
    sink = JsonlSink(tmp_path / "m.jsonl", dataset="xor", seed=3)
    sink.on_epoch(1, {"loss": 0.5, "accuracy": 0.75})
    sink(2, {"loss": 0.25, "accuracy": 1})
    records = read_jsonl(sink.path)
    assert records == [
        {"epoch": 1, "dataset": "xor", "seed": 3, "loss": 0.5, "accuracy": 0.75},
        {"epoch": 2, "dataset": "xor", "seed": 3, "loss": 0.25, "accuracy": 1.0},
    ]


def test_csv_sink_writes_header_once(tmp_path):
    sink = CsvSink(tmp_path / "m.csv")
    sink.on_epoch(1, {"loss": 0.5, "accuracy": 0.75})
    sink.on_epoch(2, {"loss": 0.25, "accuracy": 1.0})
    with sink.path.open() as handle:
        rows = list(csv.DictReader(handle))
    assert [row["epoch"] for row in rows] == ["1", "2"]
    assert set(rows[0]) == {"accuracy", "epoch", "loss"}


def test_plot_adapter_disabled_writes_nothing(tmp_path):
    adapter = PlotAdapter(tmp_path / "plots", enable_plots=False)
    adapter.on_epoch(1, {"loss": 1.0})
    network = create_engine([2, 3, 1], "relu", 0.01, seed=0)
    assert adapter.close(network, generate("xor", 10, seed=0)) == []
    assert not (tmp_path / "plots").exists()


def test_plot_adapter_headless(tmp_path):
    adapter = PlotAdapter(tmp_path, enable_plots=True, resolution=8)
    adapter.on_epoch(1, {"loss": 1.0})
    adapter.on_epoch(2, {"loss": 0.5})
    network = create_engine([2, 3, 3, 1], "tanh", 0.01, seed=0)
    paths = adapter.close(network, generate("gaussian", 20, seed=0))
    assert [p.name for p in paths] == ["loss.png", "decision_boundary.png", "network.png"]
    for path in paths:
        assert path.exists()
