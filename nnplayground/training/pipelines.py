"""Preset configurations and the batch training pipeline."""

from __future__ import annotations

import json
import time
from copy import deepcopy
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from ..core.network import NeuralNetwork, create_engine
from ..core.types import RunResult
from ..data import generate
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter

_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor-relu": {
        "data": {"name": "xor", "options": {"count": 300, "seed": 17}},
        "model": {"hidden": [4, 4], "activation": "relu"},
        "train": {
            "epochs": 500,
            "lr": 0.01,
            "seed": 17,
            "log_every": 10,
            "run_dir": "runs/xor-relu",
            "enable_plots": False,
        },
    },
    "circle-relu": {
        "data": {"name": "circle", "options": {"count": 300, "seed": 0}},
        "model": {"hidden": [4, 4], "activation": "relu"},
        "train": {
            "epochs": 300,
            "lr": 0.01,
            "seed": 1,
            "log_every": 10,
            "run_dir": "runs/circle-relu",
            "enable_plots": False,
        },
    },
    "spiral-tanh": {
        "data": {"name": "spiral", "options": {"count": 300, "seed": 0}},
        "model": {"hidden": [8, 8, 8], "activation": "tanh"},
        "train": {
            "epochs": 1000,
            "lr": 0.03,
            "seed": 2,
            "log_every": 20,
            "run_dir": "runs/spiral-tanh",
            "enable_plots": False,
        },
    },
    "gaussian-sigmoid": {
        "data": {"name": "gaussian", "options": {"count": 300, "seed": 0}},
        "model": {"hidden": [4], "activation": "sigmoid"},
        "train": {
            "epochs": 50,
            "lr": 0.05,
            "seed": 3,
            "log_every": 5,
            "run_dir": "runs/gaussian-sigmoid",
            "enable_plots": False,
        },
    },
}

_PRESET_DIR = Path(__file__).resolve().parents[2] / "configs" / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None

REQUIRED_SECTIONS = {"data", "model", "train"}


def _read_preset_file(path: Path) -> Mapping[str, object]:
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load preset files in YAML format") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported preset file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Preset {path.name} must decode to a mapping")
    return data


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        presets: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                data = _read_preset_file(file)
                missing = REQUIRED_SECTIONS - set(data)
                if missing:
                    missing_str = ", ".join(sorted(missing))
                    raise KeyError(f"Preset {file.name} is missing required sections: {missing_str}")
                presets[file.stem] = json.loads(json.dumps(data))
        _FILE_PRESETS_CACHE = presets
    return {name: deepcopy(cfg) for name, cfg in _FILE_PRESETS_CACHE.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Mapping[str, object]:
    file_overrides = _file_presets()
    if name in file_overrides:
        return file_overrides[name]
    try:
        return deepcopy(_PRESETS[name])
    except KeyError:
        raise KeyError(f"Unknown preset: {name}") from None


def merge_config(base: dict, override: Mapping[str, object]) -> dict:
    """Recursively merge ``override`` into ``base`` and return ``base``."""

    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = merge_config(dict(base[key]), value)
        else:
            base[key] = value
    return base


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    """Train one network as described by ``config`` and write its artifacts."""

    missing = REQUIRED_SECTIONS - set(config)
    if missing:
        raise KeyError(f"Config is missing required sections: {', '.join(sorted(missing))}")
    data_cfg = dict(config["data"])
    model_cfg = dict(config["model"])
    train_cfg = dict(config["train"])

    data_opts = dict(data_cfg.get("options", {}))
    dataset = generate(
        str(data_cfg["name"]),
        int(data_opts.get("count", 300)),
        seed=data_opts.get("seed"),
    )

    epochs = int(train_cfg.get("epochs", 1))
    log_every = int(train_cfg.get("log_every", 1))
    if epochs < 1:
        raise ValueError(f"epochs must be >= 1, got {epochs}")
    if log_every < 1:
        raise ValueError(f"log_every must be >= 1, got {log_every}")
    seed = train_cfg.get("seed")

    dims = _build_dims(dataset.inputs.shape[1], model_cfg.get("hidden", []))
    network = create_engine(
        dims,
        str(model_cfg.get("activation", "relu")),
        float(train_cfg.get("lr", 0.01)),
        seed=seed,
    )

    run_dir = _resolve_run_dir(train_cfg, dataset.kind, network.activation)
    run_dir.mkdir(parents=True, exist_ok=True)

    _print_startup_summary(
        network=network, dataset_name=dataset.kind, samples=len(dataset), epochs=epochs
    )

    jsonl = JsonlSink(run_dir / "metrics.jsonl", dataset=dataset.kind, seed=seed)
    plotter = PlotAdapter(
        run_dir,
        enable_plots=bool(train_cfg.get("enable_plots", False)),
        resolution=int(train_cfg.get("plot_resolution", 50)),
    )
    loggers = [jsonl, CsvSink(run_dir / "metrics.csv"), plotter]

    result = None
    for epoch in range(1, epochs + 1):
        result = network.train_epoch(dataset)
        if epoch % log_every == 0 or epoch == epochs:
            metrics = result.as_dict()
            for logger in loggers:
                logger.on_epoch(epoch, metrics)

    plots = plotter.close(network, dataset)
    return RunResult(
        epochs=epochs,
        loss=result.loss,
        accuracy=result.accuracy,
        metrics_path=str(jsonl.path),
        plots=tuple(str(path) for path in plots),
    )


def _build_dims(d_in: int, hidden: Sequence[int]) -> List[int]:
    return [int(d_in)] + [int(h) for h in hidden] + [1]


def _resolve_run_dir(train_cfg: Mapping[str, object], dataset: str, activation: str) -> Path:
    if "run_dir" in train_cfg:
        return Path(train_cfg["run_dir"])
    timestamp = time.strftime("%Y%m%d-%H%M%S")
    return Path("runs") / timestamp / dataset / activation


def _print_startup_summary(
    *,
    network: NeuralNetwork,
    dataset_name: str,
    samples: int,
    epochs: int,
) -> None:
    print("=== nnplayground run ===")
    print(f"Dataset       : {dataset_name} ({samples} samples)")
    print(f"Dimensions    : {list(network.layer_sizes)}")
    print(f"Activation    : {network.activation}")
    print(f"Learning rate : {network.learning_rate}")
    print(f"Epochs        : {epochs}")
    print(f"Parameters    : {network.parameter_count()}")
    print("========================")


__all__ = ["load_preset", "merge_config", "presets", "run_pipeline"]
