"""Command line entry point for nnplayground training runs."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from nnplayground.core.activations import available_activations
from nnplayground.core.types import RunResult
from nnplayground.data import available_datasets
from nnplayground.training import pipelines


def _format_result(result: RunResult) -> str:
    payload = {
        "epochs": result.epochs,
        "loss": round(result.loss, 6),
        "accuracy": round(result.accuracy, 6),
        "metrics": result.metrics_path,
    }
    if result.plots:
        payload["plots"] = list(result.plots)
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor-relu",
        help="Preset configuration to execute",
    )
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config override")
    parser.add_argument(
        "--dataset", choices=list(available_datasets()), help="Override the dataset"
    )
    parser.add_argument(
        "--activation",
        choices=list(available_activations()),
        help="Override the hidden-layer activation",
    )
    parser.add_argument(
        "--hidden",
        type=int,
        nargs="+",
        metavar="N",
        help="Hidden layer sizes, e.g. --hidden 4 4",
    )
    parser.add_argument("--lr", type=float, help="Learning rate")
    parser.add_argument("--epochs", type=int, help="Number of epochs to train")
    parser.add_argument("--seed", type=int, help="Seed used for the dataset and the weights")
    parser.add_argument("--run-dir", help="Directory for metrics and plots")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Write loss, boundary and network figures"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def _load_override(path: Path) -> dict:
    text = path.read_text()
    if path.suffix in {".yml", ".yaml"}:
        try:
            import yaml  # type: ignore
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        return yaml.safe_load(text) or {}
    return json.loads(text)


def resolve_config(args: argparse.Namespace) -> dict:
    config = json.loads(json.dumps(pipelines.load_preset(args.preset)))

    if args.config:
        override = _load_override(args.config)
        if pipelines.REQUIRED_SECTIONS <= set(override.keys()):
            config = json.loads(json.dumps(override))
        else:
            config = pipelines.merge_config(config, override)

    data_cfg = config.setdefault("data", {})
    model_cfg = config.setdefault("model", {})
    train_cfg = config.setdefault("train", {})
    if args.dataset:
        data_cfg["name"] = args.dataset
    if args.activation:
        model_cfg["activation"] = args.activation
    if args.hidden:
        model_cfg["hidden"] = list(args.hidden)
    if args.lr is not None:
        train_cfg["lr"] = float(args.lr)
    if args.epochs is not None:
        train_cfg["epochs"] = int(args.epochs)
    if args.seed is not None:
        data_cfg.setdefault("options", {})["seed"] = int(args.seed)
        train_cfg["seed"] = int(args.seed)
    if args.run_dir:
        train_cfg["run_dir"] = args.run_dir
    if args.enable_plots:
        train_cfg["enable_plots"] = True
    return config


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = resolve_config(args)

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config)
    print(_format_result(result))


if __name__ == "__main__":
    main()
