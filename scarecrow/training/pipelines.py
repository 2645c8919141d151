"""Pipeline assembly: build a network and trainer from a config mapping."""

from __future__ import annotations

import json
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

import numpy as np

from ..core.errors import InvalidConfiguration, ShapeMismatch
from ..core.layers import build_layer
from ..core.network import Network
from ..core.types import RunResult, Vector
from ..data import DatasetSpec, get_dataset
from ..reporting.artifacts import write_run_summary
from ..reporting.metrics import LossLog, write_loss_table
from ..reporting.plots import plot_run
from .trainer import SGDTrainer


def _gate_preset(name: str, seed: int) -> Mapping[str, object]:
    return {
        "data": {"name": name},
        "model": {
            "seed": seed,
            "layers": [
                {"type": "dense", "in": 2, "out": 6},
                {"type": "tanh", "size": 6},
                {"type": "dense", "in": 6, "out": 1},
                {"type": "sigmoid", "size": 1},
            ],
        },
        "train": {
            "iterations": 1000,
            "lr": 0.1,
            "loss": "squared_error",
            "run_dir": f"runs/{name}",
            "enable_plots": False,
        },
    }


_PRESETS: Dict[str, Mapping[str, object]] = {
    "xor": _gate_preset("xor", seed=7),
    "and": _gate_preset("and", seed=7),
    "or": _gate_preset("or", seed=7),
}


@dataclass(frozen=True)
class PipelineResult:
    """Everything a caller needs to report on a finished run."""

    run: RunResult
    network: Network
    dataset: DatasetSpec
    initial_predictions: List[Vector]
    predictions: List[Vector]
    metrics_path: str
    summary_path: str
    plot_path: str = ""


def presets() -> Mapping[str, Mapping[str, object]]:
    return {name: deepcopy(cfg) for name, cfg in _PRESETS.items()}


def load_preset(name: str) -> Mapping[str, object]:
    try:
        return deepcopy(_PRESETS[name])
    except KeyError as exc:
        available = ", ".join(sorted(_PRESETS))
        raise InvalidConfiguration(f"Unknown preset {name!r}. Available presets: {available}") from exc


def load_config_file(path: str | Path) -> Mapping[str, object]:
    """Read a JSON or YAML config file into a mapping."""

    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in {".yaml", ".yml", ".json"}:
        raise InvalidConfiguration(f"Unsupported config file type: {path.suffix}")
    text = path.read_text()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load config files in YAML format") from exc
        data = yaml.safe_load(text) or {}
    else:
        data = json.loads(text or "{}")

    if not isinstance(data, Mapping):
        raise InvalidConfiguration(f"Config {path.name} must decode to a mapping")
    return data


def merge_config(base: dict, override: Mapping[str, object]) -> dict:
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = merge_config(dict(base[key]), value)
        else:
            base[key] = value
    return base


def build_network(model_cfg: Mapping[str, object]) -> Network:
    """Build layers in order from ``model_cfg["layers"]`` with a seeded generator."""

    layer_cfgs = model_cfg.get("layers")
    if not layer_cfgs:
        raise InvalidConfiguration("Model config requires a non-empty `layers` list")
    seed = model_cfg.get("seed")
    rng = np.random.default_rng(None if seed is None else int(seed))  # type: ignore[arg-type]
    return Network(build_layer(cfg, rng) for cfg in layer_cfgs)  # type: ignore[union-attr]


def run_pipeline(config: Mapping[str, object]) -> PipelineResult:
    missing = {"data", "model", "train"} - set(config)
    if missing:
        raise InvalidConfiguration(f"Config is missing sections: {', '.join(sorted(missing))}")
    data_cfg = dict(config["data"])  # type: ignore[arg-type]
    model_cfg = dict(config["model"])  # type: ignore[arg-type]
    train_cfg = dict(config["train"])  # type: ignore[arg-type]

    dataset = get_dataset(str(data_cfg.get("name", "xor")), **data_cfg.get("options", {}))
    network = build_network(model_cfg)
    if network.input_width != dataset.d_in:
        raise ShapeMismatch(
            f"Network expects {network.input_width} inputs but dataset has {dataset.d_in}"
        )
    if network.output_width != dataset.d_out:
        raise ShapeMismatch(
            f"Network produces {network.output_width} outputs but dataset has {dataset.d_out}"
        )

    trainer = SGDTrainer(
        train_cfg.get("iterations", 1000),  # type: ignore[arg-type]
        train_cfg.get("lr", 0.1),  # type: ignore[arg-type]
        loss=str(train_cfg.get("loss", "squared_error")),
    )

    run_dir = Path(str(train_cfg.get("run_dir", f"runs/{dataset.name}")))
    run_dir.mkdir(parents=True, exist_ok=True)

    _print_startup_summary(
        dataset_name=dataset.name,
        network=network,
        loss=trainer.loss.name,
        iterations=trainer.iterations,
        lr=trainer.learning_rate,
    )

    loss_log = LossLog(run_dir / "metrics.jsonl")
    trainer.callbacks.append(loss_log)

    data = dataset.training_set
    initial = network.predict(data.inputs)
    result = trainer.train(network, data)
    final = network.predict(data.inputs)

    write_loss_table(run_dir / "metrics.csv", result.losses)
    summary = write_run_summary(
        run_dir / "summary.json",
        config=json.loads(json.dumps(config)),
        dataset={"name": dataset.name, **dataset.provenance},
        network=network,
        result=result,
        inputs=data.inputs,
        initial=initial,
        final=final,
        targets=data.targets,
    )
    plot_path = None
    if bool(train_cfg.get("enable_plots", False)):
        plot_path = plot_run(run_dir, result.losses, final, data.targets)

    return PipelineResult(
        run=result,
        network=network,
        dataset=dataset,
        initial_predictions=initial,
        predictions=final,
        metrics_path=str(loss_log.path),
        summary_path=str(summary),
        plot_path=str(plot_path) if plot_path else "",
    )


def _print_startup_summary(
    *,
    dataset_name: str,
    network: Network,
    loss: str,
    iterations: int,
    lr: float,
) -> None:
    print("=== scarecrow run ===")
    print(f"Dataset       : {dataset_name}")
    print(f"Network       : {network!r}")
    print(f"Loss          : {loss}")
    print(f"Iterations    : {iterations}")
    print(f"Learning rate : {lr}")
    print(f"Parameters    : {network.parameter_count()}")
    print("=====================")


def format_predictions(
    inputs: Sequence[Vector], outputs: Sequence[Vector], targets: Sequence[Vector]
) -> List[str]:
    """Render ``X: [...], Y: [...], T: [...]`` lines for display."""

    lines = []
    for x, y, t in zip(inputs, outputs, targets):
        x, y, t = (np.asarray(v).tolist() for v in (x, y, t))
        lines.append(f"X: {x}, Y: {y}, T: {t}")
    return lines


__all__ = [
    "PipelineResult",
    "build_network",
    "format_predictions",
    "load_config_file",
    "load_preset",
    "merge_config",
    "presets",
    "run_pipeline",
]
