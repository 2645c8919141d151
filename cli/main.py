"""Command line entry point that trains a preset network and prints X/Y/T triples."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

from scarecrow.training import pipelines


def _format_result(result: pipelines.PipelineResult) -> str:
    payload = {
        "steps": result.run.steps,
        "final_loss": result.run.final_loss,
        "metrics": result.metrics_path,
        "summary": result.summary_path,
    }
    if result.plot_path:
        payload["plot"] = result.plot_path
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    preset_names = sorted(pipelines.presets().keys())
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=preset_names,
        default="xor",
        help="Preset configuration to execute",
    )
    parser.add_argument(
        "--config", type=Path, help="Optional JSON/YAML config override"
    )
    parser.add_argument("--iterations", type=int, help="Override the iteration count")
    parser.add_argument("--lr", type=float, help="Override the learning rate")
    parser.add_argument("--seed", type=int, help="Seed used for weight initialisation")
    parser.add_argument("--run-dir", type=Path, help="Directory for run artifacts")
    parser.add_argument(
        "--enable-plots",
        action="store_true",
        help="Write loss and prediction figures to run.png",
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in sorted(pipelines.presets().keys()):
            print(name)
        raise SystemExit(0)

    config = json.loads(json.dumps(pipelines.load_preset(args.preset)))

    if args.config:
        override = pipelines.load_config_file(args.config)
        if {"data", "model", "train"} <= set(override.keys()):
            config = json.loads(json.dumps(override))
        else:
            config = pipelines.merge_config(config, override)

    train_cfg = config.setdefault("train", {})
    if args.iterations is not None:
        train_cfg["iterations"] = int(args.iterations)
    if args.lr is not None:
        train_cfg["lr"] = float(args.lr)
    if args.run_dir is not None:
        train_cfg["run_dir"] = str(args.run_dir)
    if args.enable_plots:
        train_cfg["enable_plots"] = True
    if args.seed is not None:
        config.setdefault("model", {})["seed"] = int(args.seed)

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    result = pipelines.run_pipeline(config)

    data = result.dataset.training_set
    print("Before training:")
    for line in pipelines.format_predictions(data.inputs, result.initial_predictions, data.targets):
        print(line)
    print("After training:")
    for line in pipelines.format_predictions(data.inputs, result.predictions, data.targets):
        print(line)
    print(_format_result(result))


if __name__ == "__main__":
    main()
