"""Command line entry point: build a network from a layer config and train it."""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path
from typing import Iterable

import numpy as np

from circuitnet.core.config import read_config
from circuitnet.core.errors import CircuitNetError
from circuitnet.core.network import Network
from circuitnet.data.synthetic import SyntheticClassification
from circuitnet.reporting import JsonlSink, PlotAdapter, write_manifest
from circuitnet.training.settings import TrainSettings, load_settings, merge_settings
from circuitnet.training.trainer import Trainer

logger = logging.getLogger("circuitnet.cli")


def _format_result(result) -> str:
    payload = {
        "steps": result.steps,
        "first_loss": result.first_loss,
        "final_loss": result.final_loss,
        "metrics": result.metrics_path,
        "manifest": result.manifest_path,
    }
    return json.dumps(payload, sort_keys=True)


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--network", type=Path, required=True, help="Pipe-delimited layer config file"
    )
    parser.add_argument(
        "--settings", type=Path, help="Optional JSON/YAML run settings override"
    )
    parser.add_argument("--steps", type=int, help="Number of training steps")
    parser.add_argument("--lr", type=float, help="Learning rate")
    parser.add_argument("--l1", type=float, help="L1 regularisation coefficient")
    parser.add_argument(
        "--seed", type=int, help="Seed for weight initialisation and synthetic samples"
    )
    parser.add_argument("--run-dir", help="Directory receiving metrics and manifest")
    parser.add_argument(
        "--enable-plots",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write a loss curve to <run-dir>/loss.png",
    )
    parser.add_argument(
        "--describe", action="store_true", help="Print the network topology and exit"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser.parse_args(argv)


def _resolve_settings(args: argparse.Namespace) -> TrainSettings:
    settings = TrainSettings()
    if args.settings:
        settings = merge_settings(settings, load_settings(args.settings))
    return merge_settings(
        settings,
        {
            "steps": args.steps,
            "lr": args.lr,
            "l1": args.l1,
            "seed": args.seed,
            "run_dir": args.run_dir,
            "enable_plots": args.enable_plots,
        },
    )


def run(args: argparse.Namespace) -> None:
    settings = _resolve_settings(args)
    config_text = read_config(args.network)
    network = Network.from_config(config_text, rng=np.random.default_rng(settings.seed))

    if args.describe:
        print(network.describe())
        return

    run_dir = Path(settings.run_dir)
    metrics = JsonlSink(run_dir / "metrics.jsonl", seed=settings.seed)
    plots = PlotAdapter(run_dir, enable_plots=settings.enable_plots)
    source = SyntheticClassification(
        n_inputs=network.input_size,
        n_classes=network.output_size,
        seed=settings.seed,
        noise=settings.noise,
    )
    logger.info(
        "training %s for %d steps (lr=%g, l1=%g)",
        " -> ".join(str(n) for n in network.neuron_counts()),
        settings.steps,
        settings.lr,
        settings.l1,
    )
    trainer = Trainer(network, source, settings, callbacks=[metrics, plots])
    result = trainer.run()
    manifest = write_manifest(
        run_dir / "manifest.json",
        settings=settings.to_dict(),
        topology=[layer.describe() for layer in network.layers],
        network_config=config_text,
    )
    result = dataclasses.replace(
        result, metrics_path=str(metrics.path), manifest_path=manifest
    )
    print(_format_result(result))


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    try:
        run(args)
    except CircuitNetError as exc:
        raise SystemExit(f"error: {exc}") from exc


if __name__ == "__main__":
    main()
