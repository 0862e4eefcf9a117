"""Entry-point for headless lab runs."""

from __future__ import annotations

import argparse
import logging
import os
import random
import time
from pathlib import Path
from typing import Any, Optional

import numpy as np
import torch
import yaml
from dotenv import load_dotenv

from pslab.params import GridConfig, SimParams, coerce_float, coerce_int
from pslab.training import EpisodeController, TickDriver
from pslab.utils.maps import ascii_grid

LOGGER = logging.getLogger("pslab")
DEFAULT_CONFIG = Path("configs/default.yaml")


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Projective-simulation grid lab")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to YAML config (defaults to $PSLAB_CONFIG or configs/default.yaml)",
    )
    parser.add_argument("--preset", type=str, default=None, help="Override grid preset")
    parser.add_argument("--width", type=int, default=None, help="Override grid width")
    parser.add_argument("--height", type=int, default=None, help="Override grid height")
    parser.add_argument("--seed", type=int, default=None, help="Override RNG seed")
    parser.add_argument(
        "--wind",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Force wind perturbation on or off (default: from config)",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Ticks to run synchronously (0 => use the timed driver)",
    )
    parser.add_argument(
        "--seconds",
        type=float,
        default=None,
        help="Wall-clock seconds to run the timed driver when --steps is 0",
    )
    parser.add_argument("--render", action="store_true", help="Print the final grid")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Python logging level",
    )
    return parser.parse_args(argv)


def load_config(path: Optional[Path]) -> dict[str, Any]:
    if path is None or not path.exists():
        if path is not None:
            LOGGER.warning("Config %s not found, using defaults", path)
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def build_grid_config(cfg: dict[str, Any], args: argparse.Namespace) -> GridConfig:
    grid_cfg = dict(cfg.get("grid", {}))
    if args.width is not None:
        grid_cfg["width"] = args.width
    if args.height is not None:
        grid_cfg["height"] = args.height
    if args.preset is not None:
        grid_cfg["preset"] = args.preset
    seed = args.seed if args.seed is not None else cfg.get("seed")
    if seed is not None:
        grid_cfg["seed"] = seed
    return GridConfig.from_dict(grid_cfg)


def build_params(cfg: dict[str, Any], args: argparse.Namespace) -> SimParams:
    params = SimParams.from_dict(cfg.get("params", {}))
    if args.wind is not None:
        params = params.replace(wind=args.wind)
    return params


def build_run_settings(cfg: dict[str, Any], args: argparse.Namespace) -> tuple[int, float]:
    """Return (steps, seconds); steps == 0 selects the timed driver."""
    run_cfg = cfg.get("run") or {}
    steps = args.steps if args.steps is not None else coerce_int(run_cfg.get("steps"), 1000)
    seconds = args.seconds if args.seconds is not None else coerce_float(run_cfg.get("seconds"), 5.0)
    return max(0, steps), max(0.0, seconds)


def seed_everything(seed: Optional[int]) -> None:
    if seed is None:
        return
    LOGGER.info("Seeding RNGs with %s", seed)
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)


def run_synchronous(controller: EpisodeController, steps: int) -> None:
    report_every = max(1, steps // 10)
    for idx in range(steps):
        result = controller.tick()
        if result.terminal:
            LOGGER.debug("Episode %s return=%.3f", result.episode, result.episode_return)
        if (idx + 1) % report_every == 0:
            LOGGER.info(
                "step=%s episode=%s total_return=%.3f",
                controller.step_idx,
                controller.episode,
                controller.total_return,
            )


def run_timed(controller: EpisodeController, seconds: float) -> None:
    with TickDriver(controller) as driver:
        LOGGER.info("Running timed driver for %.1fs at %.3fs/tick", seconds, driver.interval)
        time.sleep(max(0.0, seconds))


def main(argv: Optional[list[str]] = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))
    load_dotenv()
    config_path = args.config
    if config_path is None:
        env_path = os.environ.get("PSLAB_CONFIG")
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG
    cfg = load_config(config_path)
    grid_config = build_grid_config(cfg, args)
    params = build_params(cfg, args)
    seed_everything(grid_config.seed)
    controller = EpisodeController(config=grid_config, params=params)
    LOGGER.info(
        "Lab initialized grid=%sx%s preset=%s params=%s",
        grid_config.width,
        grid_config.height,
        grid_config.preset,
        params.as_dict(),
    )

    steps, seconds = build_run_settings(cfg, args)
    if steps > 0:
        run_synchronous(controller, steps)
    else:
        run_timed(controller, seconds)

    snap = controller.snapshot()
    returns = [g for _, g in snap.episode_returns]
    mean_return = float(np.mean(returns[-10:])) if returns else 0.0
    LOGGER.info(
        "Finished step=%s episodes=%s total_return=%.3f recent_mean_return=%.3f",
        snap.step,
        len(returns),
        snap.total_return,
        mean_return,
    )
    if args.render:
        print(ascii_grid(snap.cells, snap.agent, snap.h))


if __name__ == "__main__":  # pragma: no cover
    main()
