"""Entry point: ``python -m orderbot``.

Supports two modes:
  - ``python -m orderbot``            → Launch FastAPI server with a live tick source
  - ``python -m orderbot cli``        → Headless simulation with a seeded workload
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Priority Order-Dispatch Engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--bots", type=int, default=0, help="Bots created at startup")
    srv.add_argument("--processing-ms", type=int, default=10_000)
    srv.add_argument("--tick-interval", type=float, default=0.1)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run headless simulation")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=1200)
    cli.add_argument("--bots", type=int, default=2, help="Bots created at startup")
    cli.add_argument("--processing-ms", type=int, default=10_000)
    cli.add_argument("--arrival-rate", type=float, default=0.08)
    cli.add_argument("--vip-ratio", type=float, default=0.25)
    cli.add_argument("--replay", type=str, default="replay.json")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from orderbot.api.app import create_app
    from orderbot.config import EngineConfig

    config = EngineConfig(
        initial_bots=args.bots,
        processing_time_ms=args.processing_ms,
        tick_interval=args.tick_interval,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from orderbot.config import EngineConfig
    from orderbot.engine.order_engine import OrderEngine
    from orderbot.engine.sim_loop import SimulationLoop
    from orderbot.systems.generator import WorkloadGenerator
    from orderbot.systems.rng import DeterministicRNG
    from orderbot.utils.logging import setup_logging
    from orderbot.utils.replay import ReplayRecorder

    config = EngineConfig(
        world_seed=args.seed,
        max_ticks=args.ticks,
        initial_bots=args.bots,
        processing_time_ms=args.processing_ms,
        order_arrival_rate=args.arrival_rate,
        vip_ratio=args.vip_ratio,
        replay_file=args.replay,
        log_level=args.log_level,
    )

    setup_logging(config.log_level)

    engine = OrderEngine(config)
    for _ in range(config.initial_bots):
        engine.add_bot()

    rng = DeterministicRNG(config.world_seed)
    generator = WorkloadGenerator(config, rng)
    recorder = ReplayRecorder(config.replay_file, config.world_seed)

    loop = SimulationLoop(config=config, engine=engine, generator=generator, recorder=recorder)
    loop.run()

    snapshot = engine.snapshot()
    logger.info(
        "Done. %d orders submitted, %d completed. Replay written to %s",
        len(snapshot.orders), len(snapshot.completed_orders()), config.replay_file,
    )


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            # Re-parse with serve defaults
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
