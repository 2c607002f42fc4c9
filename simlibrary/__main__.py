"""Entry point: ``python -m simlibrary``.

Supports two modes:
  - ``python -m simlibrary``        -> Launch the FastAPI server
  - ``python -m simlibrary cli``    -> Headless run on a simulated clock
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SimLibrary tower engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--save-dir", type=str, default="saves")
    srv.add_argument("--tick-rate", type=float, default=1.0)
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless game on a simulated clock")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--seconds", type=int, default=600, help="Simulated seconds to run")
    cli.add_argument("--step-ms", type=int, default=1000, help="Simulated time per tick")
    cli.add_argument("--auto-restock", action="store_true", help="Restock empty categories each tick")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from simlibrary.api.app import create_app
    from simlibrary.config import EngineConfig

    config = EngineConfig(
        world_seed=args.seed,
        save_dir=args.save_dir,
        tick_rate=args.tick_rate,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from simlibrary.config import EngineConfig
    from simlibrary.core.enums import FloorStatus
    from simlibrary.engine.persistence import MemoryStore
    from simlibrary.engine.session import GameSession
    from simlibrary.utils.clock import FakeClock
    from simlibrary.utils.logging import setup_logging

    config = EngineConfig(world_seed=args.seed, log_level=args.log_level)
    setup_logging(config.log_level)

    clock = FakeClock()
    session = GameSession(config=config, clock=clock, store=MemoryStore())

    steps = max(1, args.seconds * 1000 // args.step_ms)
    for _ in range(steps):
        clock.advance(args.step_ms)
        session.tick()
        if args.auto_restock:
            for floor in session.state.floors:
                if floor.status != FloorStatus.READY:
                    continue
                for idx, cat in enumerate(floor.book_stock):
                    if cat.current_stock == 0 and not cat.restocking and floor.is_unlocked(idx):
                        session.restock_books(floor.id, idx)

    state = session.state
    logger.info(
        "Ran %d ticks (%ds simulated): level %d, %d stars, %d bucks, %d floors, %d readers served",
        session.loop.ticks, args.seconds, state.level, state.stars, state.tower_bucks,
        len(state.floors), state.stats.get("total_readers_served", 0),
    )
    for event in session.event_log.latest(10):
        logger.info("  [%s] %s", event.category, event.message)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])
    if args.command == "serve":
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
