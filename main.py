"""
Colony Battle Simulator — CLI Entry Point

Usage:
    python main.py                                  Interactive session
    python main.py --script scenarios/duel.txt      Run commands from a file
    python main.py --config config.json --output runs
    python main.py --inspect runs/20260101_120000
"""

import argparse
import sys
from pathlib import Path


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Colony Battle Simulator — turn-based colony-versus-colony simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                       Interactive session
  python main.py --script duel.txt                     Run commands from a file
  python main.py --script duel.txt --output runs       Also log metrics to runs/<timestamp>/
  python main.py --inspect runs/20260101_120000        Summarize a logged run
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to JSON config file (default: built-in defaults)",
    )
    parser.add_argument(
        "--script",
        type=str,
        default=None,
        help="Read commands from this file instead of the terminal",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Log per-tick metrics and snapshots under this directory",
    )
    parser.add_argument(
        "--run-name",
        type=str,
        default=None,
        help="Run subdirectory name (default: timestamp)",
    )
    parser.add_argument(
        "--inspect",
        type=str,
        default=None,
        help="Print a summary of a logged run directory and exit",
    )

    return parser.parse_args()


def inspect_run(run_dir: str) -> None:
    """Print the headline numbers of a logged run."""
    from src.logging.results import load_metrics, summarize_run

    try:
        summary = summarize_run(run_dir)
    except FileNotFoundError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    print(f"[Run] {run_dir}")
    print(f"  Ticks: {summary['ticks']}")
    print(f"  Battles: {summary['battles']}")
    print(f"  Conquests: {summary['conquests']}")
    print(f"  Starvations: {summary['starvations']}")
    print(f"  Food consumed: {summary['food_consumed']}")
    print(f"  Ended: {summary['ended']}")

    df = load_metrics(run_dir)
    if not df.empty:
        print()
        print(df[["tick", "active_colonies", "battles", "total_food", "total_combatants"]]
              .tail(10).to_string(index=False))


def run_session(config_path: str | None, script: str | None,
                output_dir: str | None, run_name: str | None) -> None:
    """Run an interactive or scripted command session."""
    from src.core.config import get_default_config, load_config
    from src.simulation.commands import CommandSurface
    from src.simulation.engine import SimulationEngine

    config = load_config(config_path) if config_path else get_default_config()
    engine = SimulationEngine(config)
    surface = CommandSurface(engine)

    run_manager = None
    if output_dir is not None:
        from src.logging.run_manager import RunManager
        run_manager = RunManager(config, base_dir=output_dir, run_name=run_name)
        run_manager.attach(engine)

    interactive = script is None
    if interactive:
        print("Welcome to the Colony Battle Simulator! Type 'help' for a list of commands.")
        lines = _prompt_lines()
    else:
        path = Path(script)
        if not path.exists():
            print(f"Error: script not found at {path}")
            sys.exit(1)
        lines = path.read_text(encoding="utf-8").splitlines()

    for line in lines:
        result = surface.execute(line)
        if result.lines:
            print(result.text)
        if result.exit:
            break

    if run_manager is not None:
        run_manager.finalize({
            "ticks": engine.current_tick,
            "colonies_spawned": engine.world.next_id,
            "active_colonies": engine.world.active_count,
            "survivors": [c.id for c in engine.world.active_colonies()],
        })
        print(f"Output saved to: {run_manager.run_dir}")


def _prompt_lines():
    while True:
        try:
            yield input("> ")
        except EOFError:
            return


def main() -> None:
    args = parse_args()

    if args.inspect:
        inspect_run(args.inspect)
        return

    run_session(args.config, args.script, args.output, args.run_name)


if __name__ == "__main__":
    main()
