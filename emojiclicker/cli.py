from __future__ import annotations

import argparse
import importlib
import logging
import sys

from emojiclicker.definition import Catalog
from emojiclicker.formatting import fmt_num, fmt_time, format_text_report
from emojiclicker.persistence import SaveSlot
from emojiclicker.runtime import GameRuntime
from emojiclicker.simulation import Simulation
from emojiclicker.strategy import ClickProfile, GreedyCheapest, IdleOnly, Strategy

DEFAULT_GAME = "emojiclicker.content"
DEFAULT_SAVE = "emojiclicker_save.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="emojiclicker",
        description="Emoji Clicker: headless engine, simulations and save tools",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument(
        "--game", default=DEFAULT_GAME, help="Python module with define_game()"
    )
    sub = parser.add_subparsers(dest="command")

    sim = sub.add_parser("simulate", help="Run a simulation")
    sim.add_argument(
        "--strategy",
        default="greedy_cheapest",
        choices=["greedy_cheapest", "idle"],
        help="Strategy to use (default: greedy_cheapest)",
    )
    sim.add_argument("--cps", type=float, default=0.0, help="Clicks per second")
    sim.add_argument("--seconds", type=float, default=3600, help="Simulated time (s)")
    sim.add_argument(
        "--tick-resolution", type=float, default=1.0, help="Seconds per tick"
    )
    sim.add_argument("--seed", type=int, default=None, help="Random seed")
    sim.add_argument(
        "--reboot-at", type=int, default=0, help="Reboot once gain reaches N (0 = never)"
    )
    sim.add_argument("--no-upgrades", action="store_true", help="Skip upgrades")
    sim.add_argument("--export-csv", default=None, help="CSV export path prefix")
    sim.add_argument("--export-json", default=None, help="JSON export path")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")
    sim.add_argument(
        "--monte-carlo", type=int, default=None, help="Number of Monte Carlo runs"
    )

    for name, help_text in (
        ("status", "Show a save file's progress"),
        ("export", "Print a save file as portable text"),
        ("import", "Replace a save file with portable text"),
        ("reset", "Delete a save file"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--save", default=DEFAULT_SAVE, help="Save file path")
        if name == "import":
            p.add_argument("text", help="Exported save text, or - to read stdin")
        if name == "reset":
            p.add_argument("--yes", action="store_true", help="Do not ask for confirmation")

    return parser


def load_game(module_path: str) -> Catalog:
    """Import module and call define_game()."""
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_game"):
        print(f"Error: module {module_path!r} has no define_game() function")
        sys.exit(1)
    return mod.define_game()


def build_strategy(name: str, cps: float, reboot_at: int = 0, upgrades: bool = True) -> Strategy:
    click_profile = ClickProfile(clicks_per_second=cps) if cps > 0 else None
    if name == "idle":
        return IdleOnly(click_profile=click_profile)
    return GreedyCheapest(click_profile=click_profile, upgrades=upgrades, reboot_at=reboot_at)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    catalog = load_game(args.game)

    if args.command == "simulate":
        strategy = build_strategy(
            args.strategy, args.cps, args.reboot_at, not args.no_upgrades
        )
        if args.monte_carlo and args.monte_carlo > 1:
            _run_monte_carlo(catalog, strategy, args)
            return

        report = Simulation(
            catalog,
            strategy,
            seconds=args.seconds,
            tick_resolution=args.tick_resolution,
            seed=args.seed,
        ).run()
        print(format_text_report(report))

        if args.export_csv:
            from emojiclicker.export import export_csv
            export_csv(report, args.export_csv)
            print(f"\nCSV exported to {args.export_csv}_*.csv")

        if args.export_json:
            from emojiclicker.export import export_json
            export_json(report, args.export_json)
            print(f"\nJSON exported to {args.export_json}")

        if args.plot:
            from emojiclicker.visualization import plot_simulation
            plot_simulation(report, args.plot)
            print(f"\nPlot saved to {args.plot}")
        return

    slot = SaveSlot(args.save)
    runtime = GameRuntime(catalog, slot=slot)

    if args.command == "status":
        grant = runtime.boot()
        _print_status(runtime)
        if grant is not None and grant.amount > 0:
            print(f"Offline: +{fmt_num(grant.amount)} for {fmt_time(grant.capped_away)}")
    elif args.command == "export":
        runtime.boot()
        print(runtime.export_save())
    elif args.command == "import":
        text = sys.stdin.read() if args.text == "-" else args.text
        result = runtime.import_save(text)
        if not result.success:
            print(f"Import failed: {result.reason}", file=sys.stderr)
            sys.exit(1)
        print(f"Imported save into {args.save}")
    elif args.command == "reset":
        if not args.yes:
            answer = input("Delete all progress? This cannot be undone [y/N] ")
            if answer.strip().lower() != "y":
                print("Aborted")
                return
        runtime.hard_reset()
        print(f"Deleted {args.save}")


def _print_status(runtime: GameRuntime) -> None:
    state = runtime.state
    earned = sum(1 for a in runtime.achievement_statuses() if a.earned)
    print(f"Emojis: {fmt_num(state.currency)}  EPS: {fmt_num(state.rate)}")
    print(f"Total earned: {fmt_num(state.total_earned)}  Clicks: {state.total_clicks}")
    print(f"Achievements: {earned}/{len(runtime.catalog.achievements)}")
    print(
        f"Aura: {state.prestige_available} available, {state.prestige_lifetime} lifetime, "
        f"reboot now for +{runtime.prestige_gain()}"
    )
    for p in runtime.producer_statuses():
        if p.count:
            print(f"  {p.display_name:<22s} x{p.count:<5d} next {fmt_num(p.next_cost)}")


def _run_monte_carlo(catalog: Catalog, strategy: Strategy, args) -> None:
    """Run multiple simulations and report aggregate results."""
    n = args.monte_carlo
    achievement_times: dict[str, list[float]] = {}
    final_rates: list[float] = []

    for i in range(n):
        report = Simulation(
            catalog,
            strategy,
            seconds=args.seconds,
            tick_resolution=args.tick_resolution,
            seed=(args.seed + i) if args.seed is not None else None,
        ).run()
        final_rates.append(report.final_rate)
        for aid, t in report.achievement_times.items():
            achievement_times.setdefault(aid, []).append(t)

    print(f"Monte Carlo: {n} runs")
    print(f"Final EPS: mean={fmt_num(sum(final_rates) / n)}, "
          f"min={fmt_num(min(final_rates))}, max={fmt_num(max(final_rates))}")
    if achievement_times:
        print("Achievement times (mean / min / max, runs reached):")
        for aid, times in sorted(achievement_times.items(), key=lambda kv: min(kv[1])):
            mean = sum(times) / len(times)
            print(f"  {aid}: {mean:.1f}s / {min(times):.1f}s / {max(times):.1f}s ({len(times)}/{n})")
