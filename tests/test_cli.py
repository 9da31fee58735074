"""Tests for the command line interface."""
import pytest

from emojiclicker.cli import build_parser, build_strategy, main
from emojiclicker.strategy import GreedyCheapest, IdleOnly


def test_parser_defaults():
    args = build_parser().parse_args(["simulate"])
    assert args.strategy == "greedy_cheapest"
    assert args.seconds == 3600
    assert args.tick_resolution == 1.0


def test_build_strategy():
    assert isinstance(build_strategy("idle", 0), IdleOnly)
    greedy = build_strategy("greedy_cheapest", 5, reboot_at=3, upgrades=False)
    assert isinstance(greedy, GreedyCheapest)
    assert greedy.describe() == "GreedyCheapest (5 CPS) no upgrades reboot at 3"


def test_simulate(capsys, tmp_path):
    main([
        "simulate", "--seconds", "60", "--cps", "3", "--seed", "1",
        "--export-json", str(tmp_path / "run.json"),
    ])
    out = capsys.readouterr().out
    assert "Emoji Clicker Simulation Report" in out
    assert (tmp_path / "run.json").exists()


def test_monte_carlo(capsys):
    main(["simulate", "--seconds", "30", "--cps", "3", "--seed", "1", "--monte-carlo", "2"])
    out = capsys.readouterr().out
    assert "Monte Carlo: 2 runs" in out


def test_save_commands(capsys, tmp_path):
    save = str(tmp_path / "save.json")

    main(["status", "--save", save])
    assert "Emojis:" in capsys.readouterr().out

    main(["export", "--save", save])
    text = capsys.readouterr().out.strip()
    assert (tmp_path / "save.json").exists()

    main(["import", text, "--save", save])
    assert "Imported" in capsys.readouterr().out

    with pytest.raises(SystemExit) as exc:
        main(["import", "garbage", "--save", save])
    assert exc.value.code == 1

    main(["reset", "--yes", "--save", save])
    assert not (tmp_path / "save.json").exists()


def test_no_command(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 0
