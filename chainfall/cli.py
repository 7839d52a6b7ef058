"""
Chainfall CLI - Command-line interface for the engine.

Usage:
    chainfall new [--seed N] [--starting-player blue|red]   Print a new game state
    chainfall replay <replay_file> [--verify]               Replay a recorded game

Replay files are JSON: {"seed", "starting_player", "config", "actions"}.
"""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from .engine_core.state import Player
from .game.setup import new_game
from .protocol import ReplayScript, events_to_dicts, parse_action, state_to_dict, to_json
from .replay import InvariantViolation, ReplayError, assert_core_invariants, run_replay

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Chainfall - deterministic rules engine",
        prog="chainfall",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # New game command
    new_parser = subparsers.add_parser("new", help="Print the initial state of a new game")
    new_parser.add_argument("--seed", type=int, default=0, help="Shuffle seed")
    new_parser.add_argument(
        "--starting-player", choices=[p.value for p in Player], default=Player.BLUE.value,
        help="Player who takes turn 1",
    )
    new_parser.add_argument("--board-size", type=int, help="Override the board size")
    new_parser.add_argument("--no-cards", action="store_true", help="Disable cards")

    # Replay command
    replay_parser = subparsers.add_parser("replay", help="Replay a recorded game")
    replay_parser.add_argument("replay_file", help="Path to replay JSON file")
    replay_parser.add_argument(
        "--verify", action="store_true",
        help="Replay twice and fail if the runs differ",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "new":
        cmd_new(args)
    elif args.command == "replay":
        cmd_replay(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_new(args):
    """Print the initial state of a new game."""
    overrides = {}
    if args.board_size is not None:
        overrides["board_size"] = args.board_size
    if args.no_cards:
        overrides["cards_enabled"] = False

    try:
        state = new_game(args.seed, Player(args.starting_player), overrides)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(to_json(state_to_dict(state)))


def cmd_replay(args):
    """Replay a recorded game with invariant checks after every step."""
    try:
        with open(args.replay_file, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        print(f"Error: File not found: {args.replay_file}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.replay_file}: {e}")
        sys.exit(1)

    try:
        script = ReplayScript.model_validate(raw)
        overrides = script.config.to_overrides() if script.config else {}
        board_size = overrides.get("board_size")
        actions = [parse_action(a, board_size=board_size) for a in script.actions]
    except ValidationError as e:
        print(f"Error: Invalid replay file:\n{e}")
        sys.exit(1)

    logger.debug("Loaded replay: seed=%d, %d action(s)", script.seed, len(actions))

    try:
        result = run_replay(
            script.seed, script.starting_player, actions, overrides,
            on_after_step=assert_core_invariants,
        )
    except (ReplayError, InvariantViolation) as e:
        print(f"Error: {e}")
        sys.exit(1)

    output = {
        "final_state": state_to_dict(result.final_state),
        "events": [events_to_dicts(events) for events in result.events_by_action],
    }

    if args.verify:
        again = run_replay(script.seed, script.starting_player, actions, overrides)
        second = {
            "final_state": state_to_dict(again.final_state),
            "events": [events_to_dicts(events) for events in again.events_by_action],
        }
        if to_json(second) != to_json(output):
            print("Error: Replay is not deterministic")
            sys.exit(1)
        logger.info("Replay verified: two runs produced identical output")

    print(to_json(output))


if __name__ == "__main__":
    main()
