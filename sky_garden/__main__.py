"""CLI entry point: python -m sky_garden {play,simulate,chart}."""

from __future__ import annotations

import argparse
import os
import random
import sys
from pathlib import Path

from sky_garden.cards import CHARACTERS
from sky_garden.chart import make_race_chart
from sky_garden.export import export_game, write_games
from sky_garden.game import GameSession, Phase, new_session, play_out
from sky_garden.log import configure_logging, default_level
from sky_garden.render import render
from sky_garden.stats import summarize

SEED_ENV = "SKY_GARDEN_SEED"
CHARACTER_IDS = [c.id for c in CHARACTERS]


def _default_seed() -> str | None:
    # argparse runs string defaults through ``type=int``, so a bad value is
    # reported as a usage error.
    return os.environ.get(SEED_ENV) or None


def _ask(prompt: str) -> str | None:
    """Read one answer from the terminal; ``None`` once input is exhausted."""
    try:
        return input(prompt).strip().lower()
    except EOFError:
        print()
        return None


# ── play ─────────────────────────────────────────────────────────────

def _choose_characters(session: GameSession, picks: list[str | None]) -> bool:
    for idx in (0, 1):
        choice = picks[idx]
        while True:
            if choice is None:
                menu = ", ".join(f"{c.id} {c.emoji}" for c in CHARACTERS)
                choice = _ask(f"Player {idx + 1}, choose a character ({menu}): ")
                if choice is None:
                    return False
            result = session.select_character(idx, choice)
            print(result.message)
            if result.ok:
                break
            choice = None
    return True


def cmd_play(args: argparse.Namespace) -> None:
    """Hot-seat game in the terminal."""
    session = GameSession(rng=random.Random(args.seed))

    while True:
        if not _choose_characters(session, [args.p1, args.p2]):
            return
        result = session.start()
        if not result.ok:
            print(result.message, file=sys.stderr)
            sys.exit(1)
        print(session.log[-1])

        while session.phase is Phase.GAME:
            print()
            print(render(session))
            player = session.players[session.current_player]
            cmd = _ask(f"{player.label}: Enter to roll, q to quit > ")
            if cmd is None or cmd == "q":
                return
            result = session.roll()
            outcome = result.outcome
            for msg in outcome.messages if outcome else [result.message]:
                print(msg)

        print()
        print(render(session))
        winner = session.players[session.winner]
        print(f"\n🏆 {winner.label} wins the Sky Garden Race in {session.turn_count} turns!")
        again = _ask("r to race again, anything else to quit > ")
        if again != "r":
            return
        session.reset()
        args.p1 = args.p2 = None


# ── simulate ─────────────────────────────────────────────────────────

def cmd_simulate(args: argparse.Namespace) -> None:
    """Autoplay many games and print what happened."""
    master = random.Random(args.seed)
    results = []
    exported = []

    for game_id in range(args.games):
        session = new_session(args.p1, args.p2, seed=master.randrange(2**32))
        result = play_out(session, max_turns=args.max_turns)
        results.append(result)
        if args.export:
            exported.append(export_game(session, result, game_id=game_id))

    summary = summarize(results)
    print(f"\nSky Garden Race: {summary.games} games")
    print("=" * 40)
    print(f"  Player 1 wins   {summary.wins[0]:6d}")
    print(f"  Player 2 wins   {summary.wins[1]:6d}")
    print(f"  Unfinished      {summary.unfinished:6d}")
    print(f"  P1 win rate     {summary.first_player_win_rate:6.1%}")
    print(f"  Avg turns       {summary.average_turns:6.1f}")
    if summary.events:
        print("\nEvents")
        for name, count in summary.events.most_common():
            print(f"  {name:20s} {count:6d}")
    if summary.tile_effects:
        print("\nTile effects")
        for name, count in summary.tile_effects.most_common():
            print(f"  {name:20s} {count:6d}")

    if args.export:
        generated = write_games(exported, Path(args.export))
        print(f"\nWrote {len(generated)} JSON files to {args.export}")


# ── chart ────────────────────────────────────────────────────────────

def cmd_chart(args: argparse.Namespace) -> None:
    """Autoplay one game and save its race chart."""
    session = new_session(args.p1, args.p2, seed=args.seed)
    result = play_out(session, max_turns=args.max_turns)
    names = tuple(p.label for p in session.players)
    out = args.output or "race.png"
    make_race_chart(result.log, names=names, output_path=out)
    print(f"Chart saved to {out}")


# ── main ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sky_garden",
        description="Sky Garden Race, a two-player vines & clouds board game",
    )
    parser.add_argument("--log-level", default=default_level(), help="Logging level (default from $SKY_GARDEN_LOG_LEVEL)")
    sub = parser.add_subparsers(dest="command")

    def add_common(p: argparse.ArgumentParser, p1: str | None, p2: str | None) -> None:
        p.add_argument("--p1", choices=CHARACTER_IDS, default=p1, help="Player 1 character")
        p.add_argument("--p2", choices=CHARACTER_IDS, default=p2, help="Player 2 character")
        p.add_argument("--seed", type=int, default=_default_seed(), help="Random seed (default from $SKY_GARDEN_SEED)")

    p_play = sub.add_parser("play", help="Play a hot-seat game in the terminal")
    add_common(p_play, None, None)

    p_sim = sub.add_parser("simulate", help="Autoplay many games and summarize")
    add_common(p_sim, "bunny", "fox")
    p_sim.add_argument("--games", type=int, default=100, help="Number of games (default 100)")
    p_sim.add_argument("--max-turns", type=int, default=1000, help="Max turns per game")
    p_sim.add_argument("--export", help="Directory for JSON transcripts")

    p_chart = sub.add_parser("chart", help="Autoplay one game and chart the race")
    add_common(p_chart, "bunny", "fox")
    p_chart.add_argument("--max-turns", type=int, default=1000, help="Max turns for the game")
    p_chart.add_argument("--output", "-o", help="Output PNG path")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level.upper())

    if args.command in ("simulate", "chart") and args.p1 == args.p2:
        print("Players must choose different characters.", file=sys.stderr)
        sys.exit(2)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "chart":
        cmd_chart(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
