"""Export finished games to JSON transcripts."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from sky_garden.game import GameResult, GameSession


def export_game(session: GameSession, result: GameResult, game_id: int = 0) -> dict:
    """A finished game as a plain dict: players, outcome and every turn."""
    players = []
    for p in session.players:
        players.append({
            "idx": p.idx,
            "name": p.name,
            "character": p.character.id if p.character else None,
            "final_position": p.position,
        })
    return {
        "game": {
            "id": game_id,
            "winner": result.winner,
            "reason": result.reason,
            "turns": result.turns,
            "rounds": int(session.round),
        },
        "players": players,
        "turns": [asdict(rec) for rec in result.log],
    }


def write_games(games: list[dict], output_dir: Path) -> list[Path]:
    """Write games.json plus one transcript per game under ``turns/``.

    Returns a list of all generated file paths.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    turns_dir = output_dir / "turns"
    turns_dir.mkdir(exist_ok=True)

    generated: list[Path] = []

    index = [g["game"] for g in games]
    index_path = output_dir / "games.json"
    index_path.write_text(json.dumps(index, indent=2))
    generated.append(index_path)

    for data in games:
        game_id = data["game"]["id"]
        path = turns_dir / f"{game_id}.json"
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False))
        generated.append(path)

    return generated
