"""
analytics/arcade.py
-------------------

Arcade catalogue, play counters and the input mapping for the embedded
animation runtime.

Each game is an animation asset driven by one state machine. This module
never interprets the animation; it only decides which named inputs to
fire or set for a given pointer/keyboard event.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from database.documents import Document, DocumentKey, DocumentStore, Query, Subscription, Transaction

GAME_STATS_COLLECTION = "gameStats"
STATE_MACHINE = "State Machine 1"


@dataclass(frozen=True)
class ArcadeGame:
    id: str
    name: str
    description: str
    asset: str


ARCADE_GAMES: Tuple[ArcadeGame, ...] = (
    ArcadeGame("tic-tac-toe", "Tic-Tac-Toe", "Classic Tic-Tac-Toe with a twist of animation.", "/rive/tictac.riv"),
    ArcadeGame("Hit-Road", "Hit-Road", "Dodge the obstacles and hit the road!", "/rive/hitroad.riv"),
    ArcadeGame("Chameleon-Catch", "Chameleon-Catch", "Click & catch the bees as they appear!", "/rive/char.riv"),
    ArcadeGame("Maze-Runner", "Maze-Runner", "Find your way through the maze.", "/rive/maze.riv"),
)


class UnknownGame(LookupError):
    pass


def get_game(game_id: str) -> ArcadeGame:
    for game in ARCADE_GAMES:
        if game.id == game_id:
            return game
    raise UnknownGame(f"No arcade game with id '{game_id}'.")


# ---------------------------------------------------------------------------
# Play counters
# ---------------------------------------------------------------------------

def record_play(store: DocumentStore, game_id: str) -> int:
    """Atomically bump ``playCount`` for a game; returns the new count."""
    get_game(game_id)
    key = DocumentKey(GAME_STATS_COLLECTION, game_id)

    def txn(tx: Transaction) -> int:
        current = tx.get(key)
        if current is None:
            tx.set(key, {"playCount": 1})
            return 1
        count = int(current.get("playCount") or 0) + 1
        tx.update(key, {"playCount": count})
        return count

    return store.run_transaction(txn)


def _counts(docs: List[Document]) -> Dict[str, int]:
    return {doc.id: int(doc.data.get("playCount") or 0) for doc in docs}


def play_counts(store: DocumentStore) -> Dict[str, int]:
    return _counts(store.query(Query(GAME_STATS_COLLECTION)))


def subscribe_play_counts(store: DocumentStore, callback: Callable[[Dict[str, int]], None]) -> Subscription:
    return store.subscribe(Query(GAME_STATS_COLLECTION), lambda docs: callback(_counts(docs)))


# ---------------------------------------------------------------------------
# Embedded animation inputs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class InputCommand:
    op: str                       # "fire" | "set"
    name: str
    value: Optional[bool] = None

    def as_dict(self) -> Dict[str, object]:
        return {"op": self.op, "name": self.name, "value": self.value}


_RESET_HITS = [
    InputCommand("set", "bool_CactusHit", False),
    InputCommand("set", "bool_BirdHit", False),
    InputCommand("set", "boolUnhit", True),
]
_START_AND_JUMP = [InputCommand("fire", "start"), InputCommand("fire", "jump")]

INPUT_MAP: Dict[str, List[InputCommand]] = {
    # pointer/touch down restarts a finished round, then jumps
    "pointerdown": _RESET_HITS + _START_AND_JUMP,
    "click": list(_START_AND_JUMP),
    "space": [InputCommand("fire", "jump")],
}


def inputs_for_event(event: str) -> List[InputCommand]:
    """State machine inputs to apply for a UI event; unknown events map to nothing."""
    return list(INPUT_MAP.get(event, []))
