"""
history.py - Move history for Connect Four

Keeps the chronological list of successful drops as (column, turn) pairs.
The interfaces show it as a strip of 1-based column numbers, newest first,
coloured by the player who made the move.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from connect_four.errors import DeserializationError
from connect_four.utils import Turn

Move = Tuple[int, Turn]


class MoveHistory:
    """Append-only log of the moves played in a game."""

    def __init__(self, moves: Optional[List[Move]] = None):
        self.moves: List[Move] = list(moves or [])

    def record(self, column: int, turn: Turn) -> None:
        self.moves.append((column, turn))

    def last(self) -> Optional[Move]:
        return self.moves[-1] if self.moves else None

    def labels(self) -> List[Tuple[int, Turn]]:
        """Get (1-based column, turn) pairs, most recent move first."""
        return [(column + 1, turn) for column, turn in reversed(self.moves)]

    def copy(self) -> 'MoveHistory':
        return MoveHistory(self.moves)

    def to_dict(self) -> Dict[str, Any]:
        return {"moves": [[column, turn.label] for column, turn in self.moves]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MoveHistory':
        """
        Rebuild a history saved with to_dict.

        Raises:
            DeserializationError: If a move is not a [column, "Red"/"Blue"] pair
        """
        if not isinstance(data, dict) or not isinstance(data.get("moves"), list):
            raise DeserializationError("History must be an object with a 'moves' list")

        moves = []
        for entry in data["moves"]:
            if not isinstance(entry, (list, tuple)) or len(entry) != 2:
                raise DeserializationError(f"Malformed move: {entry!r}")
            column, turn = entry
            if not isinstance(column, int) or isinstance(column, bool):
                raise DeserializationError(f"Move column must be an integer: {column!r}")
            moves.append((column, Turn.from_name(turn)))
        return cls(moves)

    def __len__(self) -> int:
        return len(self.moves)

    def __iter__(self) -> Iterator[Move]:
        return iter(self.moves)

    def __eq__(self, other) -> bool:
        if not isinstance(other, MoveHistory):
            return NotImplemented
        return self.moves == other.moves

    __hash__ = None

    def __repr__(self) -> str:
        return f"MoveHistory({self.moves!r})"
