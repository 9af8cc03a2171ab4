"""Round state machines for each table mode."""

from core.game.events import GameEvent, EventType
from core.game.state import Mode, RoundState
from core.game.base import Round
from core.game.solo import SoloRound
from core.game.two_player import Seat, SeatState, TwoPlayerRound
from core.game.head_to_head import HeadToHeadRound
from core.game.table import create_round

__all__ = [
    "GameEvent",
    "EventType",
    "Mode",
    "RoundState",
    "Round",
    "SoloRound",
    "Seat",
    "SeatState",
    "TwoPlayerRound",
    "HeadToHeadRound",
    "create_round",
]
