"""Round construction by mode."""

from random import Random

from core.game.base import DeckFactory, Round
from core.game.head_to_head import HeadToHeadRound
from core.game.solo import SoloRound
from core.game.state import Mode
from core.game.two_player import TwoPlayerRound

ROUND_TYPES: dict[Mode, type[Round]] = {
    Mode.SOLO: SoloRound,
    Mode.TWO_PLAYER: TwoPlayerRound,
    Mode.HEAD_TO_HEAD: HeadToHeadRound,
}


def create_round(
    mode: Mode | str,
    rng: Random | None = None,
    deck_factory: DeckFactory | None = None,
) -> Round:
    """
    Create a dealt round for a table mode.

    Args:
        mode: A Mode or its string value ("solo", "two_player", "head_to_head")
        rng: Random number generator for shuffling
        deck_factory: Optional deck builder used for every round

    Raises:
        ValueError: If the mode is unknown
    """
    return ROUND_TYPES[Mode(mode)](rng=rng, deck_factory=deck_factory)
