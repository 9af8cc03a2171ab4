"""Round state enumeration."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Solo:         PLAYER_TURN → RESOLVED
    TwoPlayer:    PLAYER_ONE_TURN → PLAYER_TWO_TURN → RESOLVED
    HeadToHead:   PLAYER_TURN → DEALER_TURN → RESOLVED
                  (or PLAYER_TURN → RESOLVED on a player bust)
    """

    PLAYER_TURN = auto()
    PLAYER_ONE_TURN = auto()
    PLAYER_TWO_TURN = auto()
    DEALER_TURN = auto()
    RESOLVED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class Mode(Enum):
    """Table play modes."""

    SOLO = "solo"
    TWO_PLAYER = "two_player"
    HEAD_TO_HEAD = "head_to_head"


OPENING_STATE: dict[Mode, RoundState] = {
    Mode.SOLO: RoundState.PLAYER_TURN,
    Mode.TWO_PLAYER: RoundState.PLAYER_ONE_TURN,
    Mode.HEAD_TO_HEAD: RoundState.PLAYER_TURN,
}
