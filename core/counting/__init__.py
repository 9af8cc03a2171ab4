"""Card counting systems and the running count trainer."""

from core.counting.base import CountingSystem
from core.counting.hilo import HiLoSystem
from core.counting.trainer import CountingTrainer, GuessFeedback, GuessResult

__all__ = [
    "CountingSystem",
    "HiLoSystem",
    "CountingTrainer",
    "GuessFeedback",
    "GuessResult",
]
