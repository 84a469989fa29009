from waffle.game.clock import DailySeedClock
from waffle.game.coloring import is_won, recolor
from waffle.game.generator import FALLBACK_SOLUTION, GenerationExhausted, generate, generate_or_fallback
from waffle.game.grid import Cell, CellStatus, Grid, Solution
from waffle.game.random import DeterministicRandom, seeded_shuffle
from waffle.game.scramble import GreenCountDistribution, scramble
from waffle.game.session import GameSession, SessionStatus, apply_swap, new_session

__all__ = [
    "Cell",
    "CellStatus",
    "DailySeedClock",
    "DeterministicRandom",
    "FALLBACK_SOLUTION",
    "GameSession",
    "GenerationExhausted",
    "GreenCountDistribution",
    "Grid",
    "SessionStatus",
    "Solution",
    "apply_swap",
    "generate",
    "generate_or_fallback",
    "is_won",
    "new_session",
    "recolor",
    "scramble",
    "seeded_shuffle",
]
