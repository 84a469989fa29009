from waffle.api.schemas.common import CoordRef
from waffle.api.schemas.puzzles import (
    BoardRequest,
    CellSnapshot,
    PuzzleResponse,
    RecolorResponse,
    SessionSnapshot,
    SwapRequest,
)

__all__ = [
    "BoardRequest",
    "CellSnapshot",
    "CoordRef",
    "PuzzleResponse",
    "RecolorResponse",
    "SessionSnapshot",
    "SwapRequest",
]
