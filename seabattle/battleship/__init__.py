from .attack import AttackResult, ResultOfAttack
from .errors import InvalidPlacement, PreconditionViolation, SeaBattleError
from .game import BOARD_SIZE, Direction, Ship, ShipName, Tile, TileView
from .grid import BoardView, SeaGrid, SeaGridView

__all__ = [
    "AttackResult",
    "BOARD_SIZE",
    "BoardView",
    "Direction",
    "InvalidPlacement",
    "PreconditionViolation",
    "ResultOfAttack",
    "SeaBattleError",
    "SeaGrid",
    "SeaGridView",
    "Ship",
    "ShipName",
    "Tile",
    "TileView",
]
