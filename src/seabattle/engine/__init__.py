"""Board, fleet, placement and shot resolution."""

from .board import Board, BoardView, CellState
from .placement import PlacementLimits, can_place, place_fleet_randomly, place_ship
from .ship import Coordinate, Orientation, Ship, fleet_for_size
from .shots import ShotOutcome, receive_shot

__all__ = [
    "Board",
    "BoardView",
    "CellState",
    "Coordinate",
    "Orientation",
    "PlacementLimits",
    "Ship",
    "ShotOutcome",
    "can_place",
    "fleet_for_size",
    "place_fleet_randomly",
    "place_ship",
    "receive_shot",
]
