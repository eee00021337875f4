from threes.fields.board import ILLEGAL, NUM_COLUMNS, NUM_ROWS, NUM_SQUARES, Board, tile_value
from threes.fields.lookup import RowTransformTable, get_row_table
from threes.fields.actions import Action, Direction, NUM_ACTIONS
from threes.fields.spawner import INITIAL_TILES, SearchSpawner, TileSpawner
from threes.fields.game import Game

__all__ = [
    "ILLEGAL",
    "NUM_COLUMNS",
    "NUM_ROWS",
    "NUM_SQUARES",
    "Board",
    "tile_value",
    "RowTransformTable",
    "get_row_table",
    "Action",
    "Direction",
    "NUM_ACTIONS",
    "INITIAL_TILES",
    "SearchSpawner",
    "TileSpawner",
    "Game",
]
