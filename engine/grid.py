from enum import Enum
from typing import Dict, Optional, Tuple

Cell = Tuple[int, int]  # (col, row), 0-based

GRID_SIZE = 8
COLUMNS = "ABCDEFGH"

class Terrain(Enum):
    """Ground type of a map cell"""
    OPEN = "open"
    PADDY = "paddy"
    VILLAGE = "village"
    JUNGLE = "jungle"

# Extra ticks a squad spends in a cell before it can step out of it
TERRAIN_DELAY: Dict[Terrain, int] = {
    Terrain.OPEN: 0,
    Terrain.PADDY: 1,
    Terrain.VILLAGE: 1,
    Terrain.JUNGLE: 2,
}

_TERRAIN_CODES = {".": Terrain.OPEN, "p": Terrain.PADDY, "v": Terrain.VILLAGE, "j": Terrain.JUNGLE}

# Row 1 first; one character per column A..H
TERRAIN_MAP = (
    "j.jj..jj",
    "jjjv.jpp",
    "jj.jjjpp",
    "..jjjjj.",
    "pjjjjjjp",
    "pjjj.jjp",
    "pp.jjjj.",
    "..p.jjj.",
)

def grid_label(col: int, row: int) -> str:
    """Convert 0-based (col, row) to a map label such as 'E5'."""
    return f"{COLUMNS[col]}{row + 1}"

def parse_grid(label: Optional[str]) -> Optional[Cell]:
    """Parse a label such as 'e5' into (col, row); None if it is not on the board."""
    if not label:
        return None
    text = label.strip().upper()
    if len(text) < 2:
        return None
    letter, number = text[0], text[1:]
    if letter not in COLUMNS or not (number.isascii() and number.isdigit()):
        return None
    row = int(number)
    if row < 1 or row > GRID_SIZE:
        return None
    return COLUMNS.index(letter), row - 1

def dist(a: Cell, b: Cell) -> int:
    """Manhattan distance between two cells."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])

def in_bounds(col: int, row: int) -> bool:
    return 0 <= col < GRID_SIZE and 0 <= row < GRID_SIZE

def clamp(value: int) -> int:
    return max(0, min(GRID_SIZE - 1, value))

def terrain_at(col: int, row: int) -> Terrain:
    """Terrain of a cell on the mission map."""
    return _TERRAIN_CODES[TERRAIN_MAP[row][col]]

def terrain_delay(col: int, row: int) -> int:
    return TERRAIN_DELAY[terrain_at(col, row)]

def step_toward(pos: Cell, target: Cell) -> Cell:
    """One grid step toward target, on the column while it is off and then on the row."""
    dc = target[0] - pos[0]
    dr = target[1] - pos[1]
    if dc == 0 and dr == 0:
        return pos
    if dc != 0:
        return pos[0] + (1 if dc > 0 else -1), pos[1]
    return pos[0], pos[1] + (1 if dr > 0 else -1)
