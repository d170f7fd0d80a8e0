from typing import Optional

from .grid import Cell, grid_label, step_toward, terrain_delay
from .model import GameState, Squad, SquadStatus

def begin_move(squad: Squad, target: Cell) -> None:
    """Point a squad at a target cell and start its terrain countdown."""
    squad.target_col, squad.target_row = target
    squad.contact = None
    squad.status = SquadStatus.MOVING
    squad.delay = 1 + terrain_delay(squad.col, squad.row)

def advance_squad(state: GameState, squad: Squad) -> Optional[Cell]:
    """Run one tick of movement; returns the new cell if the squad stepped."""
    if squad.destroyed:
        return None
    target = squad.target
    if target is None:
        squad.status = SquadStatus.IDLE
        return None
    if squad.pos == target:
        _arrive(state, squad)
        return None

    squad.delay -= 1
    if squad.delay > 0:
        return None

    squad.col, squad.row = step_toward(squad.pos, target)
    squad.delay = 1 + terrain_delay(squad.col, squad.row)
    if squad.pos == target:
        _arrive(state, squad)
    return squad.pos

def _arrive(state: GameState, squad: Squad) -> None:
    squad.clear_target()
    squad.status = SquadStatus.IDLE
    state.radio(squad.callsign, f"PAPA BEAR, {squad.callsign} at {grid_label(squad.col, squad.row)}. Holding for orders.")

def movement_phase(state: GameState) -> None:
    """Advance every moving squad by one tick."""
    for squad in state.squads.values():
        if squad.moving:
            advance_squad(state, squad)
