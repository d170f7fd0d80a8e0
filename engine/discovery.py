from typing import Iterator

from .grid import dist, grid_label
from .model import GROUND_SQUADS, GameState, Squad, SquadStatus
from .scenario import HQ, VIPER_SURVIVORS

DISCOVERY_RADIUS = 1

def _searchers(state: GameState) -> Iterator[Squad]:
    for callsign in GROUND_SQUADS:
        squad = state.squads.get(callsign)
        if squad is not None and not squad.destroyed:
            yield squad

def discovery_phase(state: GameState) -> None:
    """Reveal every POI and live enemy within range of a ground squad."""
    for squad in _searchers(state):
        for poi in state.pois:
            if poi.revealed or dist(squad.pos, poi.pos) > DISCOVERY_RADIUS:
                continue
            poi.revealed = True
            where = grid_label(poi.col, poi.row)
            if poi.objective:
                _viper_found(state, squad, where)
            else:
                state.radio(squad.callsign, f"Eyes on the {poi.label} at {where}.")

        for enemy in state.enemies:
            if not enemy.alive or enemy.revealed:
                continue
            if dist(squad.pos, enemy.pos) > DISCOVERY_RADIUS:
                continue
            enemy.revealed = True
            if squad.status == SquadStatus.AMBUSH:
                state.radio(squad.callsign,
                            f"Enemy patrol at {grid_label(enemy.col, enemy.row)}. They don't see us. "
                            "Ready to drop on them on your order.")

    _force_contact(state)

def _viper_found(state: GameState, squad: Squad, where: str) -> None:
    if state.viper_found:
        return
    state.viper_found = True
    state.viper_survivors = VIPER_SURVIVORS
    state.radio(squad.callsign,
                f"PAPA BEAR, PAPA BEAR! We have VIPER at {where}. {VIPER_SURVIVORS} survivors, "
                "two wounded. Request immediate MEDEVAC!", urgent=True)
    state.radio(HQ, "Copy VIPER located. DUSTOFF is spun up, call MEDEVAC when ready.")

def _force_contact(state: GameState) -> None:
    """A squad walking into an occupied cell is in a firefight whether it likes it or not."""
    for squad in _searchers(state):
        if squad.status in (SquadStatus.ENGAGED, SquadStatus.AMBUSH):
            continue
        for enemy in state.enemies:
            if enemy.alive and enemy.pos == squad.pos:
                enemy.revealed = True
                squad.clear_target()
                squad.status = SquadStatus.ENGAGED
                squad.contact = enemy.id
                state.radio(squad.callsign, f"Contact! Contact! Taking fire at {grid_label(squad.col, squad.row)}!",
                            urgent=True)
                break
