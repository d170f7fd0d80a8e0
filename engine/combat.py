from typing import List, Optional, Tuple

from .grid import Cell, Terrain, dist, grid_label, terrain_at
from .model import GROUND_SQUADS, Enemy, GameState, Squad, SquadStatus
from .rng import DRNG

ENGAGE_RANGE = 1
BLAST_RADIUS = 1

# Fraction of own strength inflicted per exchange
SQUAD_FIRE_MIN = 0.25
SQUAD_FIRE_MAX = 0.5
ENEMY_FIRE_MIN = 0.1
ENEMY_FIRE_MAX = 0.35

AMBUSH_BONUS = 1.5
NO_AMMO_PENALTY = 0.5
COVER_PENALTY = 0.75  # enemy dug into jungle or village

def _apply_squad_losses(squad: Squad, losses: int) -> None:
    squad.strength = max(0, squad.strength - losses)
    if squad.strength == 0:
        squad.status = SquadStatus.DESTROYED
        squad.contact = None
        squad.clear_target()

def _apply_enemy_losses(enemy: Enemy, losses: int) -> None:
    enemy.strength = max(0, enemy.strength - losses)
    if enemy.strength == 0:
        enemy.alive = False

def resolve_combat(squad: Squad, enemy: Enemy, rng: DRNG) -> Tuple[int, int]:
    """Run one exchange of fire; returns (enemy losses, squad losses).

    The squad always inflicts at least one casualty, so the combined
    strength of the two sides drops on every exchange.
    """
    if squad.destroyed or not enemy.alive:
        return 0, 0
    if enemy.strength <= 0:
        enemy.alive = False
        return 0, 0

    initiative = squad.status == SquadStatus.AMBUSH
    mult = 1.0
    if initiative:
        mult *= AMBUSH_BONUS
    if squad.ammo <= 0:
        mult *= NO_AMMO_PENALTY
    if terrain_at(enemy.col, enemy.row) in (Terrain.JUNGLE, Terrain.VILLAGE):
        mult *= COVER_PENALTY

    dealt = max(1, round(squad.strength * rng.uniform(SQUAD_FIRE_MIN, SQUAD_FIRE_MAX) * mult))
    taken = 0 if initiative else round(enemy.strength * rng.uniform(ENEMY_FIRE_MIN, ENEMY_FIRE_MAX))

    if squad.ammo > 0:
        squad.ammo -= 1
    squad.status = SquadStatus.ENGAGED
    squad.contact = enemy.id

    dealt = min(dealt, enemy.strength)
    taken = min(taken, squad.strength)
    _apply_enemy_losses(enemy, dealt)
    _apply_squad_losses(squad, taken)
    return dealt, taken

def report_exchange(state: GameState, squad: Squad, enemy: Enemy, dealt: int, taken: int) -> None:
    """Radio the result of an exchange."""
    if not enemy.alive:
        state.radio(squad.callsign, f"Enemy at {grid_label(enemy.col, enemy.row)} is down. Area secure.")
    if squad.destroyed:
        state.radio("SYSTEM", f"Lost contact with {squad.callsign}. {squad.callsign} is combat ineffective.",
                    urgent=True)
    elif taken:
        state.radio(squad.callsign, f"Taking casualties, {taken} down. {squad.strength} effectives left.",
                    urgent=True)
    elif enemy.alive:
        state.radio(squad.callsign, f"Trading fire, enemy took {dealt} hits.")

def nearest_target(state: GameState, squad: Squad) -> Optional[Enemy]:
    """Closest revealed, live enemy within engagement range."""
    best: Optional[Enemy] = None
    best_d = ENGAGE_RANGE + 1
    for e in state.enemies:
        if not e.alive or not e.revealed:
            continue
        d = dist(squad.pos, e.pos)
        if d <= ENGAGE_RANGE and d < best_d:
            best, best_d = e, d
    return best

def combat_upkeep(state: GameState, rng: DRNG) -> None:
    """Continue every running firefight for one more tick."""
    for callsign in GROUND_SQUADS:
        squad = state.squads.get(callsign)
        if squad is None or squad.status != SquadStatus.ENGAGED:
            continue
        enemy = state.enemy(squad.contact)
        if enemy is None or not enemy.alive or dist(squad.pos, enemy.pos) > ENGAGE_RANGE:
            enemy = nearest_target(state, squad)
        if enemy is None:
            squad.status = SquadStatus.IDLE
            squad.contact = None
            continue
        dealt, taken = resolve_combat(squad, enemy, rng)
        report_exchange(state, squad, enemy, dealt, taken)
        if squad.status == SquadStatus.ENGAGED and not enemy.alive and nearest_target(state, squad) is None:
            squad.status = SquadStatus.IDLE
            squad.contact = None

def apply_blast(state: GameState, target: Cell, damage: int, danger_close: int) -> List[Enemy]:
    """Hit everything around target; returns the enemies that were caught in it."""
    hit: List[Enemy] = []
    for e in state.enemies:
        if e.alive and dist(e.pos, target) <= BLAST_RADIUS:
            _apply_enemy_losses(e, damage)
            hit.append(e)
    for callsign in GROUND_SQUADS:
        squad = state.squads.get(callsign)
        if squad is None or squad.destroyed or squad.pos != target:
            continue
        _apply_squad_losses(squad, danger_close)
        state.radio(squad.callsign, f"Check fire! Check fire! Rounds on our position, {danger_close} hit!",
                    urgent=True)
    return hit
