"""Starting configuration for Operation Bright Light."""
from typing import List, Tuple

from .clock import DEADLINE_WARNING, MISSION_DEADLINE, START_TIME, format_time
from .model import (
    Enemy,
    EventAction,
    GameState,
    MissionPhase,
    PointOfInterest,
    Squad,
    SquadStatus,
)

HQ = "PAPA BEAR"

FIRE_SUPPORTS = 2
AIR_STRIKES = 1
SQUAD_STRENGTH = 6
SQUAD_AMMO = 5
VIPER_SURVIVORS = 3

# (sender, text) sent as soon as the mission starts
OPENING_TRAFFIC: List[Tuple[str, str]] = [
    (HQ, "All stations, this is PAPA BEAR. OPERATION BRIGHT LIGHT is a go."),
    (HQ, "Recon patrol VIPER missed its last two check-ins. Last known position is somewhere in the central valley."),
    (HQ, "Find VIPER, call DUSTOFF for extraction and bring everyone home. Bingo fuel at "
         f"{format_time(MISSION_DEADLINE)}."),
]

# (minutes after start, sender, text)
SCRIPTED_TRAFFIC: List[Tuple[int, str, str]] = [
    (1, "ALPHA", "PAPA BEAR, Vasquez here. Alpha is ready, six effectives, standing by for orders."),
    (2, "BRAVO", "PAPA BEAR, Okafor. Bravo is set at the tree line, awaiting tasking."),
    (30, HQ, "Intel reports movement near the village. Expect contact east of the river."),
    (MISSION_DEADLINE - START_TIME - DEADLINE_WARNING, HQ,
     f"All stations, {DEADLINE_WARNING} minutes to bingo fuel. DUSTOFF must be wheels up soon."),
]

def build_squads() -> List[Squad]:
    return [
        Squad("ALPHA", "Sgt. Vasquez", 1, 1, SquadStatus.IDLE, SQUAD_STRENGTH, SQUAD_AMMO,
              home_col=1, home_row=1),
        Squad("BRAVO", "Sgt. Okafor", 1, 5, SquadStatus.IDLE, SQUAD_STRENGTH, SQUAD_AMMO,
              home_col=1, home_row=5),
        Squad("DUSTOFF", "WO Reyes", 0, 7, SquadStatus.STANDBY, 4, 0,
              home_col=0, home_row=7),
    ]

def build_enemies() -> List[Enemy]:
    return [
        Enemy("E1", 5, 3, 6),
        Enemy("E2", 6, 5, 8),
        Enemy("E3", 4, 6, 5),
    ]

def build_pois() -> List[PointOfInterest]:
    return [
        PointOfInterest("village", 3, 1),
        PointOfInterest("river crossing", 2, 3),
        PointOfInterest("VIPER", 3, 4, objective=True),
    ]

def initial_state() -> GameState:
    """Mission state as it stands during the briefing."""
    state = GameState(
        clock=START_TIME,
        phase=MissionPhase.BRIEFING,
        fire_supports_left=FIRE_SUPPORTS,
        air_strikes_left=AIR_STRIKES,
    )
    state.squads = {s.callsign: s for s in build_squads()}
    state.enemies = build_enemies()
    state.pois = build_pois()
    return state

def open_mission(state: GameState) -> None:
    """Send the opening traffic and queue the scripted calls."""
    for sender, text in OPENING_TRAFFIC:
        state.radio(sender, text)
    for delay, sender, text in SCRIPTED_TRAFFIC:
        state.schedule(delay, EventAction.SCRIPTED_MESSAGE, sender=sender, text=text)
