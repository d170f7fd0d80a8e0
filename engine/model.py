from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from enum import Enum

from .clock import START_TIME
from .grid import Cell
from .radio import RadioLog, RadioMessage
from .scheduler import EventScheduler

GROUND_SQUADS = ("ALPHA", "BRAVO")
CALLSIGNS = ("ALPHA", "BRAVO", "DUSTOFF")

class SquadStatus(Enum):
    """What a friendly unit is currently doing"""
    IDLE = "idle"
    MOVING = "moving"
    HOLDING = "holding"      # DUSTOFF on the ground at the LZ
    AMBUSH = "ambush"        # Concealed, fires first on contact
    ENGAGED = "engaged"
    INBOUND = "inbound"      # DUSTOFF in the air
    STANDBY = "standby"      # DUSTOFF at base
    DESTROYED = "destroyed"

class MissionPhase(Enum):
    BRIEFING = "briefing"
    RUNNING = "running"
    ENDED = "ended"

class EventAction(Enum):
    """Deferred action carried by a scheduled event"""
    FIRE_SUPPORT_RESOLVE = "fire_support_resolve"
    AIR_STRIKE_RESOLVE = "air_strike_resolve"
    RESUPPLY_COMPLETE = "resupply_complete"
    DUSTOFF_ARRIVE = "dustoff_arrive"
    DUSTOFF_RETURN = "dustoff_return"
    SCRIPTED_MESSAGE = "scripted_message"

@dataclass
class Squad:
    callsign: str
    leader: str
    col: int
    row: int
    status: SquadStatus
    strength: int  # effectives
    ammo: int  # basic loads
    home_col: int = 0
    home_row: int = 0
    target_col: Optional[int] = None
    target_row: Optional[int] = None
    delay: int = 0  # ticks left before the next step
    contact: Optional[str] = None  # id of the enemy being fought

    @property
    def moving(self) -> bool:
        return self.status == SquadStatus.MOVING

    @property
    def destroyed(self) -> bool:
        return self.status == SquadStatus.DESTROYED or self.strength <= 0

    @property
    def pos(self) -> Cell:
        return (self.col, self.row)

    @property
    def target(self) -> Optional[Cell]:
        if self.target_col is None or self.target_row is None:
            return None
        return (self.target_col, self.target_row)

    def clear_target(self) -> None:
        self.target_col = None
        self.target_row = None
        self.delay = 0

@dataclass
class Enemy:
    id: str
    col: int
    row: int
    strength: int
    alive: bool = True
    revealed: bool = False

    @property
    def pos(self) -> Cell:
        return (self.col, self.row)

@dataclass
class PointOfInterest:
    label: str
    col: int
    row: int
    revealed: bool = False
    objective: bool = False  # VIPER survivor location

    @property
    def pos(self) -> Cell:
        return (self.col, self.row)

@dataclass(frozen=True)
class ScheduledEvent:
    fire_time: int
    action: EventAction
    target: Optional[Tuple[int, int]] = None
    callsign: Optional[str] = None
    sender: Optional[str] = None
    text: Optional[str] = None

@dataclass(frozen=True)
class Outcome:
    success: bool
    reason: str

    @property
    def title(self) -> str:
        return "MISSION COMPLETE" if self.success else "MISSION FAILED"

@dataclass
class GameState:
    clock: int = START_TIME
    phase: MissionPhase = MissionPhase.BRIEFING
    fire_supports_left: int = 0
    air_strikes_left: int = 0
    viper_found: bool = False
    viper_survivors: int = 0
    extraction_done: bool = False
    dustoff_launched: bool = False
    outcome: Optional[Outcome] = None
    map_revision: int = 0
    squads: Dict[str, Squad] = field(default_factory=dict)
    enemies: List[Enemy] = field(default_factory=list)
    pois: List[PointOfInterest] = field(default_factory=list)
    log: RadioLog = field(default_factory=RadioLog)
    scheduler: EventScheduler = field(default_factory=EventScheduler)

    @property
    def running(self) -> bool:
        return self.phase == MissionPhase.RUNNING

    @property
    def mission_end(self) -> bool:
        return self.phase == MissionPhase.ENDED

    def radio(self, sender: str, text: str, urgent: bool = False) -> RadioMessage:
        """Append a message stamped with the current clock."""
        msg = RadioMessage(self.clock, sender, text, urgent)
        self.log.append(msg)
        return msg

    def schedule(self, delay: int, action: EventAction, **payload) -> ScheduledEvent:
        """Queue an action to fire `delay` minutes from now."""
        evt = ScheduledEvent(self.clock + delay, action, **payload)
        self.scheduler.schedule(evt, self.clock)
        return evt

    def enemy(self, enemy_id: Optional[str]) -> Optional[Enemy]:
        for e in self.enemies:
            if e.id == enemy_id:
                return e
        return None

    def viper(self) -> Optional[PointOfInterest]:
        for p in self.pois:
            if p.objective:
                return p
        return None

    def poi(self, label: str) -> Optional[PointOfInterest]:
        for p in self.pois:
            if p.label == label:
                return p
        return None
