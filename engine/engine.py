import logging
from typing import Callable, Dict, List, Optional

from .clock import format_time
from .combat import apply_blast, combat_upkeep
from .commands import DUSTOFF_TRANSIT, CommandInterpreter
from .discovery import discovery_phase
from .grid import dist, grid_label
from .mission import finish, implicit_end
from .model import Enemy, EventAction, MissionPhase, Outcome, ScheduledEvent, SquadStatus
from .movement import movement_phase
from .radio import RadioMessage
from .rng import DRNG
from .scenario import HQ, SQUAD_AMMO, initial_state, open_mission

logger = logging.getLogger(__name__)

FIRE_SUPPORT_DAMAGE = 3
AIR_STRIKE_DAMAGE = 5
FIRE_SUPPORT_DANGER_CLOSE = 1
AIR_STRIKE_DANGER_CLOSE = 2
LZ_HOT_RADIUS = 1
WAVE_OFF_RETRY = 3

class Engine:
    """Deterministic game loop for one mission.

    Nothing in here keeps time on its own: whoever owns the engine calls
    `tick` once per game minute and `process_command` between ticks.
    """

    def __init__(self, seed: int = 42):
        self.seed = seed
        self.tts_enabled = True
        self._rng = DRNG(seed)
        self.state = initial_state()
        self._commands = CommandInterpreter(self.state, self._rng)
        self._handlers: Dict[EventAction, Callable[[ScheduledEvent], None]] = {
            EventAction.FIRE_SUPPORT_RESOLVE: self._fire_support_resolve,
            EventAction.AIR_STRIKE_RESOLVE: self._air_strike_resolve,
            EventAction.RESUPPLY_COMPLETE: self._resupply_complete,
            EventAction.DUSTOFF_ARRIVE: self._dustoff_arrive,
            EventAction.DUSTOFF_RETURN: self._dustoff_return,
            EventAction.SCRIPTED_MESSAGE: self._scripted_message,
        }

    def _messages_since(self, offset: int) -> List[RadioMessage]:
        msgs, _ = self.state.log.since(offset, len(self.state.log))
        return msgs

    def start_game(self) -> List[RadioMessage]:
        """Reset to the starting configuration and open the radio net."""
        self._rng.reseed(self.seed)
        self.state = initial_state()
        self._commands = CommandInterpreter(self.state, self._rng)
        self.state.phase = MissionPhase.RUNNING
        open_mission(self.state)
        logger.info("Mission started at %s (seed %d)", format_time(self.state.clock), self.seed)
        return self._messages_since(0)

    def process_command(self, text: Optional[str]) -> List[RadioMessage]:
        """Carry out one line of player input; returns the traffic it produced."""
        if not self.state.running:
            logger.warning("Ignoring command %r, mission is %s", text, self.state.phase.value)
            return []
        start = len(self.state.log)
        self._commands.process(text)
        return self._messages_since(start)

    def tick(self) -> List[RadioMessage]:
        """Advance the mission by one minute."""
        if not self.state.running:
            return []
        start = len(self.state.log)
        self.state.clock += 1
        for evt in self.state.scheduler.drain(self.state.clock):
            logger.debug("Dispatching %s at %s", evt.action.value, format_time(self.state.clock))
            self._handlers[evt.action](evt)
        movement_phase(self.state)
        discovery_phase(self.state)
        combat_upkeep(self.state, self._rng)
        if implicit_end(self.state):
            self._end()
        return self._messages_since(start)

    def end_mission(self) -> Outcome:
        """Judge the mission now, whatever the clock says."""
        return self._end()

    def _end(self) -> Outcome:
        already_over = self.state.mission_end
        outcome = finish(self.state)
        if not already_over:
            logger.info("Mission ended at %s: %s (%s)", format_time(self.state.clock), outcome.title, outcome.reason)
        return outcome

    def toggle_tts(self) -> bool:
        """Flip narration on or off; the simulation does not care either way."""
        self.tts_enabled = not self.tts_enabled
        return self.tts_enabled

    # --- scheduled actions --------------------------------------------

    def _fire_support_resolve(self, evt: ScheduledEvent) -> None:
        hit = apply_blast(self.state, evt.target, FIRE_SUPPORT_DAMAGE, FIRE_SUPPORT_DANGER_CLOSE)
        where = grid_label(*evt.target)
        self.state.radio("ARTILLERY", f"Splash, over. Rounds complete on {where}.")
        self._report_blast(hit)

    def _air_strike_resolve(self, evt: ScheduledEvent) -> None:
        hit = apply_blast(self.state, evt.target, AIR_STRIKE_DAMAGE, AIR_STRIKE_DANGER_CLOSE)
        where = grid_label(*evt.target)
        self.state.radio("FALCON", f"FALCON off target. Ordnance on {where}, rounds complete.")
        self._report_blast(hit)

    def _report_blast(self, hit: List[Enemy]) -> None:
        killed = [e for e in hit if not e.alive]
        if killed:
            self.state.radio(HQ, f"Good effect on target, {len(killed)} enemy position(s) destroyed.")
        elif hit:
            self.state.radio(HQ, "Rounds on target, enemy still active.")

    def _resupply_complete(self, evt: ScheduledEvent) -> None:
        squad = self.state.squads.get(evt.callsign)
        if squad is None or squad.destroyed:
            return
        squad.ammo = SQUAD_AMMO
        self.state.radio(squad.callsign, f"Resupply received. {squad.callsign} is topped off.")

    def _dustoff_arrive(self, evt: ScheduledEvent) -> None:
        dustoff = self.state.squads["DUSTOFF"]
        viper = self.state.viper()
        if dustoff.status != SquadStatus.INBOUND or viper is None:
            return
        hot = [e for e in self.state.enemies if e.alive and dist(e.pos, viper.pos) <= LZ_HOT_RADIUS]
        if hot:
            self.state.radio("DUSTOFF", f"LZ is hot! Taking fire, waving off. Clear the LZ, "
                                        f"we'll try again in {WAVE_OFF_RETRY} minutes.", urgent=True)
            self.state.schedule(WAVE_OFF_RETRY, EventAction.DUSTOFF_ARRIVE, callsign="DUSTOFF")
            return
        dustoff.col, dustoff.row = viper.pos
        dustoff.status = SquadStatus.HOLDING
        self.state.radio("DUSTOFF", f"DUSTOFF on the ground at {grid_label(*viper.pos)}. "
                                    f"{self.state.viper_survivors} survivors aboard, lifting.")
        self.state.schedule(DUSTOFF_TRANSIT, EventAction.DUSTOFF_RETURN, callsign="DUSTOFF")

    def _dustoff_return(self, evt: ScheduledEvent) -> None:
        dustoff = self.state.squads["DUSTOFF"]
        if dustoff.status != SquadStatus.HOLDING:
            return
        dustoff.col, dustoff.row = dustoff.home_col, dustoff.home_row
        dustoff.status = SquadStatus.STANDBY
        self.state.extraction_done = True
        self.state.radio("DUSTOFF", f"PAPA BEAR, DUSTOFF is back at base with "
                                    f"{self.state.viper_survivors} VIPER survivors.", urgent=True)

    def _scripted_message(self, evt: ScheduledEvent) -> None:
        self.state.radio(evt.sender or HQ, evt.text or "")

    # --- read side -----------------------------------------------------

    def snapshot(self) -> Dict:
        """Plain-data view of the mission for renderers."""
        s = self.state
        return {
            "clock": s.clock,
            "time": format_time(s.clock),
            "phase": s.phase.value,
            "running": s.running,
            "mission_end": s.mission_end,
            "fire_supports_left": s.fire_supports_left,
            "air_strikes_left": s.air_strikes_left,
            "viper_found": s.viper_found,
            "viper_survivors": s.viper_survivors,
            "extraction_done": s.extraction_done,
            "dustoff_launched": s.dustoff_launched,
            "map_revision": s.map_revision,
            "tts_enabled": self.tts_enabled,
            "outcome": None if s.outcome is None else {
                "success": s.outcome.success, "title": s.outcome.title, "reason": s.outcome.reason,
            },
            "squads": {
                cs: {
                    "callsign": q.callsign, "leader": q.leader, "col": q.col, "row": q.row,
                    "grid": grid_label(q.col, q.row), "status": q.status.value, "moving": q.moving,
                    "strength": q.strength, "ammo": q.ammo,
                    "target_col": q.target_col, "target_row": q.target_row, "contact": q.contact,
                } for cs, q in s.squads.items()
            },
            "enemies": [
                {"id": e.id, "col": e.col, "row": e.row, "strength": e.strength,
                 "alive": e.alive, "revealed": e.revealed} for e in s.enemies
            ],
            "pois": [
                {"label": p.label, "col": p.col, "row": p.row, "revealed": p.revealed,
                 "objective": p.objective} for p in s.pois
            ],
            "log_length": len(s.log),
            "pending_events": [
                {"fire_time": e.fire_time, "action": e.action.value} for e in s.scheduler.pending()
            ],
        }
