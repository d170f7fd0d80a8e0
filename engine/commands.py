"""Free-text order parsing for PAPA BEAR's radio net.

Every outcome of a command, including a rejected one, is reported as radio
traffic; nothing here raises past `process`.
"""
import logging
from typing import Callable, Dict, List, Optional

from .combat import nearest_target, report_exchange, resolve_combat
from .grid import clamp, grid_label, parse_grid
from .model import CALLSIGNS, GROUND_SQUADS, EventAction, GameState, Squad, SquadStatus
from .movement import begin_move
from .rng import DRNG
from .scenario import HQ

logger = logging.getLogger(__name__)

SYSTEM = "SYSTEM"

FIRE_SUPPORT_DELAY = 2
AIR_STRIKE_DELAY = 3
RESUPPLY_DELAY = 3
DUSTOFF_TRANSIT = 6

SQUAD_VERBS = ("MOVE", "HOLD", "RETREAT", "SITREP", "AMBUSH", "ENGAGE")

HELP_TEXT = [
    "Squad orders: <ALPHA|BRAVO> MOVE <grid> | HOLD | RETREAT | SITREP | AMBUSH | ENGAGE",
    "Support: FIRE SUPPORT <grid> | AIR STRIKE <grid> | RESUPPLY <ALPHA|BRAVO>",
    "Extraction: MEDEVAC (once VIPER is located)",
    "Net: STATUS | MAP | HELP. Grids run A1 to H8.",
]

class CommandInterpreter:
    """Turns a line of player input into state changes and radio traffic."""

    def __init__(self, state: GameState, rng: DRNG):
        self.state = state
        self._rng = rng
        self._globals: Dict[str, Callable[[List[str]], None]] = {
            "HELP": self._help,
            "STATUS": self._status,
            "MAP": self._map,
            "FIRE SUPPORT": self._fire_support,
            "AIR STRIKE": self._air_strike,
            "RESUPPLY": self._resupply,
            "MEDEVAC": self._medevac,
        }
        self._squad_verbs: Dict[str, Callable[[Squad, List[str]], None]] = {
            "MOVE": self._move,
            "HOLD": self._hold,
            "RETREAT": self._retreat,
            "SITREP": self._sitrep,
            "AMBUSH": self._ambush,
            "ENGAGE": self._engage,
        }

    def error(self, text: str) -> None:
        self.state.radio(SYSTEM, text)

    def process(self, raw: Optional[str]) -> None:
        """Parse and carry out one command."""
        tokens = (raw or "").upper().split()
        if not tokens:
            self.error("Unknown callsign. Valid callsigns: ALPHA, BRAVO, DUSTOFF. Type HELP for orders.")
            return
        self.state.radio(HQ, " ".join(tokens))
        logger.debug("command %s at %d", tokens, self.state.clock)

        # Two-word verbs first
        if len(tokens) >= 2 and f"{tokens[0]} {tokens[1]}" in self._globals:
            self._globals[f"{tokens[0]} {tokens[1]}"](tokens[2:])
            return
        if tokens[0] in self._globals:
            self._globals[tokens[0]](tokens[1:])
            return
        if tokens[0] not in CALLSIGNS:
            self.error(f"Unknown callsign: {tokens[0]}. Valid callsigns: ALPHA, BRAVO, DUSTOFF.")
            return

        squad = self.state.squads[tokens[0]]
        verb = tokens[1] if len(tokens) > 1 else ""
        if squad.destroyed:
            self.error(f"No response from {squad.callsign}.")
            return
        if squad.callsign == "DUSTOFF" and verb != "SITREP":
            self.error("DUSTOFF tasking via MEDEVAC only.")
            return
        handler = self._squad_verbs.get(verb)
        if handler is None:
            self.error(f"{squad.callsign}, say again? Orders are {', '.join(SQUAD_VERBS)}.")
            return
        handler(squad, tokens[2:])

    # --- squad orders -------------------------------------------------

    def _move(self, squad: Squad, args: List[str]) -> None:
        target = parse_grid(args[0]) if args else None
        if target is None:
            self.error(f"Invalid grid{': ' + args[0] if args else ''}. Use A1 to H8.")
            return
        begin_move(squad, target)
        self.state.radio(squad.callsign, f"Roger, {squad.callsign} moving to {grid_label(*target)}.")

    def _hold(self, squad: Squad, args: List[str]) -> None:
        squad.clear_target()
        squad.contact = None
        squad.status = SquadStatus.IDLE
        self.state.radio(squad.callsign, f"{squad.callsign} holding at {grid_label(squad.col, squad.row)}.")

    def _retreat(self, squad: Squad, args: List[str]) -> None:
        # Friendly lines are on the west edge
        squad.col = clamp(squad.col - 1)
        squad.clear_target()
        squad.contact = None
        squad.status = SquadStatus.IDLE
        self.state.radio(squad.callsign, f"Falling back to {grid_label(squad.col, squad.row)}!")

    def _sitrep(self, squad: Squad, args: List[str]) -> None:
        where = grid_label(squad.col, squad.row)
        if squad.callsign == "DUSTOFF":
            self.state.radio(squad.callsign, f"{squad.leader}, DUSTOFF. Position {where}, {squad.status.value}.")
            return
        line = (f"{squad.leader} here. Position {where}, {squad.strength} effectives, "
                f"ammo {squad.ammo}, {squad.status.value}.")
        if squad.target is not None:
            line += f" En route to {grid_label(*squad.target)}."
        if squad.status == SquadStatus.ENGAGED:
            line += " Still in contact!"
        elif squad.ammo <= 1:
            line += " Running low on ammo."
        self.state.radio(squad.callsign, line)

    def _ambush(self, squad: Squad, args: List[str]) -> None:
        squad.clear_target()
        squad.status = SquadStatus.AMBUSH
        self.state.radio(squad.callsign, f"Setting ambush at {grid_label(squad.col, squad.row)}. Going quiet.")

    def _engage(self, squad: Squad, args: List[str]) -> None:
        enemy = nearest_target(self.state, squad)
        if enemy is None:
            self.error(f"{squad.callsign}: No confirmed enemy in range.")
            return
        squad.clear_target()
        self.state.radio(squad.callsign, f"Engaging enemy at {grid_label(enemy.col, enemy.row)}!")
        dealt, taken = resolve_combat(squad, enemy, self._rng)
        report_exchange(self.state, squad, enemy, dealt, taken)

    # --- global orders ------------------------------------------------

    def _help(self, args: List[str]) -> None:
        for line in HELP_TEXT:
            self.state.radio(SYSTEM, line)

    def _status(self, args: List[str]) -> None:
        for squad in self.state.squads.values():
            where = grid_label(squad.col, squad.row)
            if squad.callsign == "DUSTOFF":
                self.state.radio(SYSTEM, f"DUSTOFF: Grid {where}, {squad.status.value}")
            else:
                self.state.radio(SYSTEM, f"{squad.callsign}: Grid {where}, {squad.strength} effectives, "
                                         f"ammo {squad.ammo}, {squad.status.value}")

    def _map(self, args: List[str]) -> None:
        self.state.map_revision += 1
        self.state.radio(SYSTEM, "Map refreshed.")

    def _fire_support(self, args: List[str]) -> None:
        if self.state.fire_supports_left <= 0:
            self.error("No fire support remaining.")
            return
        target = parse_grid(args[0]) if args else None
        if target is None:
            self.error("Invalid grid for fire mission.")
            return
        self.state.fire_supports_left -= 1
        self.state.schedule(FIRE_SUPPORT_DELAY, EventAction.FIRE_SUPPORT_RESOLVE, target=target)
        self.state.radio("ARTILLERY", f"Fire mission {grid_label(*target)}, shot out. "
                                      f"{FIRE_SUPPORT_DELAY} minutes to splash.")

    def _air_strike(self, args: List[str]) -> None:
        if self.state.air_strikes_left <= 0:
            self.error("No air strikes remaining.")
            return
        target = parse_grid(args[0]) if args else None
        if target is None:
            self.error("Invalid grid for air strike.")
            return
        self.state.air_strikes_left -= 1
        self.state.schedule(AIR_STRIKE_DELAY, EventAction.AIR_STRIKE_RESOLVE, target=target)
        self.state.radio("FALCON", f"FALCON rolling in on {grid_label(*target)}. Keep your heads down.")

    def _resupply(self, args: List[str]) -> None:
        callsign = args[0] if args else ""
        if callsign not in GROUND_SQUADS:
            self.error(f"Invalid unit for resupply: {callsign or 'none given'}. ALPHA or BRAVO only.")
            return
        self.state.schedule(RESUPPLY_DELAY, EventAction.RESUPPLY_COMPLETE, callsign=callsign)
        self.state.radio(HQ, f"Resupply for {callsign} is on the way, {RESUPPLY_DELAY} minutes.")

    def _medevac(self, args: List[str]) -> None:
        if not self.state.viper_found:
            self.error("VIPER not yet located. Find them before calling DUSTOFF.")
            return
        if self.state.dustoff_launched:
            self.error("DUSTOFF already deployed.")
            return
        viper = self.state.viper()
        dustoff = self.state.squads["DUSTOFF"]
        dustoff.status = SquadStatus.INBOUND
        self.state.dustoff_launched = True
        self.state.schedule(DUSTOFF_TRANSIT, EventAction.DUSTOFF_ARRIVE, callsign="DUSTOFF")
        where = grid_label(viper.col, viper.row) if viper else "the LZ"
        self.state.radio("DUSTOFF", f"DUSTOFF wheels up, en route to VIPER at {where}. "
                                    f"ETA {DUSTOFF_TRANSIT} minutes.")
