from .clock import MISSION_DEADLINE
from .model import GROUND_SQUADS, GameState, MissionPhase, Outcome
from .scenario import HQ

def all_units_lost(state: GameState) -> bool:
    squads = [state.squads[c] for c in GROUND_SQUADS if c in state.squads]
    return all(s.strength <= 0 for s in squads)

def evaluate(state: GameState) -> Outcome:
    """Judge the mission as it stands right now."""
    if all_units_lost(state):
        return Outcome(False, "All units lost. ALPHA and BRAVO are combat ineffective.")
    if not state.viper_found:
        return Outcome(False, "VIPER was never located. The recon patrol is listed as missing in action.")
    if not state.extraction_done:
        return Outcome(False, "VIPER was found but extraction was not completed before bingo fuel.")
    return Outcome(True, f"{state.viper_survivors} VIPER survivors extracted. Welcome home.")

def implicit_end(state: GameState) -> bool:
    """True once the mission has run its course without an explicit end order."""
    return state.extraction_done or all_units_lost(state) or state.clock >= MISSION_DEADLINE

def finish(state: GameState) -> Outcome:
    """Move the mission to its terminal phase; repeated calls keep the first verdict."""
    if state.phase == MissionPhase.ENDED and state.outcome is not None:
        return state.outcome
    outcome = evaluate(state)
    state.outcome = outcome
    state.phase = MissionPhase.ENDED
    state.scheduler.clear()
    state.radio(HQ, f"{outcome.title}. {outcome.reason}", urgent=True)
    return outcome
