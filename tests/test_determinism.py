"""Test that the engine produces deterministic results."""
from engine.combat import resolve_combat
from engine.engine import Engine
from engine.model import Enemy, Squad, SquadStatus
from engine.rng import DRNG

ORDERS = {
    0: ["ALPHA MOVE F3", "BRAVO MOVE D5", "FIRE SUPPORT F4"],
    12: ["ALPHA ENGAGE", "BRAVO SITREP"],
    20: ["ALPHA ENGAGE", "MEDEVAC", "STATUS"],
}


def play(seed: int, ticks: int = 40):
    """Run a scripted session and return the radio log as plain tuples."""
    eng = Engine(seed)
    eng.start_game()
    for t in range(ticks):
        for cmd in ORDERS.get(t, []):
            eng.process_command(cmd)
        eng.tick()
    return [(m.time, m.sender, m.text) for m in eng.state.log], eng.snapshot()


def test_engine_determinism():
    """Same seed and orders should produce identical results."""
    log1, snap1 = play(42)
    log2, snap2 = play(42)
    assert log1 == log2
    assert snap1 == snap2


def test_restart_replays_identically():
    """start_game reseeds, so a second mission on the same engine matches the first."""
    eng = Engine(7)
    runs = []
    for _ in range(2):
        eng.start_game()
        eng.state.enemies[0].revealed = True
        eng.state.squads["ALPHA"].col, eng.state.squads["ALPHA"].row = 5, 3
        eng.process_command("ALPHA ENGAGE")
        for _ in range(3):
            eng.tick()
        runs.append([(m.sender, m.text) for m in eng.state.log])
    assert runs[0] == runs[1]


def test_different_seeds_produce_different_results():
    """Different seeds should produce different combat outcomes."""
    def exchange(seed: int):
        rng = DRNG(seed)
        squad = Squad("ALPHA", "Sgt. Vasquez", 4, 1, SquadStatus.ENGAGED, 1000, 1000)
        enemy = Enemy("E9", 4, 1, 1000, revealed=True)
        return [resolve_combat(squad, enemy, rng) for _ in range(5)]

    assert exchange(1) != exchange(2)
