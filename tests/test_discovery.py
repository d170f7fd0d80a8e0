"""Test fog of war: POIs, enemies and VIPER are revealed by proximity."""
from engine.engine import Engine
from engine.model import SquadStatus


def make_engine() -> Engine:
    eng = Engine(seed=42)
    eng.start_game()
    return eng


def place(eng: Engine, callsign: str, col: int, row: int) -> None:
    squad = eng.state.squads[callsign]
    squad.col, squad.row = col, row


def test_nothing_revealed_at_start():
    eng = make_engine()
    eng.tick()
    assert not any(p.revealed for p in eng.state.pois)
    assert not any(e.revealed for e in eng.state.enemies)


def test_finding_viper_sets_flag_and_calls_it_in():
    eng = make_engine()
    place(eng, "ALPHA", 3, 4)
    msgs = eng.tick()
    assert eng.state.viper_found
    assert eng.state.viper_survivors == 3
    urgent = [m for m in msgs if "VIPER" in m.text and "survivors" in m.text]
    assert urgent and urgent[0].urgent


def test_viper_found_only_once():
    eng = make_engine()
    place(eng, "ALPHA", 3, 4)
    msgs = []
    for _ in range(4):
        msgs += eng.tick()
    assert eng.state.viper_found
    assert len([m for m in msgs if "We have VIPER" in m.text]) == 1


def test_village_revealed():
    eng = make_engine()
    village = eng.state.poi("village")
    assert not village.revealed
    place(eng, "ALPHA", 3, 1)
    msgs = eng.tick()
    assert village.revealed
    assert any("village" in m.text for m in msgs)


def test_enemy_revealed_silently():
    eng = make_engine()
    enemy = eng.state.enemies[0]
    assert not enemy.revealed
    place(eng, "ALPHA", 5, 2)
    msgs = eng.tick()
    assert enemy.revealed
    assert not any("Enemy" in m.text or "Contact" in m.text for m in msgs)


def test_ambush_gives_advantage_message():
    eng = make_engine()
    place(eng, "ALPHA", 4, 3)
    eng.state.squads["ALPHA"].status = SquadStatus.AMBUSH
    msgs = eng.tick()
    assert eng.state.enemies[0].revealed
    assert any("drop on them" in m.text for m in msgs)
    # Ambush holds until the squad actually opens fire
    assert eng.state.squads["ALPHA"].status == SquadStatus.AMBUSH


def test_dead_enemy_never_revealed():
    eng = make_engine()
    eng.state.enemies[0].alive = False
    place(eng, "ALPHA", 5, 2)
    eng.tick()
    assert not eng.state.enemies[0].revealed


def test_dustoff_does_not_search():
    eng = make_engine()
    place(eng, "DUSTOFF", 3, 4)
    eng.tick()
    assert not eng.state.viper_found


def test_destroyed_squad_does_not_search():
    eng = make_engine()
    place(eng, "ALPHA", 3, 4)
    eng.state.squads["ALPHA"].strength = 0
    eng.state.squads["ALPHA"].status = SquadStatus.DESTROYED
    eng.tick()
    assert not eng.state.viper_found


def test_walking_into_enemy_forces_contact():
    eng = make_engine()
    place(eng, "ALPHA", 5, 3)
    msgs = eng.tick()
    alpha = eng.state.squads["ALPHA"]
    assert alpha.status == SquadStatus.ENGAGED
    assert alpha.contact == "E1"
    assert any("Contact" in m.text for m in msgs)
