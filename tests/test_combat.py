"""Test squad-vs-enemy exchanges, ongoing firefights and indirect fire."""
from engine.combat import apply_blast, resolve_combat
from engine.engine import Engine
from engine.model import Enemy, Squad, SquadStatus
from engine.rng import DRNG


def make_squad(strength: int = 6, ammo: int = 5, status: SquadStatus = SquadStatus.IDLE) -> Squad:
    return Squad("ALPHA", "Sgt. Vasquez", 4, 1, status, strength, ammo)


def make_enemy(strength: int = 6) -> Enemy:
    # Grid E2 is open ground, no cover modifier
    return Enemy("E9", 4, 1, strength, revealed=True)


def make_engine() -> Engine:
    eng = Engine(seed=42)
    eng.start_game()
    return eng


def test_exchange_always_reduces_combined_strength():
    """The squad lands at least one hit on every exchange."""
    for seed in range(10):
        rng = DRNG(seed)
        squad, enemy = make_squad(), make_enemy()
        while not squad.destroyed and enemy.alive:
            before = squad.strength + enemy.strength
            dealt, taken = resolve_combat(squad, enemy, rng)
            assert dealt >= 1
            assert squad.strength + enemy.strength == before - dealt - taken
            assert squad.strength + enemy.strength < before


def test_exchange_marks_engagement_and_spends_ammo():
    squad, enemy = make_squad(), make_enemy()
    resolve_combat(squad, enemy, DRNG(1))
    assert squad.status in (SquadStatus.ENGAGED, SquadStatus.DESTROYED)
    assert squad.contact == enemy.id
    assert squad.ammo == 4


def test_ambush_denies_return_fire():
    squad, enemy = make_squad(status=SquadStatus.AMBUSH), make_enemy(strength=20)
    dealt, taken = resolve_combat(squad, enemy, DRNG(3))
    assert taken == 0
    assert squad.strength == 6
    # Initiative is spent on first contact
    assert squad.status == SquadStatus.ENGAGED


def test_enemy_killed_when_strength_runs_out():
    squad, enemy = make_squad(), make_enemy(strength=1)
    resolve_combat(squad, enemy, DRNG(0))
    assert enemy.strength == 0
    assert not enemy.alive


def test_squad_destroyed_when_strength_runs_out():
    squad, enemy = make_squad(strength=1), make_enemy(strength=100)
    resolve_combat(squad, enemy, DRNG(0))
    assert squad.strength == 0
    assert squad.status == SquadStatus.DESTROYED
    assert squad.contact is None


def test_dead_enemy_is_a_no_op():
    squad, enemy = make_squad(), make_enemy()
    enemy.alive = False
    assert resolve_combat(squad, enemy, DRNG(0)) == (0, 0)
    assert squad.ammo == 5


def test_firefight_continues_every_tick():
    eng = make_engine()
    alpha = eng.state.squads["ALPHA"]
    enemy = eng.state.enemies[0]
    enemy.revealed = True
    alpha.col, alpha.row = 5, 3
    alpha.status = SquadStatus.ENGAGED
    resolve_combat(alpha, enemy, DRNG(7))
    total_before = alpha.strength + enemy.strength

    for _ in range(5):
        eng.tick()

    assert alpha.strength + enemy.strength < total_before


def test_firefight_ends_when_enemy_falls():
    eng = make_engine()
    alpha = eng.state.squads["ALPHA"]
    enemy = eng.state.enemies[0]
    enemy.revealed = True
    enemy.strength = 1
    enemy.col, enemy.row = 1, 0
    alpha.status = SquadStatus.ENGAGED
    alpha.contact = enemy.id
    msgs = eng.tick()
    assert not enemy.alive
    assert alpha.status == SquadStatus.IDLE
    assert any("Area secure" in m.text for m in msgs)


def test_blast_hits_within_radius():
    eng = make_engine()
    e1, e2 = eng.state.enemies[0], eng.state.enemies[1]
    hit = apply_blast(eng.state, (5, 2), damage=3, danger_close=1)
    assert hit == [e1]
    assert e1.strength == 3
    assert e2.strength == 8


def test_blast_danger_close():
    eng = make_engine()
    alpha = eng.state.squads["ALPHA"]
    apply_blast(eng.state, alpha.pos, damage=3, danger_close=2)
    assert alpha.strength == 4
    assert "Check fire" in eng.state.log.tail(1)[0].text


def test_fire_support_splashes_after_delay():
    eng = make_engine()
    e1 = eng.state.enemies[0]
    eng.process_command("FIRE SUPPORT F4")
    eng.tick()
    assert e1.strength == 6

    msgs = eng.tick()
    assert e1.strength == 3
    assert any("Splash" in m.text and "Rounds complete" in m.text for m in msgs)


def test_air_strike_resolves_after_delay():
    eng = make_engine()
    e1 = eng.state.enemies[0]
    eng.process_command("AIR STRIKE F4")
    msgs = []
    for _ in range(3):
        msgs += eng.tick()
    assert e1.strength == 1
    assert any(m.sender == "FALCON" and "rounds complete" in m.text for m in msgs)


def test_fire_support_on_dead_enemy_is_harmless():
    eng = make_engine()
    e1 = eng.state.enemies[0]
    eng.process_command("FIRE SUPPORT F4")
    e1.alive = False
    for _ in range(3):
        eng.tick()
    assert e1.strength == 6
    assert eng.state.running
