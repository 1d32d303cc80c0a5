import pytest

from flappy.data_models import Actor, Armed, Obstacle, UNARMED
from flappy.physics_core import PhysicsCore, check_collision

FIELD_HEIGHT = 760


def make_actor(y: float, x: float = 60, size: float = 100) -> Actor:
    return Actor(x=x, y=y, width=size, height=size)


# ----------------- Actor physics -----------------

def test_activate_arms_and_kicks_in_one_call() -> None:
    core = PhysicsCore(gravity=0.28, jump_impulse=-5.0)
    actor = make_actor(342)
    core.activate(actor)
    assert actor.motion == Armed(velocity=-5.0)


def test_activate_again_reapplies_impulse() -> None:
    core = PhysicsCore(gravity=0.28, jump_impulse=-5.0)
    actor = make_actor(342)
    core.activate(actor)
    core.integrate(actor)
    core.integrate(actor)
    core.activate(actor)
    assert actor.motion == Armed(velocity=-5.0)


def test_integrate_is_noop_while_unarmed() -> None:
    core = PhysicsCore()
    actor = make_actor(342)
    for _ in range(50):
        core.integrate(actor)
    assert actor.y == 342
    assert actor.motion is UNARMED
    assert not actor.armed


def test_integrate_applies_gravity_then_moves() -> None:
    core = PhysicsCore(gravity=0.28, jump_impulse=-5.0)
    actor = make_actor(342)
    core.activate(actor)
    core.integrate(actor)
    assert actor.motion.velocity == pytest.approx(-4.72)
    assert actor.y == pytest.approx(337.28)
    core.integrate(actor)
    assert actor.motion.velocity == pytest.approx(-4.44)
    assert actor.y == pytest.approx(332.84)


def test_reset_disarms_and_repositions() -> None:
    core = PhysicsCore()
    actor = make_actor(10)
    core.activate(actor)
    core.reset(actor, 342.0)
    assert actor.y == 342.0
    assert actor.motion is UNARMED


# ----------------- Collision -----------------

@pytest.mark.parametrize("y", [0, 660, 300])
def test_flush_with_field_edges_is_not_a_collision(y) -> None:
    assert not check_collision(make_actor(y), [], FIELD_HEIGHT)


@pytest.mark.parametrize("y", [-0.0001, 660.0001])
def test_leaving_field_is_a_collision(y) -> None:
    assert check_collision(make_actor(y), [], FIELD_HEIGHT)


def test_actor_below_gap_collides() -> None:
    pipe = Obstacle(x=100, top=100, bottom=360, width=80)
    assert check_collision(make_actor(400), [pipe], FIELD_HEIGHT)


def test_actor_inside_gap_passes() -> None:
    pipe = Obstacle(x=100, top=100, bottom=360, width=80)
    assert not check_collision(make_actor(150), [pipe], FIELD_HEIGHT)


def test_actor_exactly_filling_gap_passes() -> None:
    pipe = Obstacle(x=100, top=100, bottom=360, width=80)
    actor = Actor(x=60, y=100, width=100, height=260)
    assert not check_collision(actor, [pipe], FIELD_HEIGHT)


def test_actor_above_gap_collides() -> None:
    pipe = Obstacle(x=100, top=100, bottom=360, width=80)
    assert check_collision(make_actor(99.5), [pipe], FIELD_HEIGHT)


@pytest.mark.parametrize("pipe_x", [160, -20])
def test_edge_touching_horizontally_is_not_overlap(pipe_x) -> None:
    # Gap nowhere near the actor: only the horizontal test can save it.
    pipe = Obstacle(x=pipe_x, top=600, bottom=700, width=80)
    assert not check_collision(make_actor(300), [pipe], FIELD_HEIGHT)


def test_any_overlapping_obstacle_triggers_collision() -> None:
    clear = Obstacle(x=100, top=200, bottom=460, width=80)
    blocking = Obstacle(x=140, top=500, bottom=700, width=80)
    far = Obstacle(x=400, top=0, bottom=10, width=80)
    assert check_collision(make_actor(300), [clear, far, blocking], FIELD_HEIGHT)
    assert not check_collision(make_actor(300), [clear, far], FIELD_HEIGHT)
