import numpy as np

from pslab.env import GridWorld, TransitionModel
from pslab.types import DOWN, LEFT, NUM_ACTIONS, RIGHT, UP


class SequenceRng:
    def __init__(self, values):
        self._values = list(values)

    def random(self):
        return self._values.pop(0)


def test_moves_follow_action_deltas():
    world = GridWorld.from_preset(5, 5, "open")
    model = TransitionModel(world)
    assert model.attempt_move(2, 2, UP) == (2, 1)
    assert model.attempt_move(2, 2, RIGHT) == (3, 2)
    assert model.attempt_move(2, 2, DOWN) == (2, 3)
    assert model.attempt_move(2, 2, LEFT) == (1, 2)


def test_boundary_and_wall_bumps_stay_put():
    world = GridWorld.from_preset(5, 5, "open")
    world.set_cell(1, 4, "wall")
    model = TransitionModel(world)
    assert model.attempt_move(0, 4, LEFT) == (0, 4)
    assert model.attempt_move(0, 4, DOWN) == (0, 4)
    move = model.step(0, 4, RIGHT)
    assert move.position == (0, 4)
    assert move.blocked


def test_wind_rotates_around_action_cycle():
    world = GridWorld.from_preset(5, 5, "open")
    model = TransitionModel(world, SequenceRng([0.05, 0.15, 0.5, 0.05, 0.15]))
    assert model.perturb(UP, wind=True) == RIGHT
    assert model.perturb(UP, wind=True) == LEFT
    assert model.perturb(UP, wind=True) == UP
    assert model.perturb(LEFT, wind=True) == UP
    assert model.perturb(RIGHT, wind=True) == UP


def test_no_wind_never_draws():
    world = GridWorld.from_preset(5, 5, "open")
    model = TransitionModel(world, SequenceRng([]))
    for action in range(NUM_ACTIONS):
        assert model.perturb(action, wind=False) == action


def test_moves_are_always_legal_in_maze():
    world = GridWorld.from_preset(9, 9, "maze")
    rng = np.random.default_rng(3)
    model = TransitionModel(world, rng)
    x, y = world.find_start()
    for _ in range(2000):
        action = int(rng.integers(NUM_ACTIONS))
        nx, ny = model.attempt_move(x, y, action, wind=True)
        assert world.is_legal(nx, ny)
        assert abs(nx - x) + abs(ny - y) <= 1
        x, y = nx, ny
