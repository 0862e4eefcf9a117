import pytest

from pslab.params import GridConfig, SimParams, tick_interval


def test_defaults_match_lab_defaults():
    params = SimParams()
    assert params.step_cost == -0.01
    assert params.goal_reward == 1.0
    assert params.lava_penalty == -1.0
    assert params.wind is False
    assert (params.gamma, params.lam, params.eta) == (0.01, 1.0, 0.05)
    assert (params.epsilon, params.tau) == (0.1, 1.0)


def test_out_of_range_values_are_clamped():
    params = SimParams(
        step_cost=-1.0,
        goal_reward=50,
        lava_penalty=0.0,
        gamma=0.0,
        lam=-2,
        eta=3,
        epsilon=-0.5,
        tau=100,
    )
    assert params.step_cost == -0.2
    assert params.goal_reward == 10.0
    assert params.lava_penalty == -0.1
    assert params.gamma == 0.01
    assert params.lam == 0.0
    assert params.eta == 1.0
    assert params.epsilon == 0.0
    assert params.tau == 5.0


def test_non_numeric_values_fall_back_to_defaults():
    params = SimParams(epsilon="lots", tau=None, wind="yes")
    assert params.epsilon == 0.1
    assert params.tau == 1.0
    assert params.wind is True


def test_from_dict_ignores_unknown_keys():
    params = SimParams.from_dict({"gamma": 0.5, "beta": 3})
    assert params.gamma == 0.5


def test_grid_config_clamps_and_coerces():
    config = GridConfig(width="abc", height=100, preset="spiral", tick_rate=0)
    assert config.width == 6
    assert config.height == 22
    assert config.preset == "open"
    assert config.tick_rate == 1.0
    assert GridConfig(width="12", height=3).width == 12
    assert GridConfig(width="12", height=3).height == 4


def test_tick_interval_floor():
    assert tick_interval(40) == pytest.approx(0.025)
    assert tick_interval(100) == pytest.approx(0.020)
    assert tick_interval(12) == pytest.approx(1 / 12)
    assert GridConfig(tick_rate=4).tick_interval == pytest.approx(0.25)
