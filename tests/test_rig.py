import pytest

from gantryscan import config
from gantryscan.model.rig import RIG_GROUPS, figurine_scale, rig_transforms, world_position
from gantryscan.model.state import MachineState, INITIAL_STATE
from gantryscan.utils import clamp, map_range


def test_map_range():
    assert map_range(0, 0, 100, -4, 4) == -4
    assert map_range(100, 0, 100, -4, 4) == 4
    assert map_range(50, 0, 100, -4, 4) == 0
    # Inverted output range
    assert map_range(0, 0, 100, 15, 9) == 15
    assert map_range(100, 0, 100, 15, 9) == 9


def test_map_range_extrapolates():
    assert map_range(150, 0, 100, 0, 10) == 15


def test_map_range_degenerate_input_range():
    with pytest.raises(ZeroDivisionError):
        map_range(1.0, 5.0, 5.0, 0.0, 1.0)


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


def test_world_position():
    pos_x, pos_y, head_y = world_position(INITIAL_STATE)
    assert pos_x == pytest.approx(0.0)
    assert pos_y == pytest.approx(0.0)
    assert head_y == pytest.approx(14.4)

    assert world_position(MachineState(x=0, y=100, z=0))[0:3] == pytest.approx((-4.0, 4.0, 15.0))
    assert world_position(MachineState(z=100))[2] == pytest.approx(9.0)


def test_rig_transforms_cover_all_groups():
    transforms = rig_transforms(INITIAL_STATE)
    assert set(transforms) == set(RIG_GROUPS)
    for matrix in transforms.values():
        assert matrix.shape == (4, 4)


def test_rig_head_follows_state():
    state = MachineState(x=100, y=0, z=100)
    head = rig_transforms(state)["head"]
    assert head[0, 3] == pytest.approx(4.0)
    assert head[1, 3] == pytest.approx(9.0)
    assert head[2, 3] == pytest.approx(-4.0 + 0.8 + 0.5)


def test_figurine_scale():
    assert figurine_scale(False, 12.3) == config.FIGURINE_SCALE
    assert abs(figurine_scale(True, 0.2) - config.FIGURINE_SCALE) <= config.FIGURINE_BREATH_AMPLITUDE
