from gantryscan.model.rig import RIG_GROUPS
from gantryscan.view.widgets.scene_parts import (
    ROLE_FRUSTUM, ROLE_GIZMO, ROLE_SCAN, build_scene_parts
)


def test_every_part_belongs_to_a_rig_group():
    parts = build_scene_parts()
    assert parts
    assert {part.group for part in parts} <= set(RIG_GROUPS)


def test_part_names_unique():
    names = [part.name for part in build_scene_parts()]
    assert len(names) == len(set(names))


def test_scanning_visuals_present():
    roles = {part.role for part in build_scene_parts()}
    assert {ROLE_SCAN, ROLE_GIZMO, ROLE_FRUSTUM} <= roles


def test_meshes_not_empty():
    for part in build_scene_parts():
        assert part.mesh.n_points > 0
        assert part.local.shape == (4, 4)
