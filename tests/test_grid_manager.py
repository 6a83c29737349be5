from gantryscan.view.widgets.grid_manager import GridManager


class FakeActor:
    def __init__(self) -> None:
        self.visible = True

    def SetVisibility(self, visible: bool) -> None:
        self.visible = visible


class FakePlotter:
    """Records meshes added and removed, hands out fake actors."""

    def __init__(self) -> None:
        self.meshes = []
        self.removed = []

    def add_mesh(self, mesh, **kwargs):
        self.meshes.append(mesh)
        return FakeActor()

    def remove_actor(self, actor) -> None:
        self.removed.append(actor)


def test_grid_lines_in_floor_plane():
    mesh = GridManager._build_xz_grid_polydata((-5, 5, -5, 5), spacing=5.0, height=-0.01)
    # 3 lines each way: -5, 0, 5
    assert mesh.n_lines == 6
    assert set(mesh.points[:, 1]) == {-0.01}


def test_build_and_toggle_visibility():
    plotter = FakePlotter()
    grid = GridManager(plotter)
    grid.build()
    assert len(plotter.meshes) == 2

    grid.set_visible(False)
    assert not grid._grid_cell_actor.visible
    assert not grid._grid_section_actor.visible
    grid.set_visible(True)
    assert grid._grid_cell_actor.visible


def test_rebuild_replaces_actors():
    plotter = FakePlotter()
    grid = GridManager(plotter)
    grid.build()
    grid.build()
    assert len(plotter.removed) == 2
