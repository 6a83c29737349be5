"""
Grid Manager
Handles the floor grid under the machine (cells and sections).
"""
from typing import Optional
import numpy as np
import pyvista as pv


class GridManager:
    def __init__(self, plotter: pv.Plotter) -> None:
        self.plotter = plotter
        self.cell_size: float = 1.0
        self.section_size: float = 5.0
        self.extent: float = 20.0
        self.height: float = -0.01

        self._grid_cell_actor: Optional[pv.Actor] = None
        self._grid_section_actor: Optional[pv.Actor] = None

    def build(self) -> None:
        """(Re)creates the grid actors for the current spacing and extent."""
        if self.plotter is None: return

        bounds = (-self.extent, self.extent, -self.extent, self.extent)
        grid_cells = self._build_xz_grid_polydata(bounds, spacing=self.cell_size, height=self.height)
        grid_sections = self._build_xz_grid_polydata(bounds, spacing=self.section_size, height=self.height)

        if self._grid_cell_actor: self.plotter.remove_actor(self._grid_cell_actor)
        if self._grid_section_actor: self.plotter.remove_actor(self._grid_section_actor)

        self._grid_cell_actor = self.plotter.add_mesh(
            grid_cells, color="#1e293b", line_width=1, opacity=0.6, pickable=False, lighting=False
        )
        self._grid_section_actor = self.plotter.add_mesh(
            grid_sections, color="#475569", line_width=1.5, opacity=0.9, pickable=False, lighting=False
        )

    def set_visible(self, visible: bool) -> None:
        for actor in (self._grid_cell_actor, self._grid_section_actor):
            if actor: actor.SetVisibility(visible)

    @staticmethod
    def _build_xz_grid_polydata(bounds, spacing, height) -> pv.PolyData:
        """
        Create a grid in the horizontal XZ plane (world is Y up).

        Args:
            bounds: (x_min, x_max, z_min, z_max)
            spacing: Grid spacing in both directions.
            height: World Y of the grid plane.

        Returns:
            A PyVista PolyData grid object.
        """
        x_min, x_max, z_min, z_max = bounds
        xs = np.arange(np.floor(x_min / spacing) * spacing, np.ceil(x_max / spacing) * spacing + spacing, spacing)
        zs = np.arange(np.floor(z_min / spacing) * spacing, np.ceil(z_max / spacing) * spacing + spacing, spacing)

        n_lines = len(xs) + len(zs)
        if n_lines == 0: return pv.PolyData()

        points = np.empty((n_lines * 2, 3), dtype=float)
        cells = np.empty(n_lines * 3, dtype=int)

        pid, cid = 0, 0
        for x in xs:
            points[pid] = (x, height, z_min)
            points[pid + 1] = (x, height, z_max)
            cells[cid:cid + 3] = (2, pid, pid + 1)
            pid += 2
            cid += 3
        for z in zs:
            points[pid] = (x_min, height, z)
            points[pid + 1] = (x_max, height, z)
            cells[cid:cid + 3] = (2, pid, pid + 1)
            pid += 2
            cid += 3

        return pv.PolyData(points, lines=cells)
