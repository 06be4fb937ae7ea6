import logging
from abc import ABC, abstractmethod

import polyscope as ps
import polyscope.imgui as psim

from colorviz.config import VisualizationSettings
from colorviz.constants import NAME_COLOR_QUANT, NAME_EDGES, NAME_FACES, NAME_POINTS, POINT_RENDER_MODES
from colorviz.geometry_utils import curve_arrays, mesh_arrays, point_arrays
from colorviz.topology import EdgeList, FaceList, VertexList
from colorviz.ui import ui_combo, ui_item_width, ui_tree_node

logger = logging.getLogger(__name__)


class Structure(ABC):
    """Abstract base class for a built topology shown as a Polyscope structure."""

    def __init__(self, name: str, settings: VisualizationSettings, enabled: bool = True):
        self.name = name
        self.settings = settings
        self.enabled = enabled

        self._is_registered = False

    def register(self, force: bool = False):
        """Registers the structure's geometry and colors with Polyscope (runs once unless forced)."""
        if not self.is_valid():
            logger.warning(f"Nothing to register for structure: '{self.name}'")
            return
        if self._is_registered and not force:
            return
        self._do_register()
        if self.polyscope_structure:
            self.polyscope_structure.set_enabled(self.enabled)
            if self.settings.visualization_alpha < 1.0:
                self.polyscope_structure.set_transparency(self.settings.visualization_alpha)
            self._is_registered = True

    @property
    def is_registered(self) -> bool:
        return self._is_registered

    def remove(self):
        if not self._is_registered:
            raise RuntimeError(f"Structure '{self.name}' must be registered before it is removed.")
        self.polyscope_structure.remove()
        self._is_registered = False

    def set_enabled(self, enabled: bool):
        """Enable or disable the structure in the UI."""
        self.enabled = enabled
        if self.polyscope_structure:
            self.polyscope_structure.set_enabled(self.enabled)

    def _ui_visibility_controls(self):
        changed, show = psim.Checkbox("Show", self.enabled)
        if changed:
            self.set_enabled(show)

    @property
    @abstractmethod
    def polyscope_structure(self):
        """Get the underlying Polyscope structure object."""
        pass

    @abstractmethod
    def _do_register(self):
        """Subclass-specific geometry registration logic."""
        pass

    @abstractmethod
    def is_valid(self) -> bool:
        """Check if the structure has data to be registered."""
        pass

    @abstractmethod
    def ui(self):
        """Update structure related UI"""
        pass


class PointCloudStructure(Structure):
    """Isolated vertices drawn as a point cloud."""

    def __init__(self, settings: VisualizationSettings, vertex_list: VertexList, **kwargs):
        super().__init__(NAME_POINTS, settings, **kwargs)
        self.vertex_list = vertex_list
        self._points_render_mode = POINT_RENDER_MODES[0]

    @property
    def polyscope_structure(self):
        return ps.get_point_cloud(self.name)

    def is_valid(self) -> bool:
        return len(self.vertex_list.registry) > 0

    def _do_register(self):
        logger.debug(f"Registering point cloud: '{self.name}'")
        positions, colors = point_arrays(self.vertex_list, self.settings.viz_scale)
        p = ps.register_point_cloud(self.name, positions)
        p.set_radius(self.settings.topology.instance_scale, relative=False)
        p.set_point_render_mode(self._points_render_mode)
        p.add_color_quantity(NAME_COLOR_QUANT, colors[:, :3], enabled=True)

    def ui(self):
        with ui_tree_node("Points", open_first_time=True) as expanded:
            if not expanded:
                return

            with ui_item_width(100):
                self._ui_visibility_controls()

                psim.SameLine()

                changed, radius = psim.SliderFloat(
                    "Radius", self.settings.topology.instance_scale, v_min=0.0, v_max=2.0, format="%.4g"
                )
                if changed:
                    self.settings.topology.instance_scale = radius
                    self.polyscope_structure.set_radius(radius, relative=False)

                psim.SameLine()

                with ui_combo("Render Mode", self._points_render_mode) as expanded:
                    if expanded:
                        for mode in POINT_RENDER_MODES:
                            selected, _ = psim.Selectable(mode, mode == self._points_render_mode)
                            if selected and mode != self._points_render_mode:
                                self._points_render_mode = mode
                                self.polyscope_structure.set_point_render_mode(mode)

            psim.Separator()


class CurveNetworkStructure(Structure):
    """Edges drawn as line segments, solid or gradient colored."""

    def __init__(self, settings: VisualizationSettings, edge_list: EdgeList, **kwargs):
        super().__init__(NAME_EDGES, settings, **kwargs)
        self.edge_list = edge_list

    @property
    def polyscope_structure(self):
        return ps.get_curve_network(self.name)

    def is_valid(self) -> bool:
        return len(self.edge_list.edges) > 0

    def _do_register(self):
        logger.debug(f"Registering curve network: '{self.name}'")
        nodes, edges, colors, defined_on = curve_arrays(
            self.edge_list, self.settings.viz_scale, self.settings.topology.discrete_color
        )
        c = ps.register_curve_network(self.name, nodes, edges)
        c.set_radius(self.settings.topology.line_scale, relative=False)
        c.add_color_quantity(NAME_COLOR_QUANT, colors[:, :3], defined_on=defined_on, enabled=True)

    def ui(self):
        with ui_tree_node("Edges", open_first_time=True) as expanded:
            if not expanded:
                return

            with ui_item_width(100):
                self._ui_visibility_controls()

                psim.SameLine()

                changed, radius = psim.SliderFloat(
                    "Line Scale", self.settings.topology.line_scale, v_min=0.0, v_max=0.2, format="%.4g"
                )
                if changed:
                    self.settings.topology.line_scale = radius
                    self.polyscope_structure.set_radius(radius, relative=False)

            psim.Separator()


class SurfaceMeshStructure(Structure):
    """Quads (faces or a volume boundary) drawn as a triangle mesh."""

    def __init__(self, settings: VisualizationSettings, face_list: FaceList, **kwargs):
        super().__init__(NAME_FACES, settings, **kwargs)
        self.face_list = face_list

    @property
    def polyscope_structure(self):
        return ps.get_surface_mesh(self.name)

    def is_valid(self) -> bool:
        return len(self.face_list.faces) > 0

    def _do_register(self):
        logger.debug(f"Registering surface mesh: '{self.name}'")
        vertices, triangles, colors, defined_on = mesh_arrays(
            self.face_list, self.settings.viz_scale, self.settings.topology.discrete_color
        )
        mesh = ps.register_surface_mesh(self.name, vertices, triangles)
        mesh.set_material("flat")
        mesh.set_back_face_policy("identical")  # quads are seen from both sides
        mesh.add_color_quantity(NAME_COLOR_QUANT, colors[:, :3], defined_on=defined_on, enabled=True)

    def ui(self):
        with ui_tree_node("Faces", open_first_time=True) as expanded:
            if not expanded:
                return

            self._ui_visibility_controls()

            psim.Separator()


def make_structure(topology: VertexList, settings: VisualizationSettings) -> Structure:
    """Pick the structure that draws ``topology``."""
    if isinstance(topology, FaceList):
        return SurfaceMeshStructure(settings, topology)
    if isinstance(topology, EdgeList):
        return CurveNetworkStructure(settings, topology)
    return PointCloudStructure(settings, topology)
