import logging
from enum import Enum

import polyscope as ps
import polyscope.imgui as psim

from colorviz.builders import build_topology
from colorviz.color import ColorSpace
from colorviz.config import SPACE_MODEL_CHOICES, Dimensionality, FaceSlicing, VisualizationSettings, space_model_label
from colorviz.structures import Structure, make_structure
from colorviz.topology import EdgeList, FaceList, VertexList
from colorviz.ui import ui_combo, ui_tree_node

logger = logging.getLogger(__name__)


# App
class PolyscopeApp:
    def __init__(self, settings: VisualizationSettings):
        self.settings = settings

        self.topology: VertexList | None = None
        self.structure: Structure | None = None

        self._need_rebuild = True

    def rebuild(self):
        """Build the topology from the current settings and replace the registered structure."""
        if self.structure is not None and self.structure.is_registered:
            self.structure.remove()

        self.topology = build_topology(self.settings, progress=True)
        self.structure = make_structure(self.topology, self.settings)
        self.structure.register()

    def _ui_top_text_brief(self):
        """A top text bar showing brief"""
        with ui_tree_node("Brief", open_first_time=True) as expanded:
            if not expanded:
                return
            color = self.settings.color
            psim.Text(f"Model: {color.model.value}, space: {color.space.value} ({color.position_model.value})")
            psim.Text(f"Vertices: {len(self.topology.registry):,}")
            if isinstance(self.topology, EdgeList):
                psim.Text(f"Edges: {len(self.topology.edges):,}")
            elif isinstance(self.topology, FaceList):
                psim.Text(f"Faces: {len(self.topology.faces):,}")
            psim.Separator()

    def _ui_enum_combo(self, label: str, current: Enum, options) -> Enum:
        with ui_combo(label, current.value) as expanded:
            if expanded:
                for option in options:
                    selected, _ = psim.Selectable(option.value, option is current)
                    if selected and option is not current:
                        self._need_rebuild = True
                        return option
        return current

    def _ui_space_model_combo(self):
        """Axis model of the positions, either fixed or following the color model."""
        color = self.settings.color
        with ui_combo("Axis", space_model_label(color.space_model)) as expanded:
            if expanded:
                for option in SPACE_MODEL_CHOICES:
                    selected, _ = psim.Selectable(space_model_label(option), option is color.space_model)
                    if selected and option is not color.space_model:
                        color.space_model = option
                        self._need_rebuild = True

    def _ui_topology_controls(self):
        """Changing any of these rebuilds the topology on the next frame."""
        with ui_tree_node("Topology", open_first_time=True) as expanded:
            if not expanded:
                return

            topology = self.settings.topology
            topology.dimensionality = self._ui_enum_combo("Shape", topology.dimensionality, Dimensionality)
            topology.face_slicing = self._ui_enum_combo("Slicing", topology.face_slicing, FaceSlicing)

            color = self.settings.color
            color.space = self._ui_enum_combo("Color Space", color.space, ColorSpace)
            self._ui_space_model_combo()

            changed, discrete = psim.Checkbox("Discrete Color", topology.discrete_color)
            if changed:
                topology.discrete_color = discrete
                self._need_rebuild = True

            changed, mirrored = psim.Checkbox("Mirror", color.mirrored)
            if changed:
                color.mirrored = mirrored
                self._need_rebuild = True

            psim.Separator()

    def callback(self) -> None:
        if self._need_rebuild:
            self._need_rebuild = False
            self.rebuild()

        # ui
        self._ui_top_text_brief()
        self._ui_topology_controls()
        self.structure.ui()

    def run(self):
        ps.init()
        ps.set_user_callback(self.callback)
        ps.show()
