import os

import pytest

from colorviz.color import ColorModel, ColorModelCategory
from colorviz.config import ChannelConfig, ColorModelConfig, Dimensionality, TopologyConfig, VisualizationSettings
from colorviz.sampling import ChannelSpec


@pytest.fixture(scope="session")
def project_root(pytestconfig) -> str:
    return str(pytestconfig.rootdir)


@pytest.fixture(scope="session")
def examples_dir(project_root) -> str:
    return os.path.join(project_root, "examples")


@pytest.fixture
def rgb_settings():
    """Settings factory sampling the RGB cube, so every grid coordinate maps to a distinct vertex."""

    def make(steps=(2, 2, 2), dimensionality=Dimensionality.VERTEX, **topology) -> VisualizationSettings:
        a, b, c = (ChannelSpec(steps=n) for n in steps)
        return VisualizationSettings(
            channels=ChannelConfig(a=a, b=b, c=c),
            color=ColorModelConfig(category=ColorModelCategory.CUBIC, model=ColorModel.RGB, space_model=None),
            topology=TopologyConfig(dimensionality=dimensionality, **topology),
        )

    return make
