import os

import pytest
import tomlkit

from colorviz.color import ColorModel, ColorModelCategory, ColorSpace, RotationDirection
from colorviz.config import (
    ColorModelConfig,
    Dimensionality,
    FaceSlicing,
    GammaConfig,
    VisualizationSettings,
    dump_settings,
    load_settings,
    settings_from_dict,
)
from colorviz.sampling import ChannelSpec, StepMode


def test_gamma_exponents():
    assert GammaConfig().exponents() == pytest.approx((1.0, 1.0, 1.0))
    assert GammaConfig(gamma=(4.4, 1.1, 2.2)).exponents() == pytest.approx((2.0, 2.0, 2.0))
    assert GammaConfig(gamma=(4.4, 1.1, 2.2), per_component=True).exponents() == pytest.approx((2.0, 0.5, 1.0))


def test_gamma_deform_uses_fixed_exponent():
    exponents = GammaConfig(gamma=(4.4, 1.1, 2.2), per_component=True, deform=True).exponents()
    assert exponents == pytest.approx((1 / 2.2, 1 / 2.2, 1 / 2.2))


def test_model_must_match_category():
    with pytest.raises(ValueError, match="not in category"):
        ColorModelConfig(category=ColorModelCategory.CUBIC, model=ColorModel.YUV)


def test_position_model():
    assert ColorModelConfig().position_model is ColorModel.RGB
    config = ColorModelConfig(category=ColorModelCategory.CUBIC, model=ColorModel.CUBIC_HSV, space_model=None)
    assert config.position_model is ColorModel.CUBIC_HSV


def test_settings_from_empty_dict():
    assert settings_from_dict({}) == VisualizationSettings()


def test_settings_from_partial_dict():
    settings = settings_from_dict(
        {
            "viz_scale": 2,
            "channels": {"a": {"steps": 3, "step_mode": "Reverse"}},
            "color": {"category": "CUBIC", "model": "cubic_hsl", "space": "cylindrical", "space_model": "current"},
            "topology": {"dimensionality": "volume"},
        }
    )
    assert settings.viz_scale == 2.0
    assert settings.channels.a == ChannelSpec(steps=3, step_mode=StepMode.REVERSE)
    assert settings.channels.b == ChannelSpec(steps=8)
    assert settings.color.model is ColorModel.CUBIC_HSL
    assert settings.color.space is ColorSpace.CYLINDRICAL
    assert settings.color.space_model is None
    assert settings.color.rotation is RotationDirection.NONE
    assert settings.topology.dimensionality is Dimensionality.VOLUME
    assert settings.topology.face_slicing is FaceSlicing.Z


def test_unknown_key_raises():
    with pytest.raises(ValueError, match="Unknown keys"):
        settings_from_dict({"topology": {"shape": "face"}})


def test_invalid_enum_raises():
    with pytest.raises(ValueError, match="Invalid ColorSpace"):
        settings_from_dict({"color": {"space": "conical"}})


def test_zero_steps_raises():
    with pytest.raises(ValueError):
        settings_from_dict({"channels": {"b": {"steps": 0}}})


def test_component_limit_needs_three_values():
    with pytest.raises(ValueError, match="Expected 3 values"):
        settings_from_dict({"component_limit": [1.0, 1.0]})


def test_load_example_settings(examples_dir):
    settings = load_settings(os.path.join(examples_dir, "hcl_faces.toml"))
    assert settings.channels.a.steps == 24
    assert settings.channels.c.step_mode is StepMode.INCLUSIVE
    assert settings.color.model is ColorModel.SPHERICAL_HCL
    assert settings.topology.dimensionality is Dimensionality.FACE
    assert settings.topology.discrete_color is False


def test_dump_settings_reads_back(tmp_path):
    settings = VisualizationSettings(
        viz_scale=0.5,
        component_limit=(0.5, 1.0, 0.25),
        gamma=GammaConfig(gamma=(1.0, 2.0, 3.0), per_component=True),
        color=ColorModelConfig(
            category=ColorModelCategory.LUMA_CHROMA,
            model=ColorModel.YUV,
            space=ColorSpace.SYMMETRIC,
            space_model=None,
            rotation=RotationDirection.CLOCKWISE,
            mirrored=True,
        ),
    )
    settings.topology.face_slicing = FaceSlicing.X

    text = dump_settings(settings)
    assert tomlkit.parse(text)["color"]["space_model"] == "current"

    path = tmp_path / "settings.toml"
    path.write_text(text, encoding="utf-8")
    assert load_settings(path) == settings
