import logging
from collections.abc import Callable
from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any

import tomlkit

from colorviz.color import ColorModel, ColorModelCategory, ColorSpace, RotationDirection
from colorviz.constants import REFERENCE_GAMMA
from colorviz.sampling import ChannelSpec, StepMode

logger = logging.getLogger(__name__)

CURRENT_MODEL = "current"  # space_model that follows the color model


class Dimensionality(str, Enum):
    VERTEX = "vertex"
    EDGE = "edge"
    FACE = "face"
    VOLUME = "volume"


class FaceSlicing(str, Enum):
    X = "x"  # edges step along channel A, faces hold A and vary B and C
    Y = "y"  # edges step along channel B, faces hold B and vary A and C
    Z = "z"  # edges step along channel C, faces hold C and vary A and B


# --- Settings ---
@dataclass
class GammaConfig:
    gamma: tuple[float, float, float] = (2.2, 2.2, 2.2)
    per_component: bool = False
    deform: bool = False  # a fixed 1/2.2 gamma also drives the position

    def exponents(self) -> tuple[float, float, float]:
        """Per-channel exponents for ``Color.component_gamma_transform``."""
        if self.deform:
            return (1.0 / REFERENCE_GAMMA,) * 3
        r, g, b = self.gamma if self.per_component else (self.gamma[0],) * 3
        return r / REFERENCE_GAMMA, g / REFERENCE_GAMMA, b / REFERENCE_GAMMA


@dataclass
class ChannelConfig:
    a: ChannelSpec = field(default_factory=lambda: ChannelSpec(steps=12))
    b: ChannelSpec = field(default_factory=lambda: ChannelSpec(steps=8))
    c: ChannelSpec = field(default_factory=lambda: ChannelSpec(steps=8))

    def specs(self) -> tuple[ChannelSpec, ChannelSpec, ChannelSpec]:
        return self.a, self.b, self.c


@dataclass
class ColorModelConfig:
    category: ColorModelCategory = ColorModelCategory.SPHERICAL
    model: ColorModel = ColorModel.SPHERICAL_HCL
    space: ColorSpace = ColorSpace.XYZ
    space_model: ColorModel | None = ColorModel.RGB  # None follows `model`
    rotation: RotationDirection = RotationDirection.NONE
    mirrored: bool = False

    def __post_init__(self):
        if self.model.category is not self.category:
            raise ValueError(
                f"Color model {self.model.value} is not in category {self.category.value}. "
                f"Must be one of {[m.value for m in self.category.models()]}."
            )

    @property
    def position_model(self) -> ColorModel:
        return self.model if self.space_model is None else self.space_model


@dataclass
class TopologyConfig:
    dimensionality: Dimensionality = Dimensionality.VERTEX
    face_slicing: FaceSlicing = FaceSlicing.Z
    discrete_color: bool = True
    instance_scale: float = 0.1
    line_scale: float = 0.01


@dataclass
class VisualizationSettings:
    viz_scale: float = 1.0
    visualization_alpha: float = 1.0
    component_limit: tuple[float, float, float] = (1.0, 1.0, 1.0)
    gamma: GammaConfig = field(default_factory=GammaConfig)
    channels: ChannelConfig = field(default_factory=ChannelConfig)
    color: ColorModelConfig = field(default_factory=ColorModelConfig)
    topology: TopologyConfig = field(default_factory=TopologyConfig)


# --- TOML ---
def _enum(enum_cls: type[Enum]) -> Callable[[Any], Enum]:
    def convert(value):
        if isinstance(value, enum_cls):
            return value
        try:
            return enum_cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Invalid {enum_cls.__name__}: {value}. Must be one of {[m.value for m in enum_cls]}."
            ) from None

    return convert


def _triple(value) -> tuple[float, float, float]:
    if len(value) != 3:
        raise ValueError(f"Expected 3 values, got {list(value)}")
    a, b, c = (float(v) for v in value)
    return a, b, c


def _space_model(value) -> ColorModel | None:
    if value is None or str(value).strip().lower() == CURRENT_MODEL:
        return None
    return _enum(ColorModel)(value)


def space_model_label(space_model: ColorModel | None) -> str:
    """Name of a ``space_model`` choice, ``"current"`` when it follows the color model."""
    return CURRENT_MODEL if space_model is None else space_model.value


# position model choices, None follows the color model
SPACE_MODEL_CHOICES: tuple[ColorModel | None, ...] = (None, *ColorModel)


def _section(cls, data: dict, converters: dict[str, Callable[[Any], Any]]):
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown keys for {cls.__name__}: {sorted(unknown)}")
    return cls(**{key: converters.get(key, lambda v: v)(value) for key, value in data.items()})


def _channel(data: dict) -> ChannelSpec:
    return _section(
        ChannelSpec,
        data,
        {"start": float, "end": float, "steps": int, "step_mode": _enum(StepMode)},
    )


def settings_from_dict(data: dict) -> VisualizationSettings:
    """Build settings from nested plain data, as read from a TOML file. Missing keys keep their defaults."""
    data = dict(data)
    sections = {
        "gamma": lambda d: _section(GammaConfig, d, {"gamma": _triple, "per_component": bool, "deform": bool}),
        "channels": lambda d: _section(ChannelConfig, d, {"a": _channel, "b": _channel, "c": _channel}),
        "color": lambda d: _section(
            ColorModelConfig,
            d,
            {
                "category": _enum(ColorModelCategory),
                "model": _enum(ColorModel),
                "space": _enum(ColorSpace),
                "space_model": _space_model,
                "rotation": _enum(RotationDirection),
                "mirrored": bool,
            },
        ),
        "topology": lambda d: _section(
            TopologyConfig,
            d,
            {
                "dimensionality": _enum(Dimensionality),
                "face_slicing": _enum(FaceSlicing),
                "discrete_color": bool,
                "instance_scale": float,
                "line_scale": float,
            },
        ),
    }
    for name, build in sections.items():
        if name in data:
            data[name] = build(data[name])

    return _section(
        VisualizationSettings,
        data,
        {"viz_scale": float, "visualization_alpha": float, "component_limit": _triple},
    )


def load_settings(path: str | Path) -> VisualizationSettings:
    logger.info(f"Loading settings from {path}")
    with open(path, encoding="utf-8") as f:
        document = tomlkit.parse(f.read())
    return settings_from_dict(document.unwrap())


def _plain(value):
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


def _table(obj):
    table = tomlkit.table()
    for f in fields(obj):
        value = getattr(obj, f.name)
        if f.name == "space_model" and value is None:
            value = CURRENT_MODEL
        table.add(f.name, _plain(value))
    return table


def dump_settings(settings: VisualizationSettings) -> str:
    """Serialize settings to TOML text that ``load_settings`` reads back."""
    doc = tomlkit.document()
    doc.add("viz_scale", settings.viz_scale)
    doc.add("visualization_alpha", settings.visualization_alpha)
    doc.add("component_limit", list(settings.component_limit))
    doc.add("gamma", _table(settings.gamma))

    channels = tomlkit.table()
    for name, spec in zip("abc", settings.channels.specs()):
        channels.add(name, _table(spec))
    doc.add("channels", channels)

    doc.add("color", _table(settings.color))
    doc.add("topology", _table(settings.topology))
    return tomlkit.dumps(doc)
