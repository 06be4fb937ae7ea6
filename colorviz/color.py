"""Color models, coordinate spaces and the per-channel color adjustments.

Every color is a 3-channel coordinate in one of the models below plus an alpha
value. All conversions go through RGB (the unit cube) and are closed form:

- ``RGB``: identity.
- ``CMY``: ``1 - rgb``.
- ``CUBIC_HSV`` / ``CUBIC_HSL``: the usual hexcone models. Hue wraps, the other
  two channels and the RGB input are clipped to ``[0, 1]``.
- ``SPHERICAL_HCL``: spherical coordinates about the gray diagonal. Luma is the
  radius (white has luma 1), chroma the polar angle (primaries have chroma 1)
  and hue the azimuth (red 0, green 1/3, blue 2/3).
- ``YUV``: BT.601 luma with centered chroma, U and V in ``[-0.5, 0.5]``.

Spaces embed the three channels ``(a, b, c)`` of a model into 3D, Y axis up:

- ``XYZ``: ``(a, b, c)`` as-is.
- ``CYLINDRICAL``: angle ``2 pi a``, radius ``b``, height ``c``.
- ``SYMMETRIC``: a double cone, radius ``b (1 - |2c - 1|)``, height ``2c - 1``.

Out-of-domain input outside the clipped cases propagates as NaN.
"""

import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

import numpy as np
from matplotlib.colors import hsv_to_rgb, rgb_to_hsv

Triple = tuple[float, float, float]

_SQRT3 = math.sqrt(3.0)
_TAU = 2.0 * math.pi

# orthonormal frame around the gray diagonal
_GRAY_AXIS = (1.0 / _SQRT3, 1.0 / _SQRT3, 1.0 / _SQRT3)
_RED_AXIS = (2.0 / math.sqrt(6.0), -1.0 / math.sqrt(6.0), -1.0 / math.sqrt(6.0))
_GREEN_BLUE_AXIS = (0.0, 1.0 / math.sqrt(2.0), -1.0 / math.sqrt(2.0))

# angle between the gray diagonal and a primary
_MAX_POLAR_ANGLE = math.acos(1.0 / _SQRT3)

# BT.601 luma weights
_KR, _KG, _KB = 0.299, 0.587, 0.114


class ColorModelCategory(str, Enum):
    SPHERICAL = "spherical"
    CUBIC = "cubic"
    LUMA_CHROMA = "luma_chroma"

    def models(self) -> tuple["ColorModel", ...]:
        return tuple(model for model in ColorModel if model.category is self)


class ColorModel(str, Enum):
    SPHERICAL_HCL = "spherical_hcl"
    CUBIC_HSV = "cubic_hsv"
    CUBIC_HSL = "cubic_hsl"
    YUV = "yuv"
    RGB = "rgb"
    CMY = "cmy"

    @property
    def category(self) -> ColorModelCategory:
        return _MODEL_CATEGORIES[self]

    @property
    def is_luma_chroma(self) -> bool:
        return self.category is ColorModelCategory.LUMA_CHROMA


_MODEL_CATEGORIES = {
    ColorModel.SPHERICAL_HCL: ColorModelCategory.SPHERICAL,
    ColorModel.CUBIC_HSV: ColorModelCategory.CUBIC,
    ColorModel.CUBIC_HSL: ColorModelCategory.CUBIC,
    ColorModel.RGB: ColorModelCategory.CUBIC,
    ColorModel.CMY: ColorModelCategory.CUBIC,
    ColorModel.YUV: ColorModelCategory.LUMA_CHROMA,
}


class ColorSpace(str, Enum):
    XYZ = "xyz"
    CYLINDRICAL = "cylindrical"
    SYMMETRIC = "symmetric"


class RotationDirection(str, Enum):
    NONE = "none"
    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


def _clip(x: float) -> float:
    return min(max(x, 0.0), 1.0)


def _dot(p: Sequence[float], q: Sequence[float]) -> float:
    return p[0] * q[0] + p[1] * q[1] + p[2] * q[2]


# --- model <-> RGB ---
def _hsv_to_rgb(h: float, s: float, v: float) -> Triple:
    r, g, b = hsv_to_rgb(np.array([h % 1.0, _clip(s), _clip(v)], dtype=np.float64)).tolist()
    return r, g, b


def _rgb_to_hsv(r: float, g: float, b: float) -> Triple:
    h, s, v = rgb_to_hsv(np.array([_clip(r), _clip(g), _clip(b)], dtype=np.float64)).tolist()
    return h, s, v


def _hsl_to_rgb(h: float, s: float, lightness: float) -> Triple:
    s, lightness = _clip(s), _clip(lightness)
    v = lightness + s * min(lightness, 1.0 - lightness)
    s_v = 0.0 if v == 0.0 else 2.0 * (1.0 - lightness / v)
    return _hsv_to_rgb(h, s_v, v)


def _rgb_to_hsl(r: float, g: float, b: float) -> Triple:
    h, s_v, v = _rgb_to_hsv(r, g, b)
    lightness = v * (1.0 - s_v / 2.0)
    if lightness in (0.0, 1.0):
        return h, 0.0, lightness
    return h, (v - lightness) / min(lightness, 1.0 - lightness), lightness


def _hcl_to_rgb(h: float, c: float, luma: float) -> Triple:
    radius = luma * _SQRT3
    polar = c * _MAX_POLAR_ANGLE
    azimuth = _TAU * h
    axial = radius * math.cos(polar)
    radial = radius * math.sin(polar)
    cos_az, sin_az = math.cos(azimuth), math.sin(azimuth)
    r, g, b = (
        axial * w + radial * (cos_az * u + sin_az * v) for w, u, v in zip(_GRAY_AXIS, _RED_AXIS, _GREEN_BLUE_AXIS)
    )
    return r, g, b


def _rgb_to_hcl(r: float, g: float, b: float) -> Triple:
    rgb = (r, g, b)
    radius = math.sqrt(_dot(rgb, rgb))
    if radius == 0.0:
        return 0.0, 0.0, 0.0
    cos_polar = min(max(_dot(rgb, _GRAY_AXIS) / radius, -1.0), 1.0)
    polar = math.acos(cos_polar)
    azimuth = math.atan2(_dot(rgb, _GREEN_BLUE_AXIS), _dot(rgb, _RED_AXIS)) % _TAU
    return azimuth / _TAU, polar / _MAX_POLAR_ANGLE, radius / _SQRT3


def _yuv_to_rgb(y: float, u: float, v: float) -> Triple:
    r = y + v * 2.0 * (1.0 - _KR)
    b = y + u * 2.0 * (1.0 - _KB)
    g = (y - _KR * r - _KB * b) / _KG
    return r, g, b


def _rgb_to_yuv(r: float, g: float, b: float) -> Triple:
    y = _KR * r + _KG * g + _KB * b
    return y, 0.5 * (b - y) / (1.0 - _KB), 0.5 * (r - y) / (1.0 - _KR)


def _invert(x: float, y: float, z: float) -> Triple:
    return 1.0 - x, 1.0 - y, 1.0 - z


_TO_RGB: dict[ColorModel, Callable[[float, float, float], Triple]] = {
    ColorModel.RGB: lambda r, g, b: (r, g, b),
    ColorModel.CMY: _invert,
    ColorModel.CUBIC_HSV: _hsv_to_rgb,
    ColorModel.CUBIC_HSL: _hsl_to_rgb,
    ColorModel.SPHERICAL_HCL: _hcl_to_rgb,
    ColorModel.YUV: _yuv_to_rgb,
}

_FROM_RGB: dict[ColorModel, Callable[[float, float, float], Triple]] = {
    ColorModel.RGB: lambda r, g, b: (r, g, b),
    ColorModel.CMY: _invert,
    ColorModel.CUBIC_HSV: _rgb_to_hsv,
    ColorModel.CUBIC_HSL: _rgb_to_hsl,
    ColorModel.SPHERICAL_HCL: _rgb_to_hcl,
    ColorModel.YUV: _rgb_to_yuv,
}


# --- space <-> XYZ ---
def _cylindrical_to_xyz(a: float, b: float, c: float) -> Triple:
    angle = _TAU * a
    return b * math.cos(angle), c, b * math.sin(angle)


def _xyz_to_cylindrical(x: float, y: float, z: float) -> Triple:
    return (math.atan2(z, x) % _TAU) / _TAU, math.hypot(x, z), y


def _symmetric_to_xyz(a: float, b: float, c: float) -> Triple:
    angle = _TAU * a
    radius = b * (1.0 - abs(2.0 * c - 1.0))
    return radius * math.cos(angle), 2.0 * c - 1.0, radius * math.sin(angle)


def _xyz_to_symmetric(x: float, y: float, z: float) -> Triple:
    fold = 1.0 - abs(y)
    radius = math.hypot(x, z)
    b = radius / fold if fold > 0.0 else 0.0
    return (math.atan2(z, x) % _TAU) / _TAU, b, (y + 1.0) / 2.0


_TO_XYZ: dict[ColorSpace, Callable[[float, float, float], Triple]] = {
    ColorSpace.XYZ: lambda x, y, z: (x, y, z),
    ColorSpace.CYLINDRICAL: _cylindrical_to_xyz,
    ColorSpace.SYMMETRIC: _symmetric_to_xyz,
}

_FROM_XYZ: dict[ColorSpace, Callable[[float, float, float], Triple]] = {
    ColorSpace.XYZ: lambda x, y, z: (x, y, z),
    ColorSpace.CYLINDRICAL: _xyz_to_cylindrical,
    ColorSpace.SYMMETRIC: _xyz_to_symmetric,
}


def from_space_to_space(values: Sequence[float], source: ColorSpace, target: ColorSpace) -> Triple:
    """Re-express a point given in ``source`` space in ``target`` space (through XYZ)."""
    if source is target:
        x, y, z = (float(v) for v in values)
        return x, y, z
    xyz = _TO_XYZ[source](*values)
    return _FROM_XYZ[target](*xyz)


@dataclass(frozen=True)
class SpaceCoordinate:
    """A point in one of the color spaces, carrying the alpha of the color it came from."""

    space: ColorSpace
    values: Triple
    alpha: float = 1.0

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (*self.values, self.alpha)

    def convert_space(self, target: ColorSpace) -> "SpaceCoordinate":
        return SpaceCoordinate(target, from_space_to_space(self.values, self.space, target), self.alpha)

    def to_xyz(self) -> "SpaceCoordinate":
        return self.convert_space(ColorSpace.XYZ)

    def to_color(self, model: ColorModel) -> "Color":
        """Read the coordinate back as the channels of ``model``."""
        return Color(model, self.values, self.alpha)

    def mirror_colorspace(self) -> "SpaceCoordinate":
        """Reflect across the plane x = z, which contains the gray diagonal. Returns XYZ."""
        x, y, z = self.to_xyz().values
        return SpaceCoordinate(ColorSpace.XYZ, (z, y, x), self.alpha)

    def rotate_colorspace_clockwise(self) -> "SpaceCoordinate":
        """Rotate a third of a turn about the gray diagonal. Returns XYZ."""
        x, y, z = self.to_xyz().values
        return SpaceCoordinate(ColorSpace.XYZ, (z, x, y), self.alpha)

    def rotate_colorspace_counterclockwise(self) -> "SpaceCoordinate":
        x, y, z = self.to_xyz().values
        return SpaceCoordinate(ColorSpace.XYZ, (y, z, x), self.alpha)

    def rotate_colorspace(self, direction: RotationDirection) -> "SpaceCoordinate":
        if direction is RotationDirection.CLOCKWISE:
            return self.rotate_colorspace_clockwise()
        if direction is RotationDirection.COUNTERCLOCKWISE:
            return self.rotate_colorspace_counterclockwise()
        return self


@dataclass(frozen=True)
class Color:
    """A color as three channels of ``model`` plus alpha."""

    model: ColorModel
    components: Triple
    alpha: float = 1.0

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (*self.components, self.alpha)

    def to_rgb(self) -> "Color":
        if self.model is ColorModel.RGB:
            return self
        r, g, b = _TO_RGB[self.model](*self.components)
        return Color(ColorModel.RGB, (float(r), float(g), float(b)), self.alpha)

    def convert(self, target: ColorModel) -> "Color":
        if target is self.model:
            return self
        a, b, c = _FROM_RGB[target](*self.to_rgb().components)
        return Color(target, (float(a), float(b), float(c)), self.alpha)

    def to_space(self, space: ColorSpace) -> SpaceCoordinate:
        """Read the channels as coordinates of ``space``."""
        return SpaceCoordinate(space, self.components, self.alpha)

    def remap_rgb_components(self, chroma: float, limit_r: float, limit_g: float, limit_b: float) -> "Color":
        """Pull each RGB channel towards ``channel * limit`` in proportion to ``chroma``.

        With every limit at 1 this is the identity. Returns an RGB color.
        """
        rgb = self.to_rgb()
        r, g, b = (
            channel * (1.0 - chroma * (1.0 - limit))
            for channel, limit in zip(rgb.components, (limit_r, limit_g, limit_b))
        )
        return Color(ColorModel.RGB, (r, g, b), rgb.alpha)

    def component_gamma_transform(self, gamma_r: float, gamma_g: float, gamma_b: float) -> "Color":
        """Raise each RGB channel to its exponent. Returns an RGB color.

        The sign is kept so out-of-gamut channels stay real, and an exponent of
        exactly 1 leaves the channel untouched.
        """
        rgb = self.to_rgb()
        r, g, b = (
            channel if exponent == 1.0 else math.copysign(abs(channel) ** exponent, channel)
            for channel, exponent in zip(rgb.components, (gamma_r, gamma_g, gamma_b))
        )
        return Color(ColorModel.RGB, (r, g, b), rgb.alpha)


def to_color(coordinate: Sequence[float], model: ColorModel) -> Color:
    """Build a color from ``(a, b, c)`` or ``(a, b, c, alpha)`` in ``model``."""
    if len(coordinate) not in (3, 4):
        raise ValueError(f"Expected 3 or 4 color channels, got {len(coordinate)}")
    a, b, c = (float(v) for v in coordinate[:3])
    alpha = float(coordinate[3]) if len(coordinate) == 4 else 1.0
    return Color(model, (a, b, c), alpha)
