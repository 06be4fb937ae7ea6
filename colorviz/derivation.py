from colorviz.color import Color, ColorSpace, to_color
from colorviz.config import VisualizationSettings

Position = tuple[float, float, float]


def derive(coord: tuple[float, float, float], settings: VisualizationSettings) -> tuple[Position, Color]:
    """
    Map one grid coordinate to a position and a display color.

    The display color is the raw color with the perceptual component limits and
    the gamma applied. The position follows the raw color, or the display color
    when gamma deform is on, read through ``space_model`` and ``space`` and then
    rotated and mirrored as configured.

    Args:
        coord: ``(a, b, c)`` in the channels of the configured color model.
        settings: Visualization settings.

    Returns:
        tuple[Position, Color]: XYZ position (unscaled) and the display color in RGB.
    """
    gamma = settings.gamma.exponents()
    color_config = settings.color

    raw_color = to_color((*coord, settings.visualization_alpha), color_config.model)
    chroma = raw_color.components[1]

    limit_r, limit_g, limit_b = settings.component_limit
    display_color = raw_color.remap_rgb_components(chroma, limit_r, limit_g, limit_b).component_gamma_transform(
        *gamma
    )

    source = display_color if settings.gamma.deform else raw_color
    point = source.convert(color_config.position_model).to_space(color_config.space).convert_space(ColorSpace.XYZ)
    point = point.rotate_colorspace(color_config.rotation)
    if color_config.mirrored:
        point = point.mirror_colorspace()

    return point.values, display_color
