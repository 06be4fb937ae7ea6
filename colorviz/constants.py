# Constants
SCALE = 5.0  # world units per unit of color coordinate, before viz_scale
REFERENCE_GAMMA = 2.2
LUMA_CHROMA_OFFSET = -0.5  # centers the chroma plane of luma-chroma models

POINT_RENDER_MODES = ("sphere", "quad")

# - structures
NAME_POINTS = "color_points"
NAME_EDGES = "color_edges"
NAME_FACES = "color_faces"

# - quantities
NAME_COLOR_QUANT = "color"
