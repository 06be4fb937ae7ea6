import numpy as np

from colorviz.constants import SCALE
from colorviz.topology import EdgeList, FaceList, VertexList


def scale_positions(positions: np.ndarray, viz_scale: float) -> np.ndarray:
    """Color coordinates to world units."""
    return np.asarray(positions, dtype=np.float64) * (SCALE * viz_scale)


def quads_to_triangles(faces: np.ndarray) -> np.ndarray:
    """
    Split quads into triangles with the winding of the quad kept.

    Args:
        faces (np.ndarray): (M, 4) quad vertex indices (i1, i2, i3, i4).

    Returns:
        np.ndarray: (2M, 3). Quad m becomes rows 2m = (i1, i2, i3) and 2m + 1 = (i3, i4, i1).
    """
    faces = np.asarray(faces, dtype=np.int64).reshape(-1, 4)
    first = faces[:, [0, 1, 2]]
    second = faces[:, [2, 3, 0]]
    return np.stack([first, second], axis=1).reshape(-1, 3)


def face_colors(face_list: FaceList) -> np.ndarray:
    """(M, 4) flat color per quad, taken from its first corner."""
    return face_list.colors()[face_list.face_array()[:, 0]]


def edge_colors(edge_list: EdgeList) -> np.ndarray:
    """(M, 4) solid color per edge, taken from its first endpoint."""
    return edge_list.colors()[edge_list.edge_array()[:, 0]]


def point_arrays(vertex_list: VertexList, viz_scale: float) -> tuple[np.ndarray, np.ndarray]:
    """
    Point cloud draw data.

    Returns:
        positions (np.ndarray): (N, 3) in world units.
        colors (np.ndarray): (N, 4) RGBA.
    """
    return scale_positions(vertex_list.positions(), viz_scale), vertex_list.colors()


def curve_arrays(
    edge_list: EdgeList, viz_scale: float, discrete_color: bool
) -> tuple[np.ndarray, np.ndarray, np.ndarray, str]:
    """
    Line segment draw data.

    Returns:
        nodes (np.ndarray): (N, 3) in world units.
        edges (np.ndarray): (M, 2) node indices.
        colors (np.ndarray): (M, 4) per edge when ``discrete_color``, else (N, 4) per node (gradient).
        defined_on (str): "edges" or "nodes".
    """
    nodes = scale_positions(edge_list.positions(), viz_scale)
    if discrete_color:
        return nodes, edge_list.edge_array(), edge_colors(edge_list), "edges"
    return nodes, edge_list.edge_array(), edge_list.colors(), "nodes"


def mesh_arrays(
    face_list: FaceList, viz_scale: float, discrete_color: bool
) -> tuple[np.ndarray, np.ndarray, np.ndarray, str]:
    """
    Indexed triangle mesh draw data.

    Returns:
        vertices (np.ndarray): (N, 3) in world units.
        triangles (np.ndarray): (2M, 3) from ``quads_to_triangles``.
        colors (np.ndarray): (2M, 4) with both triangles of a quad sharing the quad's flat color
            when ``discrete_color``, else (N, 4) per vertex.
        defined_on (str): "faces" or "vertices".
    """
    vertices = scale_positions(face_list.positions(), viz_scale)
    triangles = quads_to_triangles(face_list.face_array())
    if discrete_color:
        return vertices, triangles, np.repeat(face_colors(face_list), 2, axis=0), "faces"
    return vertices, triangles, face_list.colors(), "vertices"
