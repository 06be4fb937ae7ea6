import logging
from collections.abc import Callable, Iterator, Sequence

from tqdm import tqdm

from colorviz.config import Dimensionality, FaceSlicing, VisualizationSettings
from colorviz.constants import LUMA_CHROMA_OFFSET
from colorviz.derivation import derive
from colorviz.sampling import generate, wrap_index
from colorviz.topology import EdgeList, FaceList, VertexList, VertexObject

logger = logging.getLogger(__name__)

Channels = tuple[Sequence[float], Sequence[float], Sequence[float]]
GridIndex = tuple[int, int, int]
DeriveVertex = Callable[[tuple[float, float, float]], VertexObject]

# Neighbor offsets (a, b, c) per slicing direction
EDGE_OFFSETS: dict[FaceSlicing, GridIndex] = {
    FaceSlicing.X: (1, 0, 0),
    FaceSlicing.Y: (0, 1, 0),
    FaceSlicing.Z: (0, 0, 1),
}

FACE_OFFSETS: dict[FaceSlicing, tuple[GridIndex, GridIndex, GridIndex, GridIndex]] = {
    FaceSlicing.X: (
        (0, 0, 0),  # base point
        (0, 1, 0),  # vary b
        (0, 1, 1),  # vary b and c
        (0, 0, 1),  # vary c
    ),
    FaceSlicing.Y: (
        (0, 0, 0),  # base point
        (1, 0, 0),  # vary a
        (1, 0, 1),  # vary a and c
        (0, 0, 1),  # vary c
    ),
    FaceSlicing.Z: (
        (0, 0, 0),  # base point
        (1, 0, 0),  # vary a
        (1, 1, 0),  # vary a and b
        (0, 1, 0),  # vary b
    ),
}

# a grid point on the boundary of an axis emits the face that holds that axis
VOLUME_BOUNDARY_SLICING = (FaceSlicing.X, FaceSlicing.Y, FaceSlicing.Z)


def sample_channels(settings: VisualizationSettings) -> Channels:
    """Sample channels A, B and C, shifting B and C onto a centered plane for luma-chroma models."""
    inclusive_of_bound = settings.topology.dimensionality is not Dimensionality.VERTEX
    a, b, c = (generate(spec, inclusive_of_bound=inclusive_of_bound) for spec in settings.channels.specs())
    if settings.color.model.is_luma_chroma:
        b = tuple(v + LUMA_CHROMA_OFFSET for v in b)
        c = tuple(v + LUMA_CHROMA_OFFSET for v in c)
    return a, b, c


def vertex_deriver(settings: VisualizationSettings) -> DeriveVertex:
    def derive_vertex(coord: tuple[float, float, float]) -> VertexObject:
        position, color = derive(coord, settings)
        return VertexObject.from_derived(position, color)

    return derive_vertex


def _lengths(channels: Channels) -> GridIndex:
    la, lb, lc = (len(channel) for channel in channels)
    return la, lb, lc


def _is_degenerate(channels: Channels) -> bool:
    return any(n == 0 for n in _lengths(channels))


def _grid(channels: Channels, desc: str, progress: bool) -> Iterator[GridIndex]:
    """Grid indices in A, then B, then C order."""
    la, lb, lc = _lengths(channels)
    for ia in tqdm(range(la), desc=desc, disable=not progress):
        for ib in range(lb):
            for ic in range(lc):
                yield ia, ib, ic


def _coord(channels: Channels, index: GridIndex) -> tuple[float, float, float]:
    a, b, c = (channel[i] for channel, i in zip(channels, index))
    return a, b, c


def _neighbor(index: GridIndex, offset: GridIndex, lengths: GridIndex) -> GridIndex:
    ia, ib, ic = (wrap_index(i, o, n) for i, o, n in zip(index, offset, lengths))
    return ia, ib, ic


def _add_quad(
    face_list: FaceList,
    channels: Channels,
    derive_vertex: DeriveVertex,
    index: GridIndex,
    offsets: Sequence[GridIndex],
    lengths: GridIndex,
):
    i1, i2, i3, i4 = (
        face_list.add_vertex(derive_vertex(_coord(channels, _neighbor(index, offset, lengths)))) for offset in offsets
    )
    face_list.add_face(i1, i2, i3, i4)


def build_vertices(channels: Channels, derive_vertex: DeriveVertex, progress: bool = False) -> VertexList:
    vertex_list = VertexList()
    for index in _grid(channels, "Building vertices", progress):
        vertex_list.add_vertex(derive_vertex(_coord(channels, index)))
    return vertex_list


def build_edges(
    channels: Channels, derive_vertex: DeriveVertex, slicing: FaceSlicing, progress: bool = False
) -> EdgeList:
    """Connect every grid point to its wrapped neighbor along the slicing axis."""
    edge_list = EdgeList()
    if _is_degenerate(channels):
        logger.warning(f"Skipping edge build, channel lengths {_lengths(channels)} contain an empty channel")
        return edge_list

    lengths = _lengths(channels)
    offset = EDGE_OFFSETS[slicing]
    for index in _grid(channels, "Building edges", progress):
        start = edge_list.add_vertex(derive_vertex(_coord(channels, index)))
        end = edge_list.add_vertex(derive_vertex(_coord(channels, _neighbor(index, offset, lengths))))
        edge_list.add_edge(start, end)
    return edge_list


def build_faces(
    channels: Channels, derive_vertex: DeriveVertex, slicing: FaceSlicing, progress: bool = False
) -> FaceList:
    """One quad per grid point, spanning the two channels the slicing direction varies."""
    face_list = FaceList()
    if _is_degenerate(channels):
        logger.warning(f"Skipping face build, channel lengths {_lengths(channels)} contain an empty channel")
        return face_list

    lengths = _lengths(channels)
    offsets = FACE_OFFSETS[slicing]
    for index in _grid(channels, "Building faces", progress):
        _add_quad(face_list, channels, derive_vertex, index, offsets, lengths)
    return face_list


def build_volume(channels: Channels, derive_vertex: DeriveVertex, progress: bool = False) -> FaceList:
    """
    Boundary faces of the sampled volume.

    A grid point at index 0 or at the last index of an axis emits the face that
    holds that axis constant, so corners emit three faces, points on the edges of
    the grid two, and points inside a boundary face one.
    """
    face_list = FaceList()
    if _is_degenerate(channels):
        logger.warning(f"Skipping volume build, channel lengths {_lengths(channels)} contain an empty channel")
        return face_list

    lengths = _lengths(channels)
    for index in _grid(channels, "Building volume", progress):
        for axis, slicing in enumerate(VOLUME_BOUNDARY_SLICING):
            if index[axis] in (0, lengths[axis] - 1):
                _add_quad(face_list, channels, derive_vertex, index, FACE_OFFSETS[slicing], lengths)
    return face_list


def build_topology(settings: VisualizationSettings, progress: bool = False) -> VertexList | EdgeList | FaceList:
    """Sample the channels and build the topology the settings ask for."""
    dimensionality = settings.topology.dimensionality
    slicing = settings.topology.face_slicing
    channels = sample_channels(settings)
    derive_vertex = vertex_deriver(settings)

    logger.debug(f"Sampled channels of lengths {_lengths(channels)} for {dimensionality.value} build")

    builders = {
        Dimensionality.VERTEX: lambda: build_vertices(channels, derive_vertex, progress),
        Dimensionality.EDGE: lambda: build_edges(channels, derive_vertex, slicing, progress),
        Dimensionality.FACE: lambda: build_faces(channels, derive_vertex, slicing, progress),
        Dimensionality.VOLUME: lambda: build_volume(channels, derive_vertex, progress),
    }
    result = builders[dimensionality]()

    if isinstance(result, EdgeList):
        logger.info(f"Built {len(result.registry):,} vertices and {len(result.edges):,} edges")
    elif isinstance(result, FaceList):
        logger.info(f"Built {len(result.registry):,} vertices and {len(result.faces):,} faces")
    else:
        logger.info(f"Built {len(result.registry):,} vertices")
    return result
