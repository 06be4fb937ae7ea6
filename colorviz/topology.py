"""De-duplicated vertices and the edge/face index lists built on top of them."""

import struct
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

import numpy as np

from colorviz.color import Color

_KEY_FORMAT = "<7d"


@dataclass(frozen=True, eq=False)
class VertexObject:
    """A position and an RGBA color. Two vertices are equal only if all 7 floats are bit-for-bit equal."""

    position: tuple[float, float, float]
    color: tuple[float, float, float, float]

    @classmethod
    def from_derived(cls, position: Sequence[float], color: Color) -> "VertexObject":
        x, y, z = (float(v) for v in position)
        return cls((x, y, z), color.to_rgb().to_tuple())

    @property
    def key(self) -> bytes:
        return struct.pack(_KEY_FORMAT, *self.position, *self.color)

    def __eq__(self, other):
        if not isinstance(other, VertexObject):
            return NotImplemented
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)


class VertexRegistry:
    """Insertion-ordered map from vertex to a dense index. Entries are never removed."""

    def __init__(self):
        self._indices: dict[VertexObject, int] = {}

    def get_or_insert(self, vertex: VertexObject) -> int:
        index = self._indices.get(vertex)
        if index is None:
            index = len(self._indices)
            self._indices[vertex] = index
        return index

    def index_of(self, vertex: VertexObject) -> int:
        return self._indices[vertex]

    def vertices(self) -> list[VertexObject]:
        return list(self._indices)

    def __contains__(self, vertex) -> bool:
        return vertex in self._indices

    def __iter__(self) -> Iterator[tuple[VertexObject, int]]:
        return iter(self._indices.items())

    def __len__(self) -> int:
        return len(self._indices)


class VertexList:
    """Isolated vertices."""

    def __init__(self, registry: VertexRegistry | None = None):
        self.registry = registry if registry is not None else VertexRegistry()

    def add_vertex(self, vertex: VertexObject) -> int:
        return self.registry.get_or_insert(vertex)

    def vertices(self) -> Iterator[tuple[VertexObject, int]]:
        return iter(self.registry)

    def positions(self) -> np.ndarray:
        """(N, 3) positions in index order."""
        return np.array([v.position for v in self.registry.vertices()], dtype=np.float64).reshape(-1, 3)

    def colors(self) -> np.ndarray:
        """(N, 4) RGBA colors in index order."""
        return np.array([v.color for v in self.registry.vertices()], dtype=np.float64).reshape(-1, 4)

    def _check_indices(self, indices: Sequence[int]):
        n = len(self.registry)
        for index in indices:
            if not 0 <= index < n:
                raise IndexError(f"Vertex index {index} out of range for registry of {n} vertices")


class EdgeList(VertexList):
    """Vertices plus line segments between pairs of them."""

    def __init__(self, registry: VertexRegistry | None = None):
        super().__init__(registry)
        self.edges: list[tuple[int, int]] = []

    def add_edge(self, index_a: int, index_b: int):
        self._check_indices((index_a, index_b))
        self.edges.append((index_a, index_b))

    def edge_array(self) -> np.ndarray:
        return np.array(self.edges, dtype=np.int64).reshape(-1, 2)


class FaceList(VertexList):
    """Vertices plus quads of exactly 4 of them."""

    def __init__(self, registry: VertexRegistry | None = None):
        super().__init__(registry)
        self.faces: list[tuple[int, int, int, int]] = []

    def add_face(self, i1: int, i2: int, i3: int, i4: int):
        self._check_indices((i1, i2, i3, i4))
        self.faces.append((i1, i2, i3, i4))

    def face_array(self) -> np.ndarray:
        return np.array(self.faces, dtype=np.int64).reshape(-1, 4)
