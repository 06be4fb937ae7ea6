import itertools

import numpy as np
import pytest

from colorviz.builders import (
    EDGE_OFFSETS,
    FACE_OFFSETS,
    build_edges,
    build_faces,
    build_topology,
    build_vertices,
    build_volume,
    sample_channels,
    vertex_deriver,
)
from colorviz.color import ColorModel, ColorModelCategory
from colorviz.config import ChannelConfig, ColorModelConfig, Dimensionality, FaceSlicing, VisualizationSettings
from colorviz.sampling import ChannelSpec
from colorviz.topology import EdgeList, FaceList, VertexList


def positions_of(topology, indices):
    positions = topology.positions()
    return [tuple(positions[i]) for i in indices]


def test_sample_lengths_follow_dimensionality(rgb_settings):
    assert [len(c) for c in sample_channels(rgb_settings((3, 4, 5)))] == [3, 4, 5]
    edge_settings = rgb_settings((3, 4, 5), Dimensionality.EDGE)
    assert [len(c) for c in sample_channels(edge_settings)] == [4, 5, 6]


def test_luma_chroma_channels_are_centered():
    settings = VisualizationSettings(
        channels=ChannelConfig(a=ChannelSpec(steps=2), b=ChannelSpec(steps=2), c=ChannelSpec(steps=2)),
        color=ColorModelConfig(category=ColorModelCategory.LUMA_CHROMA, model=ColorModel.YUV),
    )
    a, b, c = sample_channels(settings)
    assert a == pytest.approx([0.0, 0.5])
    assert b == pytest.approx([-0.5, 0.0])
    assert c == pytest.approx([-0.5, 0.0])


def test_vertex_grid_without_collisions(rgb_settings):
    vertices = build_topology(rgb_settings((4, 4, 4)))
    assert type(vertices) is VertexList
    assert len(vertices.registry) == 64


def test_vertex_grid_merges_collisions():
    settings = VisualizationSettings(
        channels=ChannelConfig(a=ChannelSpec(steps=4), b=ChannelSpec(steps=4), c=ChannelSpec(steps=4)),
    )
    # spherical HCL: zero luma is a single black point and zero chroma ignores hue
    vertices = build_topology(settings)
    assert len(vertices.registry) == 1 + 3 * (1 + 3 * 4)


def test_vertex_order_is_a_then_b_then_c(rgb_settings):
    vertices = build_topology(rgb_settings((2, 2, 2)))
    expected = list(itertools.product([0.0, 0.5], repeat=3))
    assert [tuple(p) for p in vertices.positions()] == expected


@pytest.mark.parametrize("slicing", list(FaceSlicing))
def test_edges_wrap_around(rgb_settings, slicing):
    edges = build_topology(rgb_settings((2, 2, 2), Dimensionality.EDGE, face_slicing=slicing))
    assert isinstance(edges, EdgeList)
    assert len(edges.registry) == 27
    assert len(edges.edges) == 27

    axis = EDGE_OFFSETS[slicing].index(1)
    segments = {tuple(positions_of(edges, edge)) for edge in edges.edges}
    last = [0.0, 0.0, 0.0]
    last[axis] = 1.0
    # the last sample closes back onto the first
    assert (tuple(last), (0.0, 0.0, 0.0)) in segments
    for start, end in segments:
        assert [s == e for s, e in zip(start, end)].count(False) == 1


@pytest.mark.parametrize("slicing", list(FaceSlicing))
def test_faces_are_valid_quads(rgb_settings, slicing):
    faces = build_topology(rgb_settings((2, 3, 2), Dimensionality.FACE, face_slicing=slicing))
    assert isinstance(faces, FaceList)
    assert len(faces.faces) == 3 * 4 * 3
    n = len(faces.registry)
    for quad in faces.faces:
        assert len(quad) == 4
        assert all(0 <= i < n for i in quad)
        assert len(set(quad)) == 4


def test_face_offset_tables():
    assert FACE_OFFSETS[FaceSlicing.X] == ((0, 0, 0), (0, 1, 0), (0, 1, 1), (0, 0, 1))
    assert FACE_OFFSETS[FaceSlicing.Y] == ((0, 0, 0), (1, 0, 0), (1, 0, 1), (0, 0, 1))
    assert FACE_OFFSETS[FaceSlicing.Z] == ((0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0))


def test_first_quad_corners(rgb_settings):
    faces = build_topology(rgb_settings((2, 2, 2), Dimensionality.FACE, face_slicing=FaceSlicing.Z))
    assert positions_of(faces, faces.faces[0]) == [
        (0.0, 0.0, 0.0),
        (0.5, 0.0, 0.0),
        (0.5, 0.5, 0.0),
        (0.0, 0.5, 0.0),
    ]


def test_faces_share_corners(rgb_settings):
    faces = build_topology(rgb_settings((2, 2, 2), Dimensionality.FACE))
    # every grid point is reused by the quads around it
    assert len(faces.registry) == 27
    assert len(faces.faces) * 4 > len(faces.registry)


def boundary_face_count(lengths):
    total = 0
    for axis, n in enumerate(lengths):
        others = np.prod([m for k, m in enumerate(lengths) if k != axis])
        total += (1 if n == 1 else 2) * others
    return total


@pytest.mark.parametrize("steps", [(2, 2, 2), (1, 2, 3), (4, 1, 1)])
def test_volume_face_count(rgb_settings, steps):
    volume = build_topology(rgb_settings(steps, Dimensionality.VOLUME))
    assert isinstance(volume, FaceList)
    lengths = [n + 1 for n in steps]
    assert len(volume.faces) == boundary_face_count(lengths)


def test_volume_three_by_three(rgb_settings):
    volume = build_topology(rgb_settings((2, 2, 2), Dimensionality.VOLUME))
    # 3 axes, 2 sides each, 3 x 3 faces per side
    assert len(volume.faces) == 54


def test_volume_single_sample_axis_counts_once(rgb_settings):
    channels = ((0.0,), (0.0, 0.5, 1.0), (0.0, 0.5, 1.0))
    volume = build_volume(channels, vertex_deriver(rgb_settings()))
    assert len(volume.faces) == 9 + 6 + 6


def test_empty_channel_builds_nothing(rgb_settings):
    derive_vertex = vertex_deriver(rgb_settings())
    channels = ((0.0, 0.5), (), (0.0, 0.5))
    assert len(build_vertices(channels, derive_vertex).registry) == 0
    assert build_edges(channels, derive_vertex, FaceSlicing.X).edges == []
    assert build_faces(channels, derive_vertex, FaceSlicing.Z).faces == []
    assert build_volume(channels, derive_vertex).faces == []


@pytest.mark.parametrize("dimensionality", list(Dimensionality))
def test_build_is_deterministic(dimensionality):
    settings = VisualizationSettings()
    settings.topology.dimensionality = dimensionality
    first, second = build_topology(settings), build_topology(settings)
    np.testing.assert_array_equal(first.positions(), second.positions())
    np.testing.assert_array_equal(first.colors(), second.colors())
    assert getattr(first, "faces", None) == getattr(second, "faces", None)
    assert getattr(first, "edges", None) == getattr(second, "edges", None)


@pytest.mark.parametrize("slicing, axis", [(FaceSlicing.X, 0), (FaceSlicing.Y, 1), (FaceSlicing.Z, 2)])
def test_slicing_axis_edges_step_faces_hold(slicing, axis):
    assert EDGE_OFFSETS[slicing][axis] == 1
    assert all(offset[axis] == 0 for offset in FACE_OFFSETS[slicing])
