import io
import math
import struct

import pytest

from disarray.ratmodel import RatModel

TRIANGLE = [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0]


def _vertex_block(vertices, normals):
    count = len(vertices) // 3
    return (struct.pack("<i", count)
            + struct.pack(f"<{len(vertices)}f", *vertices)
            + struct.pack(f"<{len(normals)}f", *normals))


def _index_block(indices, uvs=None):
    data = struct.pack("<I", len(indices) // 3) + struct.pack(f"<{len(indices)}I", *indices)
    if uvs is None:
        return data + struct.pack("<i", 0)
    return data + struct.pack("<i", 1) + struct.pack(f"<{len(uvs)}f", *uvs)


def test_load_vertices_and_normals_round_trip():
    normals = [0.0, 0.0, 1.0] * 3
    model = RatModel()
    model.load_vertices_and_normals(io.BytesIO(_vertex_block(TRIANGLE, normals)))
    assert model.vertices == TRIANGLE
    assert model.normals == normals
    assert model.vertex_count == 3


def test_zero_vertex_count_keeps_existing_data():
    model = RatModel(vertices=[1.0, 2.0, 3.0])
    stream = io.BytesIO(struct.pack("<i", 0) + b"rest")
    model.load_vertices_and_normals(stream)
    assert model.vertices == [1.0, 2.0, 3.0]
    assert stream.read() == b"rest"


def test_truncated_vertices_raise_eof():
    data = _vertex_block(TRIANGLE, [0.0] * 9)[:-4]
    with pytest.raises(EOFError):
        RatModel().load_vertices_and_normals(io.BytesIO(data))


def test_load_indices_with_uvs():
    uvs = [0.0, 0.0, 1.0, 0.0, 0.0, 1.0]
    model = RatModel()
    model.load_indices_and_uvs(io.BytesIO(_index_block([0, 1, 2], uvs)))
    assert model.indices == [0, 1, 2]
    assert model.face_count == 1
    assert model.has_uvs
    assert model.uvs == uvs


def test_load_indices_without_uvs():
    model = RatModel()
    model.load_indices_and_uvs(io.BytesIO(_index_block([2, 1, 0, 0, 1, 2])))
    assert model.face_count == 2
    assert not model.has_uvs
    assert model.uvs == []


def test_copy_methods_store_copies():
    source = [0, 1, 2]
    model = RatModel()
    model.copy_indices(source)
    source.append(3)
    model.copy_uvs([0.5] * 6)
    model.copy_vertices(TRIANGLE)
    model.copy_normals([1.0] * 9)
    assert model.indices == [0, 1, 2]
    assert model.has_uvs
    assert model.vertex_count == 3
    assert model.normals == [1.0] * 9


def test_unindexed_mesh_expands_corners():
    model = RatModel(vertices=TRIANGLE, normals=[0.0, 0.0, 1.0] * 3, indices=[2, 1, 0])
    vertices, normals = model.unindexed_mesh()
    assert vertices == TRIANGLE[6:9] + TRIANGLE[3:6] + TRIANGLE[0:3]
    assert len(normals) == len(vertices)
    assert model.unindexed_vertices == vertices


def test_unindexed_mesh_bad_index():
    model = RatModel(vertices=TRIANGLE, normals=[0.0] * 9, indices=[0, 1, 7])
    with pytest.raises(IndexError):
        model.unindexed_mesh()


def _edges(vertices):
    a, b, c = (vertices[i:i + 3] for i in (0, 3, 6))
    return [[q - p for p, q in zip(a, b)], [q - p for p, q in zip(a, c)]]


@pytest.mark.parametrize("adjacency", [None, [[0], [0], [0]]])
def test_compute_normals_perpendicular_and_unit(adjacency):
    model = RatModel(vertices=list(TRIANGLE), normals=[0.0] * 9, indices=[0, 1, 2])
    if adjacency is not None:
        model.copy_adjacency(adjacency)
    model.compute_normals()
    for vertex in range(3):
        normal = model.normals[vertex * 3:vertex * 3 + 3]
        assert math.isclose(math.sqrt(sum(c * c for c in normal)), 1.0)
        for edge in _edges(model.vertices):
            assert abs(sum(n * e for n, e in zip(normal, edge))) < 1e-9
    assert model.normals[2] == pytest.approx(1.0)


def test_compute_normals_untouched_vertex_keeps_normal():
    vertices = TRIANGLE + [5.0, 5.0, 5.0]
    model = RatModel(vertices=vertices, normals=[0.0] * 9 + [7.0, 7.0, 7.0], indices=[0, 1, 2])
    model.compute_normals()
    assert model.normals[9:12] == [7.0, 7.0, 7.0]


def test_dump_writes_listing(tmp_path):
    model = RatModel(vertices=TRIANGLE, normals=[0.0, 0.0, 1.0] * 3, indices=[0, 1, 2])
    model.copy_adjacency([[0], [0], [0]])
    path = tmp_path / "dump.txt"
    model.dump(path)
    text = path.read_text()
    assert "indices(3):\n0 1 2\n" in text
    assert "1.000 0.000 0.000\n" in text
    assert "vertex 2 neighbours: 0 \n" in text


def test_destroy_clears_everything():
    model = RatModel(vertices=TRIANGLE, normals=[0.0] * 9, indices=[0, 1, 2])
    model.copy_uvs([0.0] * 6)
    model.destroy()
    assert model.vertex_count == 0
    assert model.face_count == 0
    assert not model.has_uvs
    assert model.adjacency is None