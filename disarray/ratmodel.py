"""Indexed triangle meshes with per-vertex normals and optional UVs."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, Sequence

from .matrix import Vector3D


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    data = stream.read(size)
    if len(data) < size:
        raise EOFError(f"expected {size} bytes, got {len(data)}")
    return data


def _read_values(stream: BinaryIO, code: str, count: int) -> list:
    if count <= 0:
        return []
    layout = struct.Struct(f"<{count}{code}")
    return list(layout.unpack(_read_exact(stream, layout.size)))


def _read_one(stream: BinaryIO, code: str) -> int:
    return _read_values(stream, code, 1)[0]


def _triple(values: Sequence[float], index: int) -> tuple[float, float, float]:
    start = index * 3
    return values[start], values[start + 1], values[start + 2]


@dataclass
class RatModel:
    """One mesh frame: flat x, y, z vertex and normal lists plus triangle indices."""

    vertices: list[float] = field(default_factory=list)
    normals: list[float] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    uvs: list[float] = field(default_factory=list)
    has_uvs: bool = False
    adjacency: list[list[int]] | None = None
    unindexed_vertices: list[float] = field(default_factory=list)
    unindexed_normals: list[float] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices) // 3

    @property
    def face_count(self) -> int:
        return len(self.indices) // 3

    def load_vertices_and_normals(self, stream: BinaryIO) -> None:
        """Read a vertex count followed by vertex and normal floats."""
        count = _read_one(stream, "i")
        if count > 0:
            self.vertices = _read_values(stream, "f", count * 3)
            self.normals = _read_values(stream, "f", count * 3)

    def load_indices_and_uvs(self, stream: BinaryIO) -> None:
        """Read a face count, the triangle indices and optional per-corner UVs."""
        faces = _read_one(stream, "I")
        self.indices = _read_values(stream, "I", faces * 3)
        if _read_one(stream, "i"):
            self.has_uvs = True
            self.uvs = _read_values(stream, "f", faces * 3 * 2)

    def copy_vertices(self, vertices: Sequence[float]) -> None:
        self.vertices = list(vertices)

    def copy_indices(self, indices: Sequence[int]) -> None:
        self.indices = list(indices)

    def copy_uvs(self, uvs: Sequence[float]) -> None:
        self.uvs = list(uvs)
        self.has_uvs = True

    def copy_normals(self, normals: Sequence[float]) -> None:
        self.normals = list(normals)

    def copy_adjacency(self, adjacency: Sequence[Sequence[int]]) -> None:
        """Set, per vertex, the indices of the faces that touch it."""
        self.adjacency = [list(faces) for faces in adjacency]

    def unindexed_mesh(self) -> tuple[list[float], list[float]]:
        """Expand the indexed mesh into one vertex and normal per triangle corner."""
        corners = self.indices[:self.face_count * 3]
        self.unindexed_vertices = [c for i in corners for c in _triple(self.vertices, i)]
        self.unindexed_normals = [c for i in corners for c in _triple(self.normals, i)]
        return self.unindexed_vertices, self.unindexed_normals

    def _faces(self) -> list[tuple[int, int, int]]:
        corners = self.indices[:self.face_count * 3]
        return [tuple(corners[i:i + 3]) for i in range(0, len(corners), 3)]  # type: ignore[misc]

    def compute_normals(self) -> None:
        """Smooth normals: each vertex gets the mean of its faces' normals.

        Without adjacency data the faces touching a vertex are found by
        searching the index list.  Vertices touched by no face keep their normal.
        """
        faces = self._faces()
        face_normals = []
        for first, second, third in faces:
            v1 = Vector3D(*_triple(self.vertices, first))
            v2 = Vector3D(*_triple(self.vertices, second))
            v3 = Vector3D(*_triple(self.vertices, third))
            face_normals.append((v3 - v2).cross(v1 - v2).normalize())

        normals = list(self.normals)
        normals.extend([0.0] * (len(self.vertices) - len(normals)))

        for index in range(self.vertex_count):
            if self.adjacency is None:
                touching = [n for face, n in zip(faces, face_normals) if index in face]
            else:
                touching = [face_normals[f] for f in self.adjacency[index]]
            if not touching:
                continue
            total = sum(touching, Vector3D(0.0, 0.0, 0.0))
            n = len(touching)
            mean = Vector3D(total.x / n, total.y / n, total.z / n).normalize()
            normals[index * 3:index * 3 + 3] = [mean.x, mean.y, mean.z]

        self.normals = normals

    def _dump_lines(self) -> list[str]:
        lines = [f"{x:.3f} {y:.3f} {z:.3f}\n"
                 for x, y, z in (_triple(self.vertices, i) for i in range(self.vertex_count))]
        lines.append("\n")
        lines.append(f"indices({self.face_count * 3}):\n")
        lines.extend(f"{a} {b} {c}\n" for a, b, c in self._faces())
        lines.append("\n")
        lines.append(f"normals({len(self.normals)}):\n")
        lines.extend(f"{x:.3f} {y:.3f} {z:.3f}\n"
                     for x, y, z in (_triple(self.normals, i)
                                     for i in range(len(self.normals) // 3)))
        if self.adjacency is not None:
            lines.append("adjacency\n\n")
            for vertex in range(self.vertex_count):
                neighbours = "".join(f"{face} " for face in self.adjacency[vertex])
                lines.append(f"vertex {vertex} neighbours: {neighbours}\n")
            lines.append("\n")
        return lines

    def dump(self, path: str | os.PathLike) -> None:
        """Write a readable listing of vertices, indices, normals and adjacency."""
        with open(path, "w", encoding="ascii") as stream:
            stream.writelines(self._dump_lines())

    def destroy(self) -> None:
        self.vertices = []
        self.normals = []
        self.indices = []
        self.uvs = []
        self.has_uvs = False
        self.adjacency = None
        self.unindexed_vertices = []
        self.unindexed_normals = []