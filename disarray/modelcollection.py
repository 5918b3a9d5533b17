"""Animated multi-subset models loaded from the binary model format."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, Sequence

from .matrix import Matrix, Vector3D, multiply, rotation_axis, scaling, translation
from .ratmodel import RatModel


class ModelFormatError(ValueError):
    """The model file is truncated or malformed."""


@dataclass
class AnimationSet:
    """The frames of one subset."""

    frames: list[RatModel] = field(default_factory=list)


def _read(stream: BinaryIO, code: str, count: int) -> tuple:
    layout = struct.Struct(f"<{count}{code}")
    data = stream.read(layout.size)
    if len(data) < layout.size:
        raise EOFError(f"expected {layout.size} bytes, got {len(data)}")
    return layout.unpack(data)


def _subset_matrix(stuff: Sequence[float]) -> Matrix:
    """Rotate about X, Y, Z, translate, then scale, with the file's axis swaps."""
    steps = (
        rotation_axis(-stuff[0], Vector3D(1, 0, 0)),
        rotation_axis(stuff[2], Vector3D(0, 1, 0)),
        rotation_axis(stuff[1], Vector3D(0, 0, 1)),
        translation(stuff[3], stuff[5], -stuff[4]),
        scaling(-stuff[6], stuff[8], -stuff[7]),
    )
    result = steps[0]
    for step in steps[1:]:
        result = multiply(result, step)
    return result


@dataclass
class ModelCollection:
    """Subsets, each with its own transform and animation frames."""

    frame_count: int = 0
    subsets: list[AnimationSet] = field(default_factory=list)
    matrices: list[Matrix] = field(default_factory=list)

    def load(self, path: str | os.PathLike) -> None:
        """Read a model file and append its subsets."""
        with open(path, "rb") as stream:
            try:
                self._read_stream(stream)
            except (EOFError, struct.error) as exc:
                raise ModelFormatError(f"{os.fspath(path)}: {exc}") from exc

    def _read_stream(self, stream: BinaryIO) -> None:
        (frame_count,) = _read(stream, "I", 1)
        (subset_count,) = _read(stream, "i", 1)
        subsets = []
        matrices = []
        for _ in range(subset_count):
            _read(stream, "f", 16)
            matrices.append(_subset_matrix(_read(stream, "f", 9)))
            subsets.append(self._read_frames(stream, frame_count))
        self.frame_count = frame_count
        self.subsets.extend(subsets)
        self.matrices.extend(matrices)

    @staticmethod
    def _read_frames(stream: BinaryIO, frame_count: int) -> AnimationSet:
        animation = AnimationSet()
        for number in range(frame_count):
            model = RatModel()
            model.load_vertices_and_normals(stream)
            if number == 0:
                model.load_indices_and_uvs(stream)
            else:
                first = animation.frames[0]
                model.copy_indices(first.indices)
                if first.has_uvs:
                    model.copy_uvs(first.uvs)
            model.unindexed_mesh()
            animation.frames.append(model)
        return animation

    def subset(self, index: int, frame: int) -> RatModel | None:
        """The given frame of a subset, or None when the subset does not exist."""
        if 0 <= index < len(self.subsets):
            return self.subsets[index].frames[frame]
        return None

    def matrix(self, index: int) -> Matrix | None:
        """The transform of a subset, or None when the subset does not exist."""
        if 0 <= index < len(self.subsets):
            return self.matrices[index]
        return None

    def destroy(self) -> None:
        for animation in self.subsets:
            for frame in animation.frames:
                frame.destroy()
            animation.frames.clear()
        self.subsets.clear()
        self.matrices.clear()
        self.frame_count = 0