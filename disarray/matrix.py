"""Three-component vectors and 4x4 row-major matrices (row-vector convention)."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

_IDENTITY = (
    1.0, 0.0, 0.0, 0.0,
    0.0, 1.0, 0.0, 0.0,
    0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 1.0,
)


@dataclass(frozen=True)
class Vector3D:
    """A point or direction with a homogeneous ``w`` component."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 1.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3D) -> Vector3D:
        return Vector3D(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3D:
        return Vector3D(-self.x, -self.y, -self.z)

    def __mul__(self, factor: float) -> Vector3D:
        return Vector3D(self.x * factor, self.y * factor, self.z * factor)

    __rmul__ = __mul__

    def length(self) -> float:
        """Euclidean length of the x, y, z part."""
        return math.sqrt(self.dot(self))

    def normalize(self) -> Vector3D:
        """Return a unit-length copy; a zero vector is returned unchanged."""
        size = self.length()
        if size == 0.0:
            return self
        return Vector3D(self.x / size, self.y / size, self.z / size, self.w)

    def dot(self, other: Vector3D) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3D) -> Vector3D:
        return Vector3D(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def transform(self, matrix: Matrix) -> Vector3D:
        """Multiply ``(x, y, z, w)`` as a row vector by ``matrix``."""
        components = (self.x, self.y, self.z, self.w)
        x, y, z, w = (
            sum(c * m for c, m in zip(components, column))
            for column in zip(*matrix.rows())
        )
        return Vector3D(x, y, z, w)


@dataclass(frozen=True)
class Matrix:
    """A 4x4 matrix stored as 16 values in row-major order."""

    values: tuple[float, ...] = _IDENTITY

    def __post_init__(self) -> None:
        values = tuple(float(v) for v in self.values)
        if len(values) != 16:
            raise ValueError(f"a matrix needs 16 values, got {len(values)}")
        object.__setattr__(self, "values", values)

    def row(self, index: int) -> tuple[float, float, float, float]:
        if not 0 <= index < 4:
            raise IndexError(f"row index out of range: {index}")
        start = index * 4
        return self.values[start:start + 4]  # type: ignore[return-value]

    def rows(self) -> tuple[tuple[float, float, float, float], ...]:
        return tuple(self.row(i) for i in range(4))

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, column = key
        return self.row(row)[column]

    def __iter__(self) -> Iterator[float]:
        return iter(self.values)

    def __matmul__(self, other: Matrix) -> Matrix:
        return multiply(self, other)


def identity() -> Matrix:
    return Matrix()


def multiply(left: Matrix, right: Matrix) -> Matrix:
    """Standard matrix product ``left * right``."""
    columns = list(zip(*right.rows()))
    return Matrix(tuple(
        sum(a * b for a, b in zip(row, column))
        for row in left.rows()
        for column in columns
    ))


def translation(x: float, y: float, z: float) -> Matrix:
    return Matrix((
        1.0, 0.0, 0.0, 0.0,
        0.0, 1.0, 0.0, 0.0,
        0.0, 0.0, 1.0, 0.0,
        x, y, z, 1.0,
    ))


def scaling(x: float, y: float, z: float) -> Matrix:
    return Matrix((
        x, 0.0, 0.0, 0.0,
        0.0, y, 0.0, 0.0,
        0.0, 0.0, z, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ))


def translation_scale(position: Vector3D, scale: Vector3D) -> Matrix:
    """Scale along the axes, then translate to ``position``."""
    return Matrix((
        scale.x, 0.0, 0.0, 0.0,
        0.0, scale.y, 0.0, 0.0,
        0.0, 0.0, scale.z, 0.0,
        position.x, position.y, position.z, 1.0,
    ))


def rotation_y(angle: float) -> Matrix:
    a = math.cos(angle)
    b = math.sin(angle)
    return Matrix((
        a, 0.0, -b, 0.0,
        0.0, 1.0, 0.0, 0.0,
        b, 0.0, a, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ))


def rotation_axis(angle: float, axis: Vector3D) -> Matrix:
    """Rotation by ``angle`` radians about ``axis`` (normalised first)."""
    x, y, z = axis.normalize()
    s = math.sin(angle)
    c = math.cos(angle)
    t = 1.0 - c
    return Matrix((
        t * x * x + c, t * x * y - s * z, t * x * z + s * y, 0.0,
        t * x * y + s * z, t * y * y + c, t * y * z - s * x, 0.0,
        t * x * z - s * y, t * y * z + s * x, t * z * z + c, 0.0,
        0.0, 0.0, 0.0, 1.0,
    ))


def look_at(position: Vector3D, target: Vector3D, up: Vector3D) -> Matrix:
    """View matrix for a camera at ``position`` looking at ``target``."""
    direction = (target - position).normalize()
    right = up.cross(direction).normalize()
    new_up = direction.cross(right)
    return Matrix((
        -right.x, new_up.x, -direction.x, 0.0,
        -right.y, new_up.y, -direction.y, 0.0,
        -right.z, new_up.z, -direction.z, 0.0,
        right.dot(position), -new_up.dot(position), direction.dot(position), 1.0,
    ))


def perspective(fov: float, aspect: float, z_near: float, z_far: float) -> Matrix:
    """Perspective projection; ``fov`` is the vertical field of view in degrees."""
    y_scale = 1.0 / math.tan(fov * math.pi / 360.0)
    depth = z_near - z_far
    return Matrix((
        y_scale / aspect, 0.0, 0.0, 0.0,
        0.0, y_scale, 0.0, 0.0,
        0.0, 0.0, (z_far + z_near) / depth, -1.0,
        0.0, 0.0, 2.0 * (z_near * z_far) / depth, 1.0,
    ))


def ortho(left: float, right: float, bottom: float, top: float,
          near: float, far: float) -> Matrix:
    tx = (right + left) / (right - left)
    ty = (top + bottom) / (top - bottom)
    tz = (far + near) / (far - near)
    return Matrix((
        2.0 / (right - left), 0.0, 0.0, 0.0,
        0.0, 2.0 / (top - bottom), 0.0, 0.0,
        0.0, 0.0, -2.0 / (far - near), 0.0,
        -tx, -ty, -tz, 1.0,
    ))


def quaternion_to_matrix(w: float, x: float, y: float, z: float) -> Matrix:
    xx, xy, xz, xw = x * x, x * y, x * z, x * w
    yy, yz, yw = y * y, y * z, y * w
    zz, zw = z * z, z * w
    return Matrix((
        1 - 2 * (yy + zz), 2 * (xy - zw), 2 * (xz + yw), 0.0,
        2 * (xy + zw), 1 - 2 * (xx + zz), 2 * (yz - xw), 0.0,
        2 * (xz - yw), 2 * (yz + xw), 1 - 2 * (xx + yy), 0.0,
        0.0, 0.0, 0.0, 1.0,
    ))


def rigid_inverse(matrix: Matrix) -> Matrix:
    """Inverse of a rotation-plus-translation matrix (transpose and negate)."""
    a, b, c, p = (Vector3D(*matrix.row(i)[:3]) for i in range(4))
    return Matrix((
        a.x, b.x, c.x, 0.0,
        a.y, b.y, c.y, 0.0,
        a.z, b.z, c.z, 0.0,
        -a.dot(p), -b.dot(p), -c.dot(p), 1.0,
    ))


def inverse(matrix: Matrix) -> Matrix:
    """General inverse by cofactors; raises ValueError for a singular matrix."""
    m = matrix.values
    s = [m[c * 4 + r] for r in range(4) for c in range(4)]

    t = [s[10] * s[15], s[11] * s[14], s[9] * s[15], s[11] * s[13],
         s[9] * s[14], s[10] * s[13], s[8] * s[15], s[11] * s[12],
         s[8] * s[14], s[10] * s[12], s[8] * s[13], s[9] * s[12]]
    d = [
        (t[0] * s[5] + t[3] * s[6] + t[4] * s[7]) - (t[1] * s[5] + t[2] * s[6] + t[5] * s[7]),
        (t[1] * s[4] + t[6] * s[6] + t[9] * s[7]) - (t[0] * s[4] + t[7] * s[6] + t[8] * s[7]),
        (t[2] * s[4] + t[7] * s[5] + t[10] * s[7]) - (t[3] * s[4] + t[6] * s[5] + t[11] * s[7]),
        (t[5] * s[4] + t[8] * s[5] + t[11] * s[6]) - (t[4] * s[4] + t[9] * s[5] + t[10] * s[6]),
        (t[1] * s[1] + t[2] * s[2] + t[5] * s[3]) - (t[0] * s[1] + t[3] * s[2] + t[4] * s[3]),
        (t[0] * s[0] + t[7] * s[2] + t[8] * s[3]) - (t[1] * s[0] + t[6] * s[2] + t[9] * s[3]),
        (t[3] * s[0] + t[6] * s[1] + t[11] * s[3]) - (t[2] * s[0] + t[7] * s[1] + t[10] * s[3]),
        (t[4] * s[0] + t[9] * s[1] + t[10] * s[2]) - (t[5] * s[0] + t[8] * s[1] + t[11] * s[2]),
    ]

    t = [s[2] * s[7], s[3] * s[6], s[1] * s[7], s[3] * s[5],
         s[1] * s[6], s[2] * s[5], s[0] * s[7], s[3] * s[4],
         s[0] * s[6], s[2] * s[4], s[0] * s[5], s[1] * s[4]]
    d += [
        (t[0] * s[13] + t[3] * s[14] + t[4] * s[15]) - (t[1] * s[13] + t[2] * s[14] + t[5] * s[15]),
        (t[1] * s[12] + t[6] * s[14] + t[9] * s[15]) - (t[0] * s[12] + t[7] * s[14] + t[8] * s[15]),
        (t[2] * s[12] + t[7] * s[13] + t[10] * s[15]) - (t[3] * s[12] + t[6] * s[13] + t[11] * s[15]),
        (t[5] * s[12] + t[8] * s[13] + t[11] * s[14]) - (t[4] * s[12] + t[9] * s[13] + t[10] * s[14]),
        (t[2] * s[10] + t[5] * s[11] + t[1] * s[9]) - (t[4] * s[11] + t[0] * s[9] + t[3] * s[10]),
        (t[8] * s[11] + t[0] * s[8] + t[7] * s[10]) - (t[6] * s[10] + t[9] * s[11] + t[1] * s[8]),
        (t[6] * s[9] + t[11] * s[11] + t[3] * s[8]) - (t[10] * s[11] + t[2] * s[8] + t[7] * s[9]),
        (t[10] * s[10] + t[4] * s[8] + t[9] * s[9]) - (t[8] * s[9] + t[11] * s[10] + t[5] * s[8]),
    ]

    determinant = sum(a * b for a, b in zip(s[:4], d[:4]))
    if determinant == 0.0:
        raise ValueError("matrix is singular")
    return Matrix(tuple(value / determinant for value in d))


def unproject(x: float, y: float, z: float, modelview: Matrix,
              projection: Matrix, viewport: Sequence[int]) -> Vector3D:
    """Map window coordinates back to object space."""
    vx, vy, width, height = viewport
    point = Vector3D(
        (x - vx) * 2 / width - 1.0,
        (y - vy) * 2 / height - 1.0,
        2 * z - 1.0,
    )
    result = point.transform(inverse(multiply(modelview, projection)))
    if result.w == 0.0:
        return Vector3D()
    return Vector3D(result.x / result.w, result.y / result.w, result.z / result.w)


def format_matrix(matrix: Matrix) -> str:
    """Render the matrix as four lines of three-decimal numbers."""
    lines = (" ".join(f"{value:2.3f}" for value in row) for row in matrix.rows())
    return "\n ".join(lines) + "\n\n"