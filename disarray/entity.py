"""A camera-like entity with a position and an orthonormal orientation frame."""

from __future__ import annotations

from dataclasses import dataclass

from .matrix import Matrix, Vector3D, rotation_axis, rotation_y


@dataclass
class Entity:
    """Position plus direction, up and right vectors."""

    position: Vector3D = Vector3D(0.0, 0.0, 0.0)
    direction: Vector3D = Vector3D(0.0, 0.0, 1.0)
    up: Vector3D = Vector3D(0.0, 1.0, 0.0)
    right: Vector3D = Vector3D(1.0, 0.0, 0.0)

    def set_position(self, position: Vector3D) -> None:
        self.position = Vector3D(position.x, position.y, position.z)

    def move(self, distance: float) -> None:
        """Move along the facing direction."""
        self.position = self.direction * distance + self.position

    def strafe(self, distance: float) -> None:
        """Move sideways along the right vector."""
        self.position = self.position + self.right * distance

    def yaw(self, angle: float, use_up: bool = False) -> None:
        """Turn about the entity's up vector, or the world Y axis."""
        matrix = rotation_axis(angle, self.up) if use_up else rotation_y(angle)
        self.direction = self.direction.transform(matrix)
        if not use_up:
            self.up = self.up.transform(matrix).normalize()
        self.right = self.right.transform(matrix).normalize()
        self.direction = self.direction.normalize()

    def pitch(self, angle: float, use_right: bool = True) -> None:
        """Tilt about the entity's right vector, or the world Z axis."""
        axis = self.right if use_right else Vector3D(0, 0, 1)
        matrix = rotation_axis(angle, axis)
        self.direction = self.direction.transform(matrix).normalize()
        self.up = self.up.transform(matrix).normalize()
        if not use_right:
            self.right = self.right.transform(matrix).normalize()

    def roll(self, angle: float, use_direction: bool = True) -> None:
        """Bank about the facing direction, or the world X axis."""
        axis = self.direction if use_direction else Vector3D(1, 0, 0)
        matrix = rotation_axis(angle, axis)
        self.right = self.right.transform(matrix).normalize()
        self.up = self.up.transform(matrix).normalize()
        if not use_direction:
            self.direction = self.direction.transform(matrix).normalize()

    def fly(self, distance: float, use_up: bool = False) -> None:
        """Move along the up vector, or straight up the world Y axis."""
        offset = self.up * distance if use_up else Vector3D(0, distance, 0)
        self.position = self.position + offset

    def matrix(self) -> Matrix:
        """World transform built from the orientation frame and position."""
        r, u, d, p = self.right, self.up, self.direction, self.position
        return Matrix((
            r.x, r.y, r.z, 0.0,
            u.x, u.y, u.z, 0.0,
            d.x, d.y, d.z, 0.0,
            p.x, p.y, p.z, 1.0,
        ))

    def billboard(self, object_position: Vector3D) -> Matrix:
        """Transform placing an object at ``object_position`` facing this entity."""
        facing = (-self.direction).normalize()
        side = self.up.cross(facing).normalize()
        top = facing.cross(side).normalize()
        p = object_position
        return Matrix((
            side.x, side.y, side.z, 0.0,
            top.x, top.y, top.z, 0.0,
            facing.x, facing.y, facing.z, 0.0,
            p.x, p.y, p.z, 1.0,
        ))