"""
Copyright 2026 optical-flat authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import math
from dataclasses import dataclass
from typing import Dict
from shapely.geometry import Polygon, box

from .constants import DENOMINATOR_EPSILON


@dataclass(frozen=True)
class Point:
    """
    A point (or vector) in the 2D scene plane.
    Immutable, so a computed ray path can be shared without copying.
    """
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary representation."""
        return {'x': self.x, 'y': self.y}


class Geometry:
    """
    Basic vector operations and figures for the optical flat scene.

    Points double as vectors. All operations return new objects; nothing
    is mutated in place.
    """

    @staticmethod
    def dot(p1: Point, p2: Point) -> float:
        """
        Calculate the dot product, where the two points are treated as vectors.

        Args:
            p1: First point (as vector)
            p2: Second point (as vector)

        Returns:
            Dot product
        """
        return p1.x * p2.x + p1.y * p2.y

    @staticmethod
    def add(p1: Point, p2: Point) -> Point:
        return Point(p1.x + p2.x, p1.y + p2.y)

    @staticmethod
    def scale(p1: Point, s: float) -> Point:
        return Point(p1.x * s, p1.y * s)

    @staticmethod
    def length(p1: Point) -> float:
        """Length of the given point treated as a vector."""
        return math.hypot(p1.x, p1.y)

    @staticmethod
    def normalize_vec(p1: Point) -> Point:
        """
        Normalize the given point as if it were a vector.

        A zero vector is returned unchanged instead of dividing by zero.

        Args:
            p1: Point (as vector)

        Returns:
            Normalized vector
        """
        len_val = Geometry.length(p1) or 1.0
        return Point(p1.x / len_val, p1.y / len_val)

    @staticmethod
    def perpendicular(p1: Point) -> Point:
        """Rotate a vector by -90 degrees exactly: (x, y) -> (-y, x)."""
        return Point(-p1.y, p1.x)

    @staticmethod
    def plane_point(normal: Point, offset: float) -> Point:
        """The foot point of the plane {p : dot(p, normal) == offset} (unit normal)."""
        return Geometry.scale(normal, offset)

    @staticmethod
    def ray_plane_distance(origin: Point, direction: Point, normal: Point,
                           offset: float, epsilon: float = DENOMINATOR_EPSILON) -> float:
        """
        Travel distance s such that dot(origin + s * direction, normal) == offset.

        The denominator dot(direction, normal) is floored to epsilon (keeping
        its sign) when its magnitude falls below epsilon.

        Args:
            origin: Ray start point
            direction: Ray direction (unit vector)
            normal: Unit normal of the plane
            offset: Plane offset along the normal
            epsilon: Smallest allowed denominator magnitude

        Returns:
            Signed travel distance along direction
        """
        denom = Geometry.dot(direction, normal)
        if abs(denom) < epsilon:
            denom = math.copysign(epsilon, denom)
        return (offset - Geometry.dot(origin, normal)) / denom

    @staticmethod
    def strip_polygon(normal: Point, tangent: Point, c1: float, c2: float,
                      half_length: float) -> Polygon:
        """
        Quad between the parallel planes dot(p, normal) == c1 and == c2.

        The quad extends half_length along tangent on either side of the
        planes' foot points, which is wide enough to cover any viewport.

        Returns:
            Shapely Polygon with vertices in drawing order
        """
        p1 = Geometry.plane_point(normal, c1)
        p2 = Geometry.plane_point(normal, c2)
        a = Geometry.add(p1, Geometry.scale(tangent, -half_length))
        b = Geometry.add(p1, Geometry.scale(tangent, half_length))
        c = Geometry.add(p2, Geometry.scale(tangent, half_length))
        d = Geometry.add(p2, Geometry.scale(tangent, -half_length))
        return Polygon([(a.x, a.y), (b.x, b.y), (c.x, c.y), (d.x, d.y)])

    @staticmethod
    def clip_to_viewport(polygon: Polygon, width: float, height: float) -> Polygon:
        """Clip a polygon to the viewport rectangle [0, width] x [0, height]."""
        return polygon.intersection(box(0.0, 0.0, width, height))


# Create a singleton instance for convenience
geometry = Geometry()
