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
import uuid as _uuid_mod
from typing import Dict, Optional, Any

from .geometry import Point


class Ray:
    """
    One drawable segment of the light path through the plate.

    A ray segment is defined by two points: p1 where it starts and p2 where
    it ends. A full path is made of three segments linked by lineage.

    Attributes:
        p1 (Point): Starting point
        p2 (Point): End point
        segment_type (str): Which part of the path this is:
            'incident' = from the top of the viewport to the entry point
            'internal' = inside the plate, entry point to exit point
            'outgoing' = from the exit point to the bottom of the viewport
        uuid (str): Unique identifier for this segment (auto-generated)
        parent_uuid (str or None): UUID of the segment this one continues
    """

    VALID_SEGMENT_TYPES = ('incident', 'internal', 'outgoing')

    def __init__(
        self,
        p1: Point,
        p2: Point,
        segment_type: str = 'incident',
        parent_uuid: Optional[str] = None
    ) -> None:
        if segment_type not in self.VALID_SEGMENT_TYPES:
            raise ValueError(
                f"Invalid segment_type '{segment_type}'. "
                f"Valid options: {self.VALID_SEGMENT_TYPES}"
            )
        self.p1: Point = p1
        self.p2: Point = p2
        self.segment_type: str = segment_type
        self.uuid: str = str(_uuid_mod.uuid4())
        self.parent_uuid: Optional[str] = parent_uuid

    @property
    def length(self) -> float:
        return math.hypot(self.p2.x - self.p1.x, self.p2.y - self.p1.y)

    @property
    def direction(self) -> Point:
        """Unit direction from p1 to p2 (zero vector for a degenerate segment)."""
        length = self.length
        if length == 0.0:
            return Point(0.0, 0.0)
        return Point((self.p2.x - self.p1.x) / length, (self.p2.y - self.p1.y) / length)

    def is_finite(self) -> bool:
        """True if both endpoints have finite coordinates."""
        return all(math.isfinite(v) for v in (self.p1.x, self.p1.y, self.p2.x, self.p2.y))

    def continue_with(self, p2: Point, segment_type: str) -> 'Ray':
        """Create the next segment, starting where this one ends."""
        return Ray(self.p2, p2, segment_type=segment_type, parent_uuid=self.uuid)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'uuid': self.uuid,
            'parent_uuid': self.parent_uuid,
            'segment_type': self.segment_type,
            'p1': self.p1.to_dict(),
            'p2': self.p2.to_dict(),
            'length': self.length,
        }

    def __repr__(self) -> str:
        return (f"Ray(type={self.segment_type}, "
                f"p1=({self.p1.x:.3f}, {self.p1.y:.3f}), "
                f"p2=({self.p2.x:.3f}, {self.p2.y:.3f}))")
