# curvegrammar/segment.py
"""
CURVE SEGMENTER: Point stream → polylines
=========================================

The evaluator produces ONE flat stream of points with sentinel breaks
(zero normals) wherever a lineage ended. A renderer wants separate
polylines instead: flat position/normal arrays plus a vertex count per
polyline.

RULES:
------
Scan the stream keeping a running count of points since the last break.
A break happens at:
    - a sentinel point, or
    - the FINAL element of the stream

The element that triggers a break is never copied to the output. On break:

    count == 0  → nothing to do
    count == 1  → drop that lone point (one point is not a polyline)
    count  > 1  → keep the segment, record its vertex count

so every recorded count is > 1 and the counts sum to the number of output
points.

Example (P = point, | = sentinel):

    P P P P P | P        →  one segment of 5; the trailing P ends the stream
"""

from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np

from .evaluate import Curve


@dataclass
class SegmentedCurve:
    """
    Segmenter output, the renderer-facing arrays.

    Attributes:
    -----------
    positions : np.ndarray
        Shape (N, 3), segments concatenated in scan order
    normals : np.ndarray
        Shape (N, 3), parallel to positions
    vertex_counts : np.ndarray
        Shape (n_segments,), dtype uint32; sums to N
    """
    positions: np.ndarray
    normals: np.ndarray
    vertex_counts: np.ndarray

    @property
    def n_segments(self) -> int:
        return len(self.vertex_counts)

    @property
    def n_points(self) -> int:
        return len(self.positions)

    def polylines(self) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
        """Yield (positions, normals) views, one pair per segment."""
        start = 0
        for count in self.vertex_counts:
            end = start + int(count)
            yield self.positions[start:end], self.normals[start:end]
            start = end

    def flat_positions(self) -> np.ndarray:
        """1-D float32 array x0, y0, z0, x1, ... as curve primitives expect."""
        return self.positions.astype(np.float32).ravel()

    def flat_normals(self) -> np.ndarray:
        return self.normals.astype(np.float32).ravel()


def segment_curve(curve: Curve) -> SegmentedCurve:
    """
    Split a flat curve stream into polylines at sentinel breaks.

    Parameters:
    -----------
    curve : Curve
        Output of expand_grammar / evaluate_grammar

    Returns:
    --------
    SegmentedCurve
        Positions, normals and per-segment vertex counts
    """
    positions: List[Tuple[float, float, float]] = []
    normals: List[Tuple[float, float, float]] = []
    vertex_counts: List[int] = []

    count = 0
    last = len(curve) - 1
    for i, c in enumerate(curve):
        if i == last or c.is_break:
            if count == 1:
                positions.pop()
                normals.pop()
            elif count > 1:
                vertex_counts.append(count)
            count = 0
            continue

        positions.append((c.position.x, c.position.y, c.position.z))
        normals.append((c.normal.x, c.normal.y, c.normal.z))
        count += 1

    return SegmentedCurve(
        positions=np.array(positions, dtype=float).reshape(-1, 3),
        normals=np.array(normals, dtype=float).reshape(-1, 3),
        vertex_counts=np.array(vertex_counts, dtype=np.uint32),
    )
