# File: tests/test_segment.py
"""
Test the curve segmenter.

Notation in docstrings: P = real point, | = sentinel break.
"""

import numpy as np

from curvegrammar.evaluate import SEGMENT_BREAK, CurvePoint
from curvegrammar.kernel.vmath import Point3, Vector3
from curvegrammar.segment import SegmentedCurve, segment_curve


def P(x, y=0.0, z=0.0):
    """A real point with a +Z normal."""
    return CurvePoint(Point3(float(x), float(y), float(z)), Vector3(0.0, 0.0, 1.0))


B = SEGMENT_BREAK


def test_five_points_break_one_point():
    """P P P P P | P → one segment of 5; the trailing lone point is discarded."""
    curve = [P(0), P(1), P(2), P(3), P(4), B, P(5)]
    seg = segment_curve(curve)

    assert seg.vertex_counts.tolist() == [5]
    np.testing.assert_allclose(seg.positions[:, 0], [0, 1, 2, 3, 4])
    assert seg.normals.shape == (5, 3)


def test_lone_point_between_breaks_is_dropped():
    """P | P P | → the first lone point goes, the pair stays."""
    curve = [P(0), B, P(1), P(2), B]
    seg = segment_curve(curve)

    assert seg.vertex_counts.tolist() == [2]
    np.testing.assert_allclose(seg.positions[:, 0], [1, 2])


def test_sentinels_never_appear_in_output():
    curve = [B, P(0), P(1), B, B, P(2), P(3), P(4), B]
    seg = segment_curve(curve)

    assert seg.vertex_counts.tolist() == [2, 3]
    assert not np.any(np.all(seg.normals == 0.0, axis=1))


def test_final_element_terminates_without_being_emitted():
    """P P P (no trailing sentinel): the final element closes the segment."""
    seg = segment_curve([P(0), P(1), P(2)])

    assert seg.vertex_counts.tolist() == [2]
    np.testing.assert_allclose(seg.positions[:, 0], [0, 1])


def test_zero_normal_real_point_counts_as_break():
    """Any exactly-zero normal is a break, even with a nonzero position."""
    degenerate = CurvePoint(Point3(9.0, 9.0, 9.0), Vector3(0.0, 0.0, 0.0))
    seg = segment_curve([P(0), P(1), degenerate, P(2), P(3), B])

    assert seg.vertex_counts.tolist() == [2, 2]
    assert 9.0 not in seg.positions


def test_empty_and_degenerate_streams():
    for curve in ([], [B], [P(0)], [P(0), B], [B, P(0), B, P(1), B]):
        seg = segment_curve(curve)
        assert seg.n_segments == 0
        assert seg.n_points == 0
        assert seg.positions.shape == (0, 3)
        assert seg.normals.shape == (0, 3)


def test_counts_sum_to_points_and_are_uint32():
    curve = [P(0), P(1), B, P(2), B, P(3), P(4), P(5), P(6), B, P(7)]
    seg = segment_curve(curve)

    assert seg.vertex_counts.dtype == np.uint32
    assert int(seg.vertex_counts.sum()) == seg.n_points
    assert all(c > 1 for c in seg.vertex_counts)


def test_polylines_split_in_scan_order():
    curve = [P(0), P(1), B, P(2), P(3), P(4), B]
    seg = segment_curve(curve)

    lines = list(seg.polylines())
    assert len(lines) == 2
    np.testing.assert_allclose(lines[0][0][:, 0], [0, 1])
    np.testing.assert_allclose(lines[1][0][:, 0], [2, 3, 4])
    assert lines[1][1].shape == (3, 3)


def test_flat_arrays_are_interleaved_float32():
    seg = segment_curve([P(1, 2, 3), P(4, 5, 6), B])

    flat = seg.flat_positions()
    assert flat.dtype == np.float32
    assert flat.tolist() == [1, 2, 3, 4, 5, 6]
    assert seg.flat_normals().tolist() == [0, 0, 1, 0, 0, 1]


def test_segmented_curve_properties():
    seg = SegmentedCurve(
        positions=np.zeros((4, 3)),
        normals=np.zeros((4, 3)),
        vertex_counts=np.array([2, 2], dtype=np.uint32),
    )
    assert seg.n_segments == 2
    assert seg.n_points == 4
