# curvegrammar/post.py
# curve stream and segment summaries

import os
from pathlib import Path
from typing import Tuple, Union

import numpy as np
import pandas as pd

from .evaluate import Curve
from .segment import SegmentedCurve


SUMMARY_COLUMNS = [
    'segment', 'n_vertices', 'arc_length',
    'start_x', 'start_y', 'start_z',
    'end_x', 'end_y', 'end_z',
    'bbox_min_x', 'bbox_min_y', 'bbox_min_z',
    'bbox_max_x', 'bbox_max_y', 'bbox_max_z',
]


def curve_to_arrays(curve: Curve) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert a raw curve stream (sentinels included) into arrays.

    Returns:
    --------
    positions : np.ndarray
        Shape (len(curve), 3)
    normals : np.ndarray
        Shape (len(curve), 3); sentinel rows are all zero
    """
    positions = np.array([(c.position.x, c.position.y, c.position.z) for c in curve], dtype=float)
    normals = np.array([(c.normal.x, c.normal.y, c.normal.z) for c in curve], dtype=float)
    return positions.reshape(-1, 3), normals.reshape(-1, 3)


def count_breaks(curve: Curve) -> int:
    """Number of sentinel points in a raw curve stream."""
    return sum(1 for c in curve if c.is_break)


def curve_bounds(segmented: SegmentedCurve) -> Tuple[np.ndarray, np.ndarray]:
    """
    Axis-aligned bounding box of all kept points.

    Raises ValueError if there are no points.
    """
    if segmented.n_points == 0:
        raise ValueError("No points to bound (segmented curve is empty)")
    return segmented.positions.min(axis=0), segmented.positions.max(axis=0)


def summarize_segments(segmented: SegmentedCurve) -> pd.DataFrame:
    """
    One row per polyline: vertex count, arc length, endpoints and bounding box.

    Arc length is the sum of straight-line distances between consecutive
    vertices.
    """
    rows = []
    for k, (pts, _) in enumerate(segmented.polylines()):
        arc_length = float(np.linalg.norm(np.diff(pts, axis=0), axis=1).sum())
        lo = pts.min(axis=0)
        hi = pts.max(axis=0)
        rows.append({
            'segment': k,
            'n_vertices': len(pts),
            'arc_length': arc_length,
            'start_x': pts[0, 0], 'start_y': pts[0, 1], 'start_z': pts[0, 2],
            'end_x': pts[-1, 0], 'end_y': pts[-1, 1], 'end_z': pts[-1, 2],
            'bbox_min_x': lo[0], 'bbox_min_y': lo[1], 'bbox_min_z': lo[2],
            'bbox_max_x': hi[0], 'bbox_max_y': hi[1], 'bbox_max_z': hi[2],
        })
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def export_segments_csv(segmented: SegmentedCurve, outpath: Union[str, Path]) -> pd.DataFrame:
    """Write the segment summary to CSV and return it."""
    outpath = str(outpath)
    os.makedirs(os.path.dirname(outpath) if os.path.dirname(outpath) else '.', exist_ok=True)
    df = summarize_segments(segmented)
    df.to_csv(outpath, index=False)
    return df
