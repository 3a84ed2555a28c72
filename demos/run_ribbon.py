#!/usr/bin/env python3
"""
RUN_RIBBON: Evaluate a Preset Grammar and Segment the Curves
============================================================

This demo shows the complete grammar-to-polylines workflow:
1. Load a preset grammar (default: ribbon)
2. Parse every transform string into the matrix cache
3. Expand the grammar with a seeded random source
4. Cut the point stream into polylines
5. Export a per-segment summary

Run with:
    python demos/run_ribbon.py
    python demos/run_ribbon.py fern 7        # preset name, seed

Outputs:
    artifacts/<preset>_segments.csv  - One row per polyline
"""

import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from curvegrammar import CONFIG, evaluate_grammar, segment_curve
from curvegrammar.library import get_grammar
from curvegrammar.logging_config import setup_logging
from curvegrammar.post import count_breaks, curve_bounds, export_segments_csv


def print_header(text: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {text}")
    print("=" * 70)


def main():
    preset = sys.argv[1] if len(sys.argv) > 1 else 'ribbon'
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else CONFIG.seed

    setup_logging(CONFIG.log_level)

    # =========================================================================
    # STEP 1: EVALUATE
    # =========================================================================
    print_header(f"STEP 1: Evaluate '{preset}' (seed={seed})")

    ok, curve, reason = evaluate_grammar(get_grammar(preset), seed=seed)
    if not ok:
        print(f"  Evaluation failed: {reason}")
        return 1

    print(f"""
    Stream length:   {len(curve)}
    Sentinel breaks: {count_breaks(curve)}
    """)

    # =========================================================================
    # STEP 2: SEGMENT
    # =========================================================================
    print_header("STEP 2: Segment")

    segmented = segment_curve(curve)
    if segmented.n_segments == 0:
        print("  No polylines (every lineage produced fewer than 2 points)")
        return 0

    counts = segmented.vertex_counts
    lo, hi = curve_bounds(segmented)
    print(f"""
    Polylines:       {segmented.n_segments}
    Points kept:     {segmented.n_points}
    Vertices/curve:  min {counts.min()}, max {counts.max()}, mean {np.mean(counts):.1f}
    Bounds min:      ({lo[0]:.3f}, {lo[1]:.3f}, {lo[2]:.3f})
    Bounds max:      ({hi[0]:.3f}, {hi[1]:.3f}, {hi[2]:.3f})
    """)

    # =========================================================================
    # STEP 3: EXPORT
    # =========================================================================
    print_header("STEP 3: Export")

    outpath = Path('artifacts') / f"{preset}_segments.csv"
    df = export_segments_csv(segmented, outpath)
    print(f"  Segment summary exported to: {outpath}")
    print(f"  Total arc length: {df['arc_length'].sum():.3f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
