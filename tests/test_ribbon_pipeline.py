# File: tests/test_ribbon_pipeline.py
"""
END-TO-END: Reference ribbon grammar → polylines
================================================

The ribbon grammar fans 14 lineages out of "entry" (rz 5 each). Every
lineage wanders until the stack-size valve (max_depth=30) cuts it off,
leaving one sentinel, then unwinds its pending "dbox" instances as a run
of consecutive points.

Expected behavior:
1. TERMINATION: the stack empties
2. SEGMENTS: non-empty, every polyline has more than one vertex
3. DETERMINISM: same seed → byte-identical arrays
"""

import numpy as np
import pytest

from curvegrammar import evaluate_grammar, segment_curve
from curvegrammar.library import RIBBON, get_grammar, names
from curvegrammar.grammar import load_grammar
from curvegrammar.post import count_breaks


@pytest.fixture(scope="module")
def ribbon():
    ok, curve, reason = evaluate_grammar(RIBBON, seed=42)
    assert ok, reason
    return curve


class TestRibbonPipeline:

    def test_terminates_with_nonempty_segments(self, ribbon):
        seg = segment_curve(ribbon)

        assert len(ribbon) > 0
        assert seg.n_segments > 0
        assert all(int(c) > 1 for c in seg.vertex_counts)
        assert int(seg.vertex_counts.sum()) == seg.n_points

    def test_one_lineage_per_fanned_out_call(self, ribbon):
        """Each of the 14 lineages ends in at least one sentinel."""
        assert count_breaks(ribbon) >= 14

    def test_normals_are_nonzero_for_kept_points(self, ribbon):
        seg = segment_curve(ribbon)
        lengths = np.linalg.norm(seg.normals, axis=1)
        assert np.all(lengths > 0)

    def test_same_seed_is_byte_identical(self, ribbon):
        ok, again, _ = evaluate_grammar(RIBBON, seed=42)
        assert ok

        a = segment_curve(ribbon)
        b = segment_curve(again)
        assert a.positions.tobytes() == b.positions.tobytes()
        assert a.normals.tobytes() == b.normals.tobytes()
        assert a.vertex_counts.tolist() == b.vertex_counts.tolist()

    def test_lower_global_depth_gives_shorter_output(self, ribbon):
        ok, shallow, _ = evaluate_grammar(RIBBON, seed=42, max_depth=20)
        assert ok
        assert len(shallow) < len(ribbon)

    def test_per_name_scope_also_terminates(self):
        ok, curve, _ = evaluate_grammar(RIBBON, seed=42, scope="per_name")
        assert ok
        assert segment_curve(curve).n_segments > 0


class TestLibrary:

    def test_names(self):
        assert names()[0] == "ribbon"
        assert set(names()) == {"ribbon", "tree", "octopod", "spirals", "ball", "fern"}

    def test_lookup_is_case_insensitive(self):
        assert get_grammar("RIBBON") is RIBBON

    def test_unknown_preset(self):
        with pytest.raises(KeyError, match="Available"):
            get_grammar("cathedral")

    @pytest.mark.parametrize("name", ["ribbon", "tree", "octopod", "spirals", "ball", "fern"])
    def test_every_preset_loads_and_resolves(self, name):
        grammar = load_grammar(get_grammar(name))
        assert grammar.unresolved_references() == []
        assert grammar.variants("entry")

    @pytest.mark.parametrize("name", ["spirals", "ball"])
    def test_chain_presets_produce_polylines(self, name):
        ok, curve, reason = evaluate_grammar(get_grammar(name))
        assert ok, reason
        assert segment_curve(curve).n_segments > 0
