# curvegrammar - Stochastic grammar curve generation
"""
CURVEGRAMMAR: Procedural Curves from a Stochastic Rule Grammar
==============================================================

This package provides:
- A small XML rule grammar (L-system-like) with weighted rule variants
- A transform mini-language ("rz 5.6 tx 0.1 sa 0.996") parsed to 4×4 matrices
- A stack-based, depth-bounded evaluator emitting points + normals
- A segmenter that cuts the point stream into polylines for a renderer

ARCHITECTURE:
-------------
    kernel/           Math, transform parsing, weighted selection
    model.py          Rule / Call / Instance / Grammar
    grammar.py        XML loader
    evaluate.py       Stack-based evaluator
    segment.py        Point stream → polylines
    post.py           Segment summaries (pandas)
    library.py        Preset grammars
    config.py         EvaluatorConfig defaults
    logging_config.py setup_logging() for scripts

USAGE:
------
    from curvegrammar import evaluate_grammar, segment_curve
    from curvegrammar.library import RIBBON

    ok, curve, reason = evaluate_grammar(RIBBON, seed=42)
    segmented = segment_curve(curve)
    segmented.positions, segmented.normals, segmented.vertex_counts
"""

from .config import CONFIG, EvaluatorConfig
from .errors import GrammarError, RuleResolutionError, EvaluationLimitError, TransformCacheMiss
from .model import Call, Instance, Rule, Grammar
from .grammar import load_grammar, load_grammar_file
from .kernel import TransformCache, parse_transform, RuleSelector, NO_RULE
from .evaluate import CurvePoint, SEGMENT_BREAK, StackNode, expand_grammar, evaluate_grammar
from .segment import SegmentedCurve, segment_curve

__version__ = "0.1.0"
