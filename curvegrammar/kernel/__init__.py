# curvegrammar/kernel - Grammar-independent math and lookup core
"""
KERNEL: MATH, TRANSFORM PARSING, VARIANT SELECTION
==================================================

    vmath.py        4×4 / 3×3 matrices (numpy) and Vector3 / Point3
    transforms.py   transform mini-language parser and TransformCache
    select.py       weighted rule-variant selection (RuleSelector)

Nothing here keeps global state: caches and random generators are always
passed in explicitly.
"""

from .transforms import TransformCache, parse_transform
from .select import RuleSelector, NO_RULE

__all__ = ['TransformCache', 'parse_transform', 'RuleSelector', 'NO_RULE']
