# curvegrammar/evaluate.py
"""
STACK-BASED EVALUATOR: Grammar → Curve
======================================

PURPOSE:
--------
Expand a grammar into a flat stream of curve points. Each Call pushes new
work; each Instance emits one point (position + normal) read from the
accumulated transform at that site.

WHY AN EXPLICIT STACK?
----------------------
Grammars are recursive ("forward" calls "forward" ...). Expanding them
with Python recursion would tie output depth to the interpreter's call
stack. Instead the evaluator keeps a LIFO list of StackNode values:

    StackNode(rule_index, depth, transform)

and loops until the list is empty. Two ceilings bound the work:

    1. STACK SIZE  >= global max_depth  → abandon the node (safety valve)
    2. node DEPTH  >= rule's ceiling    → stop this lineage, maybe switch
                                          to the rule's successor

Both emit a SENTINEL point (zero position, zero normal). Sentinels mark
"this lineage ended here" and are where the segmenter cuts polylines.

TRANSFORM ACCUMULATION:
-----------------------
While expanding one node, a running transform starts at the node's
transform and is shared across all of its calls and then its instances,
in declaration order. Each step LEFT-multiplies the cached matrix:

    running = M @ running

A call with count=3 therefore pushes children under M, M², M³ (times the
parent's transform).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .config import CONFIG, EvaluatorConfig
from .errors import EvaluationLimitError, GrammarError, RuleResolutionError
from .grammar import load_grammar
from .kernel import vmath
from .kernel.select import NO_RULE, RuleSelector
from .kernel.transforms import TransformCache
from .model import Grammar

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurvePoint:
    """
    One emitted sample: a position and an orientation.

    A normal of exactly (0, 0, 0) is reserved as the segment-break sentinel;
    `is_break` is the check the segmenter uses.
    """
    position: vmath.Point3
    normal: vmath.Vector3

    @property
    def is_break(self) -> bool:
        return self.normal.is_zero()


SEGMENT_BREAK = CurvePoint(vmath.ORIGIN, vmath.ZERO_VECTOR)

Curve = List[CurvePoint]


@dataclass
class StackNode:
    """
    One pending expansion.

    rule_index : int
        Concrete rule variant (index into grammar.rules)
    depth : int
        0 for the root; +1 per Call expansion
    transform : np.ndarray
        Accumulated 4×4 transform
    successor_hops : int
        Successor switches in a row without an expansion in between
    """
    rule_index: int
    depth: int
    transform: np.ndarray
    successor_hops: int = 0


def _resolve(selector: RuleSelector, name: str, rng: np.random.Generator, referrer: str) -> int:
    index = selector.pick(name, rng)
    if index == NO_RULE:
        raise RuleResolutionError(f"Rule {referrer!r} references undefined rule {name!r}")
    return index


def _emit(curve: Curve, point: CurvePoint, config: EvaluatorConfig) -> None:
    if config.max_points is not None and len(curve) >= config.max_points:
        raise EvaluationLimitError(
            f"Curve exceeded max_points={config.max_points}; "
            f"check for successor cycles or lower max_depth"
        )
    curve.append(point)
    if config.progress_interval and len(curve) % config.progress_interval == 0:
        logger.info(f"Instanced {len(curve)} nodes")


def expand_grammar(
    grammar: Grammar,
    cache: TransformCache,
    rng: np.random.Generator,
    *,
    selector: Optional[RuleSelector] = None,
    max_depth: Optional[int] = None,
    entry: Optional[str] = None,
    config: EvaluatorConfig = CONFIG,
) -> Curve:
    """
    Expand `grammar` into a flat curve point stream.

    Parameters:
    -----------
    grammar : Grammar
        Loaded grammar
    cache : TransformCache
        Must already hold every transform literal in the grammar
        (see `TransformCache.populate(grammar.transform_literals())`)
    rng : np.random.Generator
        Random source for variant selection, consumed in stack order
    selector : RuleSelector, optional
        Defaults to RuleSelector(grammar, config.weight_scope)
    max_depth : int, optional
        Override of the grammar's global max_depth
    entry : str, optional
        Root rule name; defaults to config.entry_rule ("entry")
    config : EvaluatorConfig
        Output limit, successor-cycle guard and progress logging settings

    Returns:
    --------
    Curve
        Points and sentinel breaks, in emission order

    Raises:
    -------
    RuleResolutionError
        If a selected branch names an undefined rule
    EvaluationLimitError
        If config.max_points is set and exceeded, or a node switches
        successors config.max_successor_hops times in a row (successor cycle)
    TransformCacheMiss
        If the cache was not populated for this grammar
    """
    if selector is None:
        selector = RuleSelector(grammar, config.weight_scope)
    global_max = grammar.max_depth if max_depth is None else max_depth
    entry = entry or config.entry_rule

    rules = grammar.rules
    curve: Curve = []
    unit_z = vmath.UNIT_Z.to_array()

    stack: List[StackNode] = [
        StackNode(
            rule_index=_resolve(selector, entry, rng, '<entry>'),
            depth=0,
            transform=vmath.identity(),
        )
    ]

    while stack:
        e = stack.pop()
        rule = rules[e.rule_index]
        ceiling = rule.depth_ceiling(global_max)

        # Safety valve: bounds memory regardless of per-rule ceilings
        if len(stack) >= global_max:
            _emit(curve, SEGMENT_BREAK, config)
            continue

        if e.depth >= ceiling:
            if rule.successor:
                # A switch keeps the depth, so only expansion can make progress
                if e.successor_hops >= config.max_successor_hops:
                    raise EvaluationLimitError(
                        f"Rule {rule.name!r} switched successors {e.successor_hops} times "
                        f"at depth {e.depth} without expanding; successor cycle"
                    )
                stack.append(StackNode(
                    rule_index=_resolve(selector, rule.successor, rng, rule.name),
                    depth=e.depth,
                    transform=e.transform,
                    successor_hops=e.successor_hops + 1,
                ))
            _emit(curve, SEGMENT_BREAK, config)
            continue

        running = e.transform
        for call in rule.calls:
            m = cache[call.transforms]
            for _ in range(call.count):
                running = vmath.compose(m, running)
                stack.append(StackNode(
                    rule_index=_resolve(selector, call.rule, rng, rule.name),
                    depth=e.depth + 1,
                    transform=running,
                ))

        for instance in rule.instances:
            running = vmath.compose(cache[instance.transforms], running)
            position = vmath.get_translation(running)
            normal = vmath.Vector3.from_array(running[:3, :3] @ unit_z)
            _emit(curve, CurvePoint(position, normal), config)

    logger.debug(f"Expansion finished: {len(curve)} points")
    return curve


def evaluate_grammar(
    text: str,
    *,
    seed: Optional[int] = None,
    max_depth: Optional[int] = None,
    scope: Optional[str] = None,
    config: EvaluatorConfig = CONFIG,
) -> Tuple[bool, Curve, str]:
    """
    Load, prepare and expand a grammar in one call.

    Each call seeds its own generator, so evaluations are independent and
    reproducible.

    Parameters:
    -----------
    text : str
        Grammar XML
    seed : int, optional
        Random seed (default config.seed = 42)
    max_depth : int, optional
        Override of the grammar's global max_depth
    scope : str, optional
        'global' or 'per_name' (default config.weight_scope)
    config : EvaluatorConfig
        Evaluator settings

    Returns:
    --------
    success : bool
        True if the whole grammar was expanded
    curve : Curve
        The point stream (empty if failed)
    reason : str
        Empty if success, error message if failed
    """
    try:
        grammar = load_grammar(text)
    except GrammarError as e:
        logger.error(f"Grammar parse error: {e}")
        return False, [], f"parse error: {e}"

    cache = TransformCache().populate(grammar.transform_literals())
    selector = RuleSelector(grammar, scope or config.weight_scope)
    rng = np.random.default_rng(config.seed if seed is None else seed)

    try:
        curve = expand_grammar(
            grammar, cache, rng,
            selector=selector,
            max_depth=max_depth,
            config=config,
        )
    except RuleResolutionError as e:
        logger.error(f"Evaluation aborted: {e}")
        return False, [], f"unresolved rule: {e}"
    except EvaluationLimitError as e:
        logger.error(f"Evaluation aborted: {e}")
        return False, [], f"limit: {e}"

    return True, curve, ""
