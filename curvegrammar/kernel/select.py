# curvegrammar/kernel/select.py
"""
WEIGHTED RULE SELECTION
=======================

PURPOSE:
--------
Given a rule name, pick ONE of the rule variants sharing that name with
probability proportional to weight. A rule with weight 0 (unset) counts as 1.

ALGORITHM:
----------
    n = rng.integers(0, total)          # one uniform draw
    for each rule, in declaration order:
        if rule.name != name: continue
        if n < weight: return index
        n -= weight
    return last variant of `name`

WEIGHT SCOPE:
-------------
What `total` is depends on the scope:

- 'global' (reference behavior): the sum of effective weights over ALL
  rules, computed once. Draws that land past the requested name's own
  buckets fall through to its LAST variant, so unrelated rules elsewhere in
  the grammar skew the odds toward that variant.

      rules: A(1) A(3)            → P(A#0) = 1/4, P(A#1) = 3/4
      rules: A(1) A(3) B(4)       → P(A#0) = 1/8, P(A#1) = 7/8

- 'per_name': the sum over the requested name's variants only, so the
  odds are exactly proportional to weight regardless of other rules.

DETERMINISM:
------------
The random generator is always passed in explicitly. Same seed + same
sequence of pick() calls = same picks. A name with no rules returns NO_RULE
WITHOUT consuming a draw.
"""

from typing import Dict, List

import numpy as np

from ..config import WEIGHT_SCOPES
from ..model import Grammar


NO_RULE = -1


class RuleSelector:
    """
    Weighted variant picker for one grammar.

    Weight sums are precomputed at construction; the grammar is immutable.

    Examples:
    ---------
    >>> rng = np.random.default_rng(42)
    >>> selector = RuleSelector(grammar)
    >>> i = selector.pick('entry', rng)
    >>> selector.pick('no-such-rule', rng)
    -1
    """

    def __init__(self, grammar: Grammar, scope: str = 'global'):
        if scope not in WEIGHT_SCOPES:
            raise ValueError(f"Unknown weight scope: {scope!r} (expected one of {WEIGHT_SCOPES})")
        self.grammar = grammar
        self.scope = scope

        self.weight_sum = sum(rule.effective_weight for rule in grammar.rules)

        self._variants: Dict[str, List[int]] = {}
        self._name_sums: Dict[str, int] = {}
        for i, rule in enumerate(grammar.rules):
            self._variants.setdefault(rule.name, []).append(i)
            self._name_sums[rule.name] = self._name_sums.get(rule.name, 0) + rule.effective_weight

    def variants(self, name: str) -> List[int]:
        return list(self._variants.get(name, []))

    def name_weight_sum(self, name: str) -> int:
        return self._name_sums.get(name, 0)

    def pick(self, name: str, rng: np.random.Generator) -> int:
        """
        Pick a rule index for `name`.

        Parameters:
        -----------
        name : str
            Rule name to resolve
        rng : np.random.Generator
            Random source, e.g. np.random.default_rng(42)

        Returns:
        --------
        int
            Index into grammar.rules, or NO_RULE (-1) if no rule has this name
        """
        indices = self._variants.get(name)
        if not indices:
            return NO_RULE

        total = self.weight_sum if self.scope == 'global' else self._name_sums[name]
        n = int(rng.integers(0, total))

        rules = self.grammar.rules
        for i in indices:
            weight = rules[i].effective_weight
            if n < weight:
                return i
            n -= weight

        # Only reachable in 'global' scope
        return indices[-1]
