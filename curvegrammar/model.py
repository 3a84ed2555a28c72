# curvegrammar/model.py
"""
GRAMMAR MODEL: Rule, Call, Instance, Grammar
============================================

PURPOSE:
--------
This module defines the parsed rule set that drives curve generation:

- Call:     a recursive edge "expand rule X under transform T, n times"
- Instance: a leaf "emit one curve point under transform T"
- Rule:     one named production holding calls and instances
- Grammar:  the ordered list of rules plus the global depth ceiling

RULE VARIANTS:
--------------
Several rules may share a name. They are VARIANTS of one production; each
time the name is referenced, one variant is chosen at random in proportion
to its weight (see kernel/select.py).

Declaration order matters everywhere: rules, calls and instances are kept
in tuples so iteration is always in document order.

All classes are frozen: a grammar is built once by the loader and never
modified during evaluation.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class Call:
    """
    A recursive expansion edge.

    Parameters:
    -----------
    rule : str
        Name of the rule to expand (any of its variants)
    transforms : str
        Transform string composed onto the running transform, once per repetition
    count : int
        Number of repetitions (default 1). Each repetition compounds the
        transform once more, e.g. count=14 with "rz 5" fans out 14 children
        at 5°, 10°, ..., 70°.
    """
    rule: str
    transforms: str = ''
    count: int = 1


@dataclass(frozen=True)
class Instance:
    """
    A geometry-emission site. Emits exactly one curve point.

    The shape tag is carried for completeness; the curve generator only
    cares that the instance exists.
    """
    transforms: str = ''
    shape: str = ''


@dataclass(frozen=True)
class Rule:
    """
    One named grammar production.

    Parameters:
    -----------
    name : str
        Rule name (shared by all variants of a production)
    calls : Tuple[Call, ...]
        Recursive expansions, in declaration order
    instances : Tuple[Instance, ...]
        Emission points, in declaration order
    max_depth : int
        Per-rule depth ceiling; 0 means "use the grammar's max_depth"
    successor : Optional[str]
        Rule to switch to when this rule hits its depth ceiling
    weight : int
        Selection weight among same-named variants; 0 means unset (counts as 1)
    """
    name: str
    calls: Tuple[Call, ...] = ()
    instances: Tuple[Instance, ...] = ()
    max_depth: int = 0
    successor: Optional[str] = None
    weight: int = 0

    @property
    def effective_weight(self) -> int:
        return self.weight if self.weight > 0 else 1

    def depth_ceiling(self, global_max_depth: int) -> int:
        """The per-rule override if set, else the grammar-wide ceiling."""
        return self.max_depth if self.max_depth > 0 else global_max_depth


@dataclass(frozen=True)
class Grammar:
    """
    A complete rule set.

    Parameters:
    -----------
    max_depth : int
        Global depth ceiling. Also bounds the evaluator's stack size.
    rules : Tuple[Rule, ...]
        All rules in declaration order (variants included)
    """
    max_depth: int
    rules: Tuple[Rule, ...] = field(default_factory=tuple)

    def rule_names(self) -> List[str]:
        """Distinct rule names in order of first declaration."""
        seen = []
        for rule in self.rules:
            if rule.name not in seen:
                seen.append(rule.name)
        return seen

    def variants(self, name: str) -> List[int]:
        """Indices of every rule named `name`, in declaration order."""
        return [i for i, rule in enumerate(self.rules) if rule.name == name]

    def transform_literals(self) -> List[str]:
        """Every transform string referenced by a call or instance, in order."""
        literals = []
        for rule in self.rules:
            for call in rule.calls:
                literals.append(call.transforms)
            for instance in rule.instances:
                literals.append(instance.transforms)
        return literals

    def unresolved_references(self) -> List[Tuple[str, str]]:
        """
        (rule name, missing target) for every call or successor whose target
        names no rule. Duplicates are reported once.
        """
        names = set(rule.name for rule in self.rules)
        missing = []
        for rule in self.rules:
            targets = [call.rule for call in rule.calls]
            if rule.successor:
                targets.append(rule.successor)
            for target in targets:
                pair = (rule.name, target)
                if target not in names and pair not in missing:
                    missing.append(pair)
        return missing
