# curvegrammar/errors.py
"""Exceptions and warnings raised while loading and evaluating grammars."""


class GrammarError(ValueError):
    """Raised when grammar text is malformed or structurally invalid."""
    pass


class RuleResolutionError(RuntimeError):
    """Raised when a call or successor names a rule that does not exist."""
    pass


class EvaluationLimitError(RuntimeError):
    """Raised when an evaluation emits more points than the configured limit."""
    pass


class TransformCacheMiss(KeyError):
    """Raised when the evaluator looks up a transform string that was never parsed."""
    pass


