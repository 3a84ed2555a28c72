# curvegrammar/kernel/transforms.py
"""
TRANSFORM MINI-LANGUAGE: Parse "rx -2 tx 0.1 sa 0.996" into one matrix
======================================================================

PURPOSE:
--------
Grammar calls and instances carry their transforms as short strings of
whitespace-separated opcode/operand groups. This module turns such a string
into a single 4×4 affine matrix and memoizes the result.

OPCODES:
--------
    s  x y z     non-uniform scale
    sa a         uniform scale
    t  x y z     translation
    tx x         translation along X
    ty y         translation along Y
    tz z         translation along Z
    rx a         rotation about X (degrees)
    ry a         rotation about Y (degrees)
    rz a         rotation about Z (degrees)

COMPOSITION ORDER:
------------------
Reading left to right = applying in that order. Starting from identity,
every elementary matrix E is LEFT-multiplied onto the accumulator:

    acc = E @ acc

so "tx 1 rz 90" first translates by +X, then rotates the result about Z.

ERROR POLICY:
-------------
Nothing in a transform string is fatal. Unknown opcodes and missing,
non-numeric or non-finite (nan, inf) operands are logged as warnings and
that opcode is skipped; the rest of the string keeps parsing. The empty string is identity.
"""

import logging
import math
from typing import Callable, Dict, Iterable, Iterator, List, Tuple

import numpy as np

from . import vmath
from ..errors import TransformCacheMiss

logger = logging.getLogger(__name__)


# opcode -> (operand count, elementary matrix builder)
OPCODES: Dict[str, Tuple[int, Callable[..., np.ndarray]]] = {
    's':  (3, lambda x, y, z: vmath.scale(x, y, z)),
    'sa': (1, lambda a: vmath.scale(a, a, a)),
    't':  (3, lambda x, y, z: vmath.translate(x, y, z)),
    'tx': (1, lambda x: vmath.translate(x, 0.0, 0.0)),
    'ty': (1, lambda y: vmath.translate(0.0, y, 0.0)),
    'tz': (1, lambda z: vmath.translate(0.0, 0.0, z)),
    'rx': (1, lambda a: vmath.rotate_x(vmath.radians(a))),
    'ry': (1, lambda a: vmath.rotate_y(vmath.radians(a))),
    'rz': (1, lambda a: vmath.rotate_z(vmath.radians(a))),
}


def _as_float(token: str):
    """Finite float value of `token`, or None (nan and inf count as non-numeric)."""
    try:
        value = float(token)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _elementary(tokens: List[str], source: str) -> Iterator[np.ndarray]:
    """Yield one elementary matrix per well-formed opcode group, in order."""
    i = 0
    n = len(tokens)
    while i < n:
        op = tokens[i]
        i += 1

        if op not in OPCODES:
            logger.warning(f"Unknown transform opcode {op!r} in {source!r}; skipped")
            # Numeric operands after an unknown opcode belong to it
            while i < n and _as_float(tokens[i]) is not None:
                i += 1
            continue

        arity, build = OPCODES[op]
        operands = []
        while len(operands) < arity and i < n:
            value = _as_float(tokens[i])
            if value is None:
                break
            operands.append(value)
            i += 1

        if len(operands) < arity:
            logger.warning(
                f"Opcode {op!r} expects {arity} numeric operand(s), got {len(operands)} "
                f"in {source!r}; skipped"
            )
            continue

        yield build(*operands)


def parse_transform(source: str) -> np.ndarray:
    """
    Parse a transform string into a single 4×4 matrix (uncached).

    Parameters:
    -----------
    source : str
        Transform string, e.g. "rz 5.6 tx 0.1 sa 0.996"

    Returns:
    --------
    np.ndarray
        Shape (4, 4) affine matrix; identity for an empty string

    Example:
    --------
    >>> m = parse_transform("tx 1 ty 2 tz 3")
    >>> m[:3, 3]
    array([1., 2., 3.])
    """
    acc = vmath.identity()
    for m in _elementary(source.split(), source):
        acc = vmath.compose(m, acc)
    return acc


class TransformCache:
    """
    Memoized transform-string → matrix lookup.

    The cache is an explicit object: the grammar loader fills it once with
    every literal the grammar references, and the evaluator only ever reads
    from it. Entries are never invalidated.

    Cached matrices are marked read-only so a shared entry can't be
    modified in place by a caller.

    Examples:
    ---------
    >>> cache = TransformCache()
    >>> m = cache.parse("rz 90")
    >>> cache.parse("rz 90") is m
    True
    >>> "rz 90" in cache
    True
    """

    def __init__(self):
        self._matrices: Dict[str, np.ndarray] = {}

    def parse(self, source: str) -> np.ndarray:
        """Parse `source` unless already cached; return the cached matrix."""
        cached = self._matrices.get(source)
        if cached is not None:
            return cached
        m = parse_transform(source)
        m.flags.writeable = False
        self._matrices[source] = m
        return m

    def populate(self, sources: Iterable[str]) -> 'TransformCache':
        """Parse every string in `sources`. Returns self for chaining."""
        for source in sources:
            self.parse(source)
        return self

    def __getitem__(self, source: str) -> np.ndarray:
        try:
            return self._matrices[source]
        except KeyError:
            raise TransformCacheMiss(
                f"Transform {source!r} was not parsed before evaluation"
            ) from None

    def __contains__(self, source: str) -> bool:
        return source in self._matrices

    def __len__(self) -> int:
        return len(self._matrices)

    def keys(self) -> List[str]:
        return list(self._matrices)
