# File: tests/test_transforms.py
"""
Test the transform mini-language parser and its cache.

WHY THESE TESTS?
---------------
The transform strings are a stable text format: the same string must
always produce the same matrix. These tests pin down:
1. Each opcode's meaning
2. Left-to-right application order
3. The warning-and-skip policy for bad input
4. Cache identity (same string → same object)
"""

import logging

import numpy as np
import pytest

from curvegrammar.errors import TransformCacheMiss
from curvegrammar.kernel import vmath
from curvegrammar.kernel.transforms import TransformCache, parse_transform
from curvegrammar.kernel.vmath import Point3, Vector3


def test_empty_string_is_identity_and_cached():
    """Empty string → identity; parsing it twice returns the cached object."""
    cache = TransformCache()
    m1 = cache.parse("")
    m2 = cache.parse("")

    np.testing.assert_array_equal(m1, np.eye(4))
    assert m1 is m2
    assert len(cache) == 1


def test_whitespace_only_is_identity():
    np.testing.assert_array_equal(parse_transform("   "), np.eye(4))


def test_single_axis_translations():
    """'tx 1 ty 2 tz 3' → translation (1, 2, 3), identity rotation part."""
    m = parse_transform("tx 1 ty 2 tz 3")

    np.testing.assert_allclose(m[:3, 3], [1, 2, 3])
    np.testing.assert_allclose(m[:3, :3], np.eye(3))


def test_rz_90_rotates_x_to_y():
    """'rz 90' maps (1, 0, 0) to ≈ (0, 1, 0): degrees are converted to radians."""
    m = parse_transform("rz 90")
    v = vmath.transform_vector(m, Vector3(1, 0, 0))

    np.testing.assert_allclose(v.to_array(), [0, 1, 0], atol=1e-12)


def test_left_to_right_means_apply_in_order():
    """
    'tx 1 rz 90': translate first, then rotate.

    The origin moves to (1, 0, 0), then rotates to (0, 1, 0).
    """
    m = parse_transform("tx 1 rz 90")
    p = vmath.transform_point(m, vmath.ORIGIN)
    np.testing.assert_allclose(p.to_array(), [0, 1, 0], atol=1e-12)

    # Reversed order: rotation leaves the origin alone, then translate
    m = parse_transform("rz 90 tx 1")
    p = vmath.transform_point(m, vmath.ORIGIN)
    np.testing.assert_allclose(p.to_array(), [1, 0, 0], atol=1e-12)


def test_scale_opcodes():
    np.testing.assert_allclose(parse_transform("s 0.55 2.0 1.25")[:3, :3], np.diag([0.55, 2.0, 1.25]))
    np.testing.assert_allclose(parse_transform("sa 0.5")[:3, :3], 0.5 * np.eye(3))


def test_t_opcode_matches_single_axis_chain():
    np.testing.assert_allclose(parse_transform("t 1 -2 3"), parse_transform("tx 1 ty -2 tz 3"))


def test_scale_after_translation_scales_the_offset():
    """'tx 1 sa 0.5' → point lands at 0.5: the scale applies after the move."""
    p = vmath.transform_point(parse_transform("tx 1 sa 0.5"), vmath.ORIGIN)
    assert p == Point3(0.5, 0.0, 0.0)


def test_unknown_opcode_is_skipped_with_warning(caplog):
    """Unknown opcodes (and their numeric operands) are skipped, parsing continues."""
    with caplog.at_level(logging.WARNING, logger="curvegrammar"):
        m = parse_transform("tx 1 bogus 5 ty 2")

    np.testing.assert_allclose(m[:3, 3], [1, 2, 0])
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "bogus" in warnings[0].getMessage()


def test_missing_operand_is_skipped_with_warning(caplog):
    """'tx ty 2': tx has no operand and is skipped; ty still applies."""
    with caplog.at_level(logging.WARNING, logger="curvegrammar"):
        m = parse_transform("tx ty 2")

    np.testing.assert_allclose(m[:3, 3], [0, 2, 0])
    assert any("'tx'" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("source", ["tx nan ty inf tz 2", "tx -inf tz 2", "sa NaN tz 2"])
def test_non_finite_operands_are_skipped_with_warning(caplog, source):
    """nan / inf never reach a matrix: the opcode is skipped, the rest applies."""
    with caplog.at_level(logging.WARNING, logger="curvegrammar"):
        m = parse_transform(source)

    assert np.all(np.isfinite(m))
    np.testing.assert_allclose(m[:3, 3], [0, 0, 2])
    np.testing.assert_allclose(m[:3, :3], np.eye(3))
    assert any(r.levelno == logging.WARNING for r in caplog.records)


def test_truncated_operands_at_end(caplog):
    with caplog.at_level(logging.WARNING, logger="curvegrammar"):
        m = parse_transform("s 1 2")
    np.testing.assert_array_equal(m, np.eye(4))
    assert len(caplog.records) == 1


def test_cache_keys_are_exact_literals():
    """Strings that parse to the same matrix are still separate entries."""
    cache = TransformCache()
    a = cache.parse("tx 1")
    b = cache.parse("tx  1")

    np.testing.assert_array_equal(a, b)
    assert a is not b
    assert cache.keys() == ["tx 1", "tx  1"]


def test_cache_populate_and_lookup():
    cache = TransformCache().populate(["rz 5", "", "rz 5", "sa 0.996"])

    assert len(cache) == 3
    assert "rz 5" in cache
    assert cache["rz 5"] is cache.parse("rz 5")


def test_cache_miss_raises():
    cache = TransformCache()
    with pytest.raises(TransformCacheMiss):
        cache["rz 5"]
    # TransformCacheMiss is a KeyError
    with pytest.raises(KeyError):
        cache["rz 5"]


def test_cached_matrices_are_read_only():
    cache = TransformCache()
    m = cache.parse("tx 1")
    with pytest.raises(ValueError):
        m[0, 3] = 5.0
