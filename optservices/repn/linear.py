#  ___________________________________________________________________________
#
#  Pyomo: Python Optimization Modeling Objects
#  Copyright (c) 2008-2025
#  National Technology and Engineering Solutions of Sandia, LLC
#  Under the terms of Contract DE-NA0003525 with National Technology and
#  Engineering Solutions of Sandia, LLC, the U.S. Government retains certain
#  rights in this software.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""Accumulate canonical linear terms into dense per-variable buffers.

Linear objectives and constraint bodies arrive as sums whose terms are
either ``Call('*', (coef, VariableRef(i)))`` or bare constants.  No
simplification is attempted: any other term shape is an error.

A single :class:`LinearAccumulator` is reused for every row of a
problem.  After the terms of a row are added, :meth:`drain` returns the
accumulated ``(index, coef)`` pairs in ascending index order and resets
exactly the slots it reported, leaving the accumulator ready for the
next row.
"""

from optservices.common.errors import ShapeError, check_index
from optservices.expr.nodes import ExprType, expr_type, constant_value
from optservices.expr.operators import PRODUCT_OPERATORS

_CONSTANT = ExprType.CONSTANT
_VARIABLE = ExprType.VARIABLE
_CALL = ExprType.CALL


class LinearAccumulator(object):
    """Scratch space for collecting the linear part of one row

    ``indicator[i]`` is True iff ``buffer[i]`` holds a coefficient
    accumulated during the current pass.
    """

    __slots__ = ('indicator', 'buffer')

    def __init__(self, n_vars):
        self.indicator = [False] * n_vars
        self.buffer = [0.0] * n_vars

    def __len__(self):
        return len(self.indicator)

    def __repr__(self):
        return f"{self.__class__.__name__}({dict(self.items())})"

    def add(self, idx, coef):
        check_index('Variable index', idx, len(self.indicator))
        if self.indicator[idx]:
            self.buffer[idx] += coef
        else:
            self.indicator[idx] = True
            self.buffer[idx] = coef

    def add_term(self, term):
        return extract_linear_term(term, self)

    def items(self):
        """Yield the ``(index, coef)`` pairs currently held (without resetting)"""
        buffer = self.buffer
        for idx, flag in enumerate(self.indicator):
            if flag:
                yield idx, buffer[idx]

    def drain(self):
        """Return the held ``(index, coef)`` pairs and reset those slots"""
        ans = list(self.items())
        indicator = self.indicator
        buffer = self.buffer
        for idx, _ in ans:
            indicator[idx] = False
            buffer[idx] = 0.0
        return ans

    def clear(self):
        n = len(self.indicator)
        self.indicator[:] = [False] * n
        self.buffer[:] = [0.0] * n

    def is_clear(self):
        return not any(self.indicator)


def _check_term(term):
    """Return ``(coef, idx)`` for a canonical product term or raise ShapeError"""
    if term.op not in PRODUCT_OPERATORS:
        raise ShapeError(
            f"Expected linear term of the form coef * x[i]; "
            f"found operator {term.op!r} in {term!r}"
        )
    if len(term.args) != 2:
        raise ShapeError(
            f"Expected linear term of the form coef * x[i]; "
            f"found {len(term.args)} operands in {term!r}"
        )
    coef, var = term.args
    if expr_type(var) is not _VARIABLE:
        raise ShapeError(
            "Expected a variable reference as the second operand of "
            f"linear term {term!r}"
        )
    if expr_type(coef) is not _CONSTANT:
        raise ShapeError(
            "Expected a constant coefficient as the first operand of "
            f"linear term {term!r}"
        )
    return constant_value(coef), var.idx


def extract_linear_term(term, accumulator):
    """Add one term of a linear sum to ``accumulator``

    Returns the constant contributed by the term: 0.0 for a
    ``coef * x[i]`` term, or the value of a bare constant.
    """
    _type = expr_type(term)
    if _type is _CALL:
        coef, idx = _check_term(term)
        accumulator.add(idx, coef)
        return 0.0
    elif _type is _CONSTANT:
        return constant_value(term)
    raise ShapeError(
        f"Expected a linear term (coef * x[i]) or a constant; found {term!r}"
    )


def linear_terms(expr):
    """Return the additive terms of a linear expression

    A ``+`` call contributes its arguments; anything else is a single
    term.
    """
    if expr_type(expr) is _CALL and expr.op == '+':
        return expr.args
    return (expr,)


def extract_linear_sum(expr, accumulator):
    """Add every term of ``expr`` to ``accumulator`` and return the constant"""
    constant = 0.0
    for term in linear_terms(expr):
        constant += extract_linear_term(term, accumulator)
    return constant


def is_linear_sum(expr):
    """True if every term of ``expr`` is a canonical linear term or constant"""
    for term in linear_terms(expr):
        _type = expr_type(term)
        if _type is _CONSTANT:
            continue
        if _type is not _CALL:
            return False
        try:
            _check_term(term)
        except ShapeError:
            return False
    return True
