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

"""Operator tokens understood by the OSnL compiler, keyed by arity.

The same token may appear in more than one table; which entry applies
is decided by the number of arguments at the call site (``-`` is
``minus`` with two arguments and ``negate`` with one).
"""

from types import MappingProxyType

UNARY = 'unary'
BINARY = 'binary'
VARIADIC = 'variadic'

_variadic = {
    '+': 'sum',
    '*': 'product',
}

_binary = {
    '+': 'plus',
    '-': 'minus',
    '*': 'times',
    '/': 'divide',
    '//': 'quotient',
    'div': 'quotient',
    '%': 'rem',
    'rem': 'rem',
    '**': 'power',
    '^': 'power',
    'pow': 'power',
    # log(base, x)
    'log': 'log',
}

_unary = {
    '-': 'negate',
    'neg': 'negate',
    'sqrt': 'sqrt',
    'square': 'square',
    'abs2': 'square',
    'ceil': 'ceiling',
    'log': 'ln',
    'log10': 'log10',
    'asin': 'arcsin',
    'asinh': 'arcsinh',
    'acos': 'arccos',
    'acosh': 'arccosh',
    'atan': 'arctan',
    'atanh': 'arctanh',
    'acot': 'arccot',
    'acoth': 'arccoth',
    'asec': 'arcsec',
    'asech': 'arcsech',
    'acsc': 'arccsc',
    'acsch': 'arccsch',
}
# Functions whose OSnL tag is the function name
for _op in (
    'abs', 'floor', 'factorial', 'exp', 'sign', 'erf',
    'sin', 'sinh', 'cos', 'cosh', 'tan', 'tanh',
    'cot', 'coth', 'sec', 'sech', 'csc', 'csch',
):
    _unary[_op] = _op
del _op

unary_operators = MappingProxyType(_unary)
binary_operators = MappingProxyType(_binary)
variadic_operators = MappingProxyType(_variadic)

operator_tables = MappingProxyType(
    {UNARY: unary_operators, BINARY: binary_operators, VARIADIC: variadic_operators}
)

# Tokens that trigger the binary special cases in the compiler
POWER_OPERATORS = frozenset(k for k, v in _binary.items() if v == 'power')
PRODUCT_OPERATORS = frozenset(k for k, v in _binary.items() if v == 'times')
DIVISION_OPERATORS = frozenset(k for k, v in _binary.items() if v == 'divide')


def arity_class(nargs):
    """Return the table name that applies to a call with ``nargs`` arguments"""
    if nargs == 1:
        return UNARY
    if nargs == 2:
        return BINARY
    if nargs >= 3:
        return VARIADIC
    return None


def lookup(op, nargs):
    """Return the OSnL tag for ``op`` called with ``nargs`` arguments

    Returns None if the token is not registered for that arity.
    """
    table = arity_class(nargs)
    if table is None:
        return None
    return operator_tables[table].get(op)
