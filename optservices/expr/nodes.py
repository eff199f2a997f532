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

"""Symbolic expression trees handed to the OSiL translation layer.

An expression is one of three node kinds:

* :class:`Constant` -- a numeric literal.  Native Python numbers are
  accepted anywhere a :class:`Constant` is.
* :class:`VariableRef` -- a reference to a (zero-based) variable index.
* :class:`Call` -- an operator token applied to an ordered list of
  argument expressions.

Nodes are immutable once built; the translation layer never modifies
them.
"""

import enum
import operator

from pyomo.common.numeric_types import native_numeric_types


class ExprType(enum.IntEnum):
    CONSTANT = 0
    VARIABLE = 1
    CALL = 2


class ExpressionNode(object):
    __slots__ = ()

    expr_type = None

    def __setattr__(self, name, val):
        raise AttributeError(f"{self.__class__.__name__} objects are immutable")


class Constant(ExpressionNode):
    __slots__ = ('value',)

    expr_type = ExprType.CONSTANT

    def __init__(self, value):
        object.__setattr__(self, 'value', value)

    def __eq__(self, other):
        if other.__class__ is Constant:
            return self.value == other.value
        if other.__class__ in native_numeric_types:
            return self.value == other
        return NotImplemented

    def __hash__(self):
        return hash(self.value)

    def __repr__(self):
        return f"Constant({self.value!r})"


class VariableRef(ExpressionNode):
    __slots__ = ('idx',)

    expr_type = ExprType.VARIABLE

    def __init__(self, idx):
        object.__setattr__(self, 'idx', operator.index(idx))

    def __eq__(self, other):
        if other.__class__ is VariableRef:
            return self.idx == other.idx
        return NotImplemented

    def __hash__(self):
        return hash((VariableRef, self.idx))

    def __repr__(self):
        return f"VariableRef({self.idx})"


class Call(ExpressionNode):
    __slots__ = ('op', 'args')

    expr_type = ExprType.CALL

    def __init__(self, op, args):
        object.__setattr__(self, 'op', op)
        object.__setattr__(self, 'args', tuple(args))

    def nargs(self):
        return len(self.args)

    def __eq__(self, other):
        if other.__class__ is Call:
            return self.op == other.op and self.args == other.args
        return NotImplemented

    def __hash__(self):
        return hash((self.op, self.args))

    def __repr__(self):
        return f"Call({self.op!r}, {list(self.args)!r})"


def call(op, *args):
    """Shorthand for ``Call(op, args)``"""
    return Call(op, args)


def expr_type(node):
    """Return the :class:`ExprType` of ``node``

    Native numeric values are reported as constants.  Anything else
    that is not an :class:`ExpressionNode` returns None.
    """
    if node.__class__ in native_numeric_types:
        return ExprType.CONSTANT
    return getattr(node, 'expr_type', None)


def constant_value(node):
    """Return the numeric value of a constant node (or native number)"""
    if node.__class__ is Constant:
        return node.value
    return node
