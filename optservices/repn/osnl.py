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

"""Compile symbolic expression trees into OSnL node trees.

OSnL is the nonlinear expression language embedded in OSiL documents
(the ``<nl>`` children of ``<nonlinearExpressions>``).  The compiler is
a straightforward recursive walk: every call appends exactly one new
element to the parent it was given and returns that element.

Binary calls go through a dispatch table keyed on the
:class:`~optservices.expr.nodes.ExprType` of both operands so that the
handful of OSnL shortcuts (``square``, ``variable`` with a ``coef``) are
selected explicitly for each operand pairing.
"""

from optservices.common.errors import ShapeError, UnknownOperatorError, check_index
from optservices.common.osxml import new_child, set_attribute
from optservices.expr.nodes import ExprType, expr_type, constant_value
from optservices.expr.operators import (
    BINARY,
    DIVISION_OPERATORS,
    POWER_OPERATORS,
    PRODUCT_OPERATORS,
    arity_class,
    operator_tables,
)

_CONSTANT = ExprType.CONSTANT
_VARIABLE = ExprType.VARIABLE
_CALL = ExprType.CALL


#
# Binary operator handlers.  All handlers share the signature
# (compiler, parent, op, tag, arg1, arg2) and return the new element.
#


def _handle_binary_generic(compiler, parent, op, tag, arg1, arg2):
    child = new_child(parent, tag)
    compiler.compile(child, arg1)
    compiler.compile(child, arg2)
    return child


def _handle_binary_variable_constant(compiler, parent, op, tag, arg1, arg2):
    val = constant_value(arg2)
    if op in POWER_OPERATORS and val == 2:
        return _square(compiler, parent, arg1)
    if op in PRODUCT_OPERATORS:
        child = compiler.compile(parent, arg1)
        set_attribute(child, 'coef', val)
        return child
    # x / 0 has no finite coefficient: fall through to the generic form
    if op in DIVISION_OPERATORS and val:
        child = compiler.compile(parent, arg1)
        set_attribute(child, 'coef', 1 / val)
        return child
    return _handle_binary_generic(compiler, parent, op, tag, arg1, arg2)


def _handle_binary_call_constant(compiler, parent, op, tag, arg1, arg2):
    if op in POWER_OPERATORS and constant_value(arg2) == 2:
        return _square(compiler, parent, arg1)
    return _handle_binary_generic(compiler, parent, op, tag, arg1, arg2)


def _handle_binary_constant_variable(compiler, parent, op, tag, arg1, arg2):
    if op in PRODUCT_OPERATORS:
        child = compiler.compile(parent, arg2)
        set_attribute(child, 'coef', constant_value(arg1))
        return child
    return _handle_binary_generic(compiler, parent, op, tag, arg1, arg2)


def _square(compiler, parent, base):
    child = new_child(parent, 'square')
    compiler.compile(child, base)
    return child


def define_binary_handlers(handlers=None):
    if handlers is None:
        handlers = {}
    for j in (_CONSTANT, _VARIABLE, _CALL):
        for k in (_CONSTANT, _VARIABLE, _CALL):
            handlers[j, k] = _handle_binary_generic
    handlers[_VARIABLE, _CONSTANT] = _handle_binary_variable_constant
    handlers[_CALL, _CONSTANT] = _handle_binary_call_constant
    handlers[_CONSTANT, _VARIABLE] = _handle_binary_constant_variable
    return handlers


class OSnLCompiler(object):
    """Translate expression trees into OSnL elements

    Parameters
    ----------
    n_vars: int, optional
        The number of variables in the model.  If provided, every
        :class:`~optservices.expr.nodes.VariableRef` is checked to lie
        in ``[0, n_vars)``.

    """

    binary_handlers = define_binary_handlers()

    def __init__(self, n_vars=None):
        self.n_vars = n_vars

    def compile(self, parent, expr):
        """Append the OSnL form of ``expr`` to ``parent`` and return it"""
        _type = expr_type(expr)
        if _type is _CALL:
            return self._compile_call(parent, expr)
        elif _type is _VARIABLE:
            if self.n_vars is not None:
                check_index('Variable index', expr.idx, self.n_vars)
            return new_child(parent, 'variable', idx=expr.idx)
        elif _type is _CONSTANT:
            return new_child(parent, 'number', value=constant_value(expr))
        raise ShapeError(
            f"Do not know how to handle expression {expr!r} "
            f"of type {type(expr).__name__}"
        )

    def _compile_call(self, parent, expr):
        args = expr.args
        table = arity_class(len(args))
        if table is None:
            raise ShapeError(
                f"Do not know how to handle call expression {expr!r} "
                "with no arguments"
            )
        tag = operator_tables[table].get(expr.op)
        if tag is None:
            raise UnknownOperatorError(expr.op, table)
        if table is BINARY:
            arg1, arg2 = args
            handler = self.binary_handlers.get(
                (expr_type(arg1), expr_type(arg2)), _handle_binary_generic
            )
            return handler(self, parent, expr.op, tag, arg1, arg2)
        child = new_child(parent, tag)
        for arg in args:
            self.compile(child, arg)
        return child


def expr_to_osnl(parent, expr, n_vars=None):
    """Append the OSnL form of ``expr`` to ``parent`` and return it"""
    return OSnLCompiler(n_vars).compile(parent, expr)
