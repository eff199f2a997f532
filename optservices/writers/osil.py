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

"""Build OSiL (Optimization Services instance Language) documents.

:class:`OSiLDocument` holds the element tree for one problem instance
and exposes the handles (one ``<var>`` per variable, one ``<con>`` per
constraint, the single ``<obj>``) that later calls such as
:meth:`~OSiLDocument.set_var_types` update in place.

:func:`linear_problem_to_osil` and :func:`nonlinear_problem_to_osil`
populate a document from a matrix description or from an NLP
evaluator, respectively.
"""

import logging
import math
import time

from pyomo.common.dependencies import scipy, scipy_available
from pyomo.common.enums import ObjectiveSense

from optservices.common.errors import ShapeError, check_dimension
from optservices.common.osxml import (
    create_root,
    new_child,
    set_attribute,
    write_document,
)
from optservices.repn.linear import LinearAccumulator, extract_linear_sum
from optservices.repn.osnl import OSnLCompiler
from optservices.repn.vartypes import osil_var_type
from optservices.repn.vector import dense_to_sparse

logger = logging.getLogger(__name__)

_sense_aliases = {
    'min': ObjectiveSense.minimize,
    'max': ObjectiveSense.maximize,
    'Min': ObjectiveSense.minimize,
    'Max': ObjectiveSense.maximize,
}


def as_sense(sense):
    """Convert ``sense`` to an :class:`~pyomo.common.enums.ObjectiveSense`"""
    if sense in _sense_aliases:
        return _sense_aliases[sense]
    try:
        return ObjectiveSense(sense)
    except ValueError:
        raise ValueError(f"Unrecognized objective sense {sense!r}") from None


def _max_or_min(sense):
    return 'max' if as_sense(sense) == ObjectiveSense.maximize else 'min'


class OSiLDocument(object):
    """The element tree of a single OSiL problem instance

    Parameters
    ----------
    xl, xu: Sequence[float]
        Variable lower and upper bounds.  Infinite upper bounds are
        omitted; lower bounds are always written because OSiL defaults
        a missing ``lb`` to 0.

    cl, cu: Sequence[float]
        Constraint lower and upper bounds (only finite bounds are
        written).

    sense: ObjectiveSense or str
        The objective sense.

    description: str, optional
        Text for ``<instanceHeader>/<description>``.

    """

    def __init__(self, xl, xu, cl, cu, sense, description=None):
        check_dimension('len(xu)', len(xl), len(xu))
        check_dimension('len(cu)', len(cl), len(cu))
        self.n_vars = len(xl)
        self.n_cons = len(cl)

        self.root = create_root('osil', 'OSiL')
        header = new_child(self.root, 'instanceHeader')
        if description is None:
            description = time.strftime(
                "generated by optservices on %Y/%m/%d at %H:%M:%S"
            )
        new_child(header, 'description', text=description)

        self.instance_data = new_child(self.root, 'instanceData')

        variables = new_child(
            self.instance_data, 'variables', numberOfVariables=self.n_vars
        )
        self.vars = []
        for lb, ub in zip(xl, xu):
            var = new_child(variables, 'var', lb=lb)
            if math.isfinite(ub):
                set_attribute(var, 'ub', ub)
            self.vars.append(var)

        objectives = new_child(self.instance_data, 'objectives', numberOfObjectives=1)
        self.obj = new_child(objectives, 'obj', maxOrMin=_max_or_min(sense))

        constraints = new_child(
            self.instance_data, 'constraints', numberOfConstraints=self.n_cons
        )
        self.cons = []
        for lb, ub in zip(cl, cu):
            con = new_child(constraints, 'con')
            if math.isfinite(lb):
                set_attribute(con, 'lb', lb)
            if math.isfinite(ub):
                set_attribute(con, 'ub', ub)
            self.cons.append(con)

    def set_sense(self, sense):
        set_attribute(self.obj, 'maxOrMin', _max_or_min(sense))

    def set_var_types(self, kinds):
        check_dimension('number of variable types', self.n_vars, len(kinds))
        for var, kind in zip(self.vars, kinds):
            set_attribute(var, 'type', osil_var_type(kind))

    def set_objective_coefficients(self, entries):
        """Write ``(idx, coef)`` pairs as ``<coef>`` children of ``<obj>``"""
        count = 0
        for idx, val in entries:
            new_child(self.obj, 'coef', text=val, idx=idx)
            count += 1
        set_attribute(self.obj, 'numberOfObjCoef', count)
        return count

    def set_objective_constant(self, constant):
        if constant:
            set_attribute(self.obj, 'constant', constant)

    def add_linear_coefficients(self, start, index, value, column_major=True):
        """Write the ``<linearConstraintCoefficients>`` section

        ``start`` holds the offsets into ``index`` / ``value`` at which
        each column (``column_major=True``, indices are rows) or each
        row (``column_major=False``, indices are columns) begins.
        """
        check_dimension('number of coefficient values', len(index), len(value))
        lcc = new_child(
            self.instance_data,
            'linearConstraintCoefficients',
            numberOfValues=len(value),
        )
        starts = new_child(lcc, 'start')
        for offset in start:
            new_child(starts, 'el', text=offset)
        indices = new_child(lcc, 'rowIdx' if column_major else 'colIdx')
        for idx in index:
            new_child(indices, 'el', text=idx)
        values = new_child(lcc, 'value')
        for val in value:
            new_child(values, 'el', text=val)
        return lcc

    def add_nonlinear_expressions(self, expressions):
        """Write ``(idx, expr)`` pairs into ``<nonlinearExpressions>``

        Row index -1 denotes the objective.
        """
        nle = new_child(self.instance_data, 'nonlinearExpressions')
        compiler = OSnLCompiler(self.n_vars)
        count = 0
        for idx, expr in expressions:
            nl = new_child(nle, 'nl', idx=idx)
            compiler.compile(nl, expr)
            count += 1
        set_attribute(nle, 'numberOfNonlinearExpressions', count)
        return nle

    def write(self, filename):
        return write_document(self.root, filename)


def _column_major(A, n_rows, n_cols):
    """Return CSC ``(start, rowIdx, value)`` lists for ``A``"""
    if scipy_available and scipy.sparse.issparse(A):
        check_dimension('constraint matrix shape', (n_rows, n_cols), A.shape)
        A = A.tocsc().sorted_indices()
        return (
            [int(i) for i in A.indptr],
            [int(i) for i in A.indices],
            [float(v) for v in A.data],
        )
    check_dimension('number of constraint matrix rows', n_rows, len(A))
    for row in A:
        check_dimension('number of constraint matrix columns', n_cols, len(row))
    start = [0]
    index = []
    value = []
    for j in range(n_cols):
        for i, val in dense_to_sparse([row[j] for row in A]):
            index.append(i)
            value.append(float(val))
        start.append(len(index))
    return start, index, value


def linear_problem_to_osil(A, xl, xu, c, cl, cu, sense, description=None):
    """Build the OSiL document for ``min/max c'x : cl <= Ax <= cu, xl <= x <= xu``

    ``A`` may be a dense row-major sequence of rows or any scipy sparse
    matrix.
    """
    check_dimension('len(c)', len(xl), len(c))
    doc = OSiLDocument(xl, xu, cl, cu, sense, description)
    doc.set_objective_coefficients(dense_to_sparse(c))
    start, index, value = _column_major(A, len(cl), len(xl))
    if value:
        doc.add_linear_coefficients(start, index, value, column_major=True)
    return doc


def nonlinear_problem_to_osil(
    n_vars, n_cons, xl, xu, cl, cu, sense, evaluator, description=None
):
    """Build the OSiL document for a problem described by an NLP evaluator

    Linear constraints are expected to come first: rows are written as
    linear coefficients until the first row the evaluator reports as
    nonlinear, and every row from there on is written as an OSnL
    expression.

    Returns
    -------
    (OSiLDocument, int)
        The document and the number of leading linear constraints.
    """
    check_dimension('len(xl)', n_vars, len(xl))
    check_dimension('len(cl)', n_cons, len(cl))
    doc = OSiLDocument(xl, xu, cl, cu, sense, description)
    accumulator = LinearAccumulator(n_vars)

    nonlinear = []
    if evaluator.is_obj_linear():
        constant = extract_linear_sum(evaluator.obj_expr(), accumulator)
        doc.set_objective_constant(constant)
        doc.set_objective_coefficients(
            (idx, val) for idx, val in accumulator.drain() if val
        )
    else:
        doc.set_objective_coefficients(())
        nonlinear.append((-1, evaluator.obj_expr()))

    start = [0]
    index = []
    value = []
    row = 0
    while row < n_cons and evaluator.is_constr_linear(row):
        if extract_linear_sum(evaluator.constr_expr(row), accumulator):
            accumulator.clear()
            raise ShapeError(f"Unexpected constant term in linear constraint {row}")
        for idx, val in accumulator.drain():
            if not val:
                continue
            index.append(idx)
            value.append(val)
        start.append(len(index))
        row += 1
    n_linear = row
    if n_linear:
        # remaining rows are nonlinear and contribute no linear coefficients
        start.extend([len(index)] * (n_cons - n_linear))
        doc.add_linear_coefficients(start, index, value, column_major=False)

    nonlinear.extend(
        (row, evaluator.constr_expr(row)) for row in range(n_linear, n_cons)
    )
    if nonlinear:
        doc.add_nonlinear_expressions(nonlinear)
    return doc, n_linear
