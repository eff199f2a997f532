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

from pyomo.common.enums import ObjectiveSense

from optservices.common.errors import check_dimension
from optservices.repn.vartypes import VarKind
from optservices.writers.osil import (
    as_sense,
    linear_problem_to_osil,
    nonlinear_problem_to_osil,
)


class OSiLModel(object):
    """A problem instance held as an OSiL document

    A model is loaded with either :meth:`load_problem` (linear
    problems) or :meth:`load_nonlinear_problem` (problems supplied
    through an :class:`~optservices.solver.nlp.AbstractNLPEvaluator`).
    Variable types, the objective sense and a warm start may then be
    changed before calling :meth:`optimize`, which hands the model to
    ``opt`` (an :class:`~optservices.solver.ossolver.OSSolver` by
    default) and keeps the returned results.

    Any keyword arguments are applied to the configuration of
    ``opt``.
    """

    def __init__(self, opt=None, **kwds):
        if opt is None:
            from optservices.solver.ossolver import OSSolver

            opt = OSSolver(**kwds)
        elif kwds:
            opt.config.set_value(kwds)
        self.opt = opt
        self._document = None
        self._n_vars = 0
        self._n_cons = 0
        self._n_linear = 0
        self._sense = ObjectiveSense.minimize
        self._var_types = []
        self._warmstart = None
        self._results = None

    def _reset(self, document, n_vars, n_cons, n_linear, sense):
        self._document = document
        self._n_vars = n_vars
        self._n_cons = n_cons
        self._n_linear = n_linear
        self._sense = as_sense(sense)
        self._var_types = [VarKind.continuous] * n_vars
        self._warmstart = None
        self._results = None

    def _require_document(self):
        if self._document is None:
            raise RuntimeError(
                "No problem has been loaded: call load_problem() or "
                "load_nonlinear_problem() first"
            )
        return self._document

    def _require_results(self):
        if self._results is None:
            raise RuntimeError("No results are available: call optimize() first")
        return self._results

    def load_problem(self, A, xl, xu, c, cl, cu, sense):
        """Load ``min/max c'x : cl <= Ax <= cu, xl <= x <= xu``

        ``A`` is either a dense row-major sequence of rows or a scipy
        sparse matrix.
        """
        doc = linear_problem_to_osil(A, xl, xu, c, cl, cu, sense)
        self._reset(doc, len(xl), len(cl), len(cl), sense)

    def load_nonlinear_problem(self, n_vars, n_cons, xl, xu, cl, cu, sense, evaluator):
        """Load a problem whose expressions come from ``evaluator``"""
        doc, n_linear = nonlinear_problem_to_osil(
            n_vars, n_cons, xl, xu, cl, cu, sense, evaluator
        )
        self._reset(doc, n_vars, n_cons, n_linear, sense)

    def set_var_types(self, kinds):
        self._require_document().set_var_types(kinds)
        self._var_types = [VarKind(kind) for kind in kinds]

    def set_sense(self, sense):
        self._require_document().set_sense(sense)
        self._sense = as_sense(sense)

    def set_warmstart(self, x0):
        self._require_document()
        check_dimension('len(x0)', self._n_vars, len(x0))
        self._warmstart = [float(val) for val in x0]

    def write(self, filename):
        """Write the OSiL document to ``filename``"""
        return self._require_document().write(filename)

    def optimize(self, **kwds):
        """Solve the model and return the :class:`SolveOutcome`"""
        self._require_document()
        self._results = self.opt.solve(self, **kwds)
        return self._results.outcome

    @property
    def document(self):
        return self._document

    @property
    def warmstart(self):
        return self._warmstart

    @property
    def results(self):
        return self._results

    @property
    def status(self):
        return self._require_results().outcome

    @property
    def num_vars(self):
        return self._n_vars

    @property
    def num_constraints(self):
        return self._n_cons

    @property
    def num_linear_constraints(self):
        return self._n_linear

    @property
    def num_quadratic_constraints(self):
        # quadratic rows are written as general nonlinear expressions
        return 0

    @property
    def sense(self):
        return self._sense

    @property
    def var_types(self):
        return list(self._var_types)

    @property
    def solution(self):
        return self._require_results().solution

    @property
    def duals(self):
        return self._require_results().duals

    @property
    def objective_value(self):
        return self._require_results().objective_value
