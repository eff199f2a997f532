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

"""Sources of objective and constraint expressions for nonlinear problems."""

import abc

from optservices.repn.linear import is_linear_sum


class AbstractNLPEvaluator(abc.ABC):
    """
    The interface :meth:`OSiLModel.load_nonlinear_problem
    <optservices.solver.model.OSiLModel.load_nonlinear_problem>` uses to
    query a problem.  Expressions are trees of
    :mod:`optservices.expr` nodes.  Constraint expressions return the
    constraint body only; the bounds are passed separately.
    """

    @abc.abstractmethod
    def obj_expr(self):
        """Return the objective expression"""

    @abc.abstractmethod
    def constr_expr(self, row):
        """Return the body of constraint ``row``"""

    @abc.abstractmethod
    def is_obj_linear(self):
        """Return True if the objective is a canonical linear sum"""

    @abc.abstractmethod
    def is_constr_linear(self, row):
        """Return True if constraint ``row`` is a canonical linear sum"""


class ExpressionNLPEvaluator(AbstractNLPEvaluator):
    """An evaluator over explicitly supplied expression trees

    Parameters
    ----------
    objective:
        The objective expression
    constraints: Sequence
        The constraint bodies, in row order
    linear_constraints: Sequence[bool], optional
        Per-row linearity flags.  When omitted, a row is linear if it is
        a canonical linear sum.
    linear_objective: bool, optional
        Linearity of the objective (detected when omitted)
    """

    def __init__(
        self, objective, constraints=(), linear_constraints=None, linear_objective=None
    ):
        self.objective = objective
        self.constraints = list(constraints)
        if linear_constraints is None:
            linear_constraints = [is_linear_sum(expr) for expr in self.constraints]
        self.linear_constraints = list(linear_constraints)
        if len(self.linear_constraints) != len(self.constraints):
            raise ValueError(
                "linear_constraints must have one entry per constraint "
                f"({len(self.linear_constraints)} != {len(self.constraints)})"
            )
        if linear_objective is None:
            linear_objective = is_linear_sum(objective)
        self.linear_objective = bool(linear_objective)

    def obj_expr(self):
        return self.objective

    def constr_expr(self, row):
        return self.constraints[row]

    def is_obj_linear(self):
        return self.linear_objective

    def is_constr_linear(self, row):
        return self.linear_constraints[row]
