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

import os
import xml.etree.ElementTree as ET

import pyomo.common.unittest as unittest
from pyomo.common.enums import ObjectiveSense
from pyomo.common.tempfiles import TempfileManager

from optservices.common.errors import DimensionMismatchError, UnknownVarTypeError
from optservices.expr.nodes import VariableRef, call
from optservices.repn.vartypes import VarKind
from optservices.results.osrl import OSrLResults
from optservices.results.status import SolveOutcome
from optservices.solver.config import OSSolverConfig
from optservices.solver.model import OSiLModel
from optservices.solver.nlp import AbstractNLPEvaluator, ExpressionNLPEvaluator
from optservices.solver.ossolver import OSSolver

inf = float('inf')
x = [VariableRef(i) for i in range(3)]


class MockSolver(object):
    def __init__(self, results=None):
        self.config = OSSolverConfig()
        self.results = results
        self.calls = []

    def solve(self, model, **kwds):
        self.calls.append((model, kwds))
        return self.results


def optimal_results():
    res = OSrLResults()
    res.outcome = SolveOutcome.optimal
    res.solution = [1.0, 0.0]
    res.duals = [2.0]
    res.objective_value = 1.0
    return res


def linear_model(opt=None):
    m = OSiLModel(opt or MockSolver(optimal_results()))
    m.load_problem(
        [[1.0, 1.0]], [0.0, 0.0], [inf, inf], [1.0, 2.0], [1.0], [inf], 'min'
    )
    return m


class TestExpressionNLPEvaluator(unittest.TestCase):
    def test_abstract(self):
        with self.assertRaises(TypeError):
            AbstractNLPEvaluator()

    def test_detected_linearity(self):
        e = ExpressionNLPEvaluator(
            call('exp', x[0]), [call('*', 2, x[0]), call('sin', x[1])]
        )
        self.assertFalse(e.is_obj_linear())
        self.assertTrue(e.is_constr_linear(0))
        self.assertFalse(e.is_constr_linear(1))
        self.assertEqual(e.obj_expr(), call('exp', x[0]))
        self.assertEqual(e.constr_expr(1), call('sin', x[1]))

    def test_explicit_linearity(self):
        e = ExpressionNLPEvaluator(
            call('*', 2, x[0]),
            [call('*', 2, x[0])],
            linear_constraints=[False],
            linear_objective=False,
        )
        self.assertFalse(e.is_obj_linear())
        self.assertFalse(e.is_constr_linear(0))
        with self.assertRaisesRegex(ValueError, "one entry per constraint"):
            ExpressionNLPEvaluator(call('*', 2, x[0]), [], linear_constraints=[True])


class TestOSiLModel(unittest.TestCase):
    def test_default_solver(self):
        m = OSiLModel(solver='ipopt', warn_on_maximize=False)
        self.assertIsInstance(m.opt, OSSolver)
        self.assertEqual(m.opt.config.solver, 'ipopt')
        self.assertFalse(m.opt.config.warn_on_maximize)

    def test_configure_given_solver(self):
        opt = MockSolver()
        m = OSiLModel(opt, solver='bonmin')
        self.assertIs(m.opt, opt)
        self.assertEqual(opt.config.solver, 'bonmin')

    def test_nothing_loaded(self):
        m = OSiLModel(MockSolver())
        self.assertIsNone(m.document)
        with self.assertRaisesRegex(RuntimeError, "No problem has been loaded"):
            m.set_sense('max')
        with self.assertRaisesRegex(RuntimeError, "No problem has been loaded"):
            m.optimize()
        with self.assertRaisesRegex(RuntimeError, "call optimize"):
            m.status

    def test_load_problem(self):
        m = linear_model()
        self.assertEqual(m.num_vars, 2)
        self.assertEqual(m.num_constraints, 1)
        self.assertEqual(m.num_linear_constraints, 1)
        self.assertEqual(m.num_quadratic_constraints, 0)
        self.assertIs(m.sense, ObjectiveSense.minimize)
        self.assertEqual(m.var_types, [VarKind.continuous] * 2)
        self.assertIsNone(m.warmstart)
        self.assertIsNone(m.results)

    def test_load_nonlinear_problem(self):
        evaluator = ExpressionNLPEvaluator(
            call('^', x[0], 2),
            [call('*', 1, x[1]), call('*', 3, x[2]), call('cos', x[0])],
        )
        m = OSiLModel(MockSolver())
        m.load_nonlinear_problem(
            3, 3, [-inf] * 3, [inf] * 3, [0.0] * 3, [1.0] * 3, 'max', evaluator
        )
        self.assertEqual(m.num_vars, 3)
        self.assertEqual(m.num_constraints, 3)
        self.assertEqual(m.num_linear_constraints, 2)
        self.assertIs(m.sense, ObjectiveSense.maximize)
        nle = m.document.instance_data.find('nonlinearExpressions')
        self.assertEqual([nl.get('idx') for nl in nle], ['-1', '2'])

    def test_var_types(self):
        m = linear_model()
        m.set_var_types(['integer', VarKind.binary])
        self.assertEqual(m.var_types, [VarKind.integer, VarKind.binary])
        self.assertEqual([v.get('type') for v in m.document.vars], ['I', 'B'])
        with self.assertRaises(DimensionMismatchError):
            m.set_var_types([VarKind.integer])
        with self.assertRaises(UnknownVarTypeError):
            m.set_var_types(['integer', 'imaginary'])
        self.assertEqual(m.var_types, [VarKind.integer, VarKind.binary])

    def test_set_sense(self):
        m = linear_model()
        m.set_sense('max')
        self.assertIs(m.sense, ObjectiveSense.maximize)
        self.assertEqual(m.document.obj.get('maxOrMin'), 'max')
        with self.assertRaises(ValueError):
            m.set_sense('sideways')
        self.assertIs(m.sense, ObjectiveSense.maximize)

    def test_warmstart(self):
        m = linear_model()
        m.set_warmstart([1, 0.5])
        self.assertEqual(m.warmstart, [1.0, 0.5])
        with self.assertRaisesRegex(DimensionMismatchError, r"len\(x0\) == 2, got 3"):
            m.set_warmstart([1, 2, 3])

    def test_write(self):
        m = linear_model()
        with TempfileManager.new_context() as tempfile:
            fname = os.path.join(tempfile.mkdtemp(), 'model.osil')
            m.write(fname)
            root = ET.parse(fname).getroot()
        ns = '{os.optimizationservices.org}'
        variables = root.find(f'{ns}instanceData/{ns}variables')
        self.assertEqual(variables.get('numberOfVariables'), '2')

    def test_optimize(self):
        opt = MockSolver(optimal_results())
        m = linear_model(opt)
        self.assertIs(m.optimize(time_limit=10), SolveOutcome.optimal)
        self.assertEqual(opt.calls, [(m, {'time_limit': 10})])
        self.assertIs(m.status, SolveOutcome.optimal)
        self.assertEqual(m.solution, [1.0, 0.0])
        self.assertEqual(m.duals, [2.0])
        self.assertEqual(m.objective_value, 1.0)
        self.assertIs(m.results, opt.results)

    def test_reload_discards_results(self):
        m = linear_model()
        m.set_warmstart([0.0, 0.0])
        m.optimize()
        m.load_problem([[1.0]], [0.0], [1.0], [1.0], [0.0], [1.0], 'max')
        self.assertIsNone(m.results)
        self.assertIsNone(m.warmstart)
        self.assertEqual(m.num_vars, 1)
        self.assertIs(m.sense, ObjectiveSense.maximize)


if __name__ == '__main__':
    unittest.main()
