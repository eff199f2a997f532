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

import math
import os
import xml.etree.ElementTree as ET
from io import StringIO

import pyomo.common.unittest as unittest
from pyomo.common.tempfiles import TempfileManager

from optservices.common.errors import OSrLReadError
from optservices.writers.osol import osol_document, read_initial_values, write_osol


def tostr(elem):
    return ET.tostring(elem, encoding='unicode')


class TestOSoLWriter(unittest.TestCase):
    def test_empty(self):
        root = osol_document()
        self.assertEqual(root.tag, 'osol')
        self.assertEqual(tostr(root.find('optimization')), '<optimization />')

    def test_initial_values_keep_zeros(self):
        root = osol_document([0.0, 1.5, 0])
        self.assertEqual(
            tostr(root.find('optimization')),
            '<optimization><variables>'
            '<initialVariableValues numberOfVar="3">'
            '<var idx="0" value="0.0" /><var idx="1" value="1.5" />'
            '<var idx="2" value="0" />'
            '</initialVariableValues></variables></optimization>',
        )

    def test_solver_options(self):
        root = osol_document(
            options={'max_iter': 100, 'tol': 1e-8, 'mu_strategy': 'adaptive'}
        )
        self.assertEqual(
            tostr(root.find('optimization')),
            '<optimization><solverOptions numberOfSolverOptions="3">'
            '<solverOption name="max_iter" value="100" />'
            '<solverOption name="tol" value="1e-08" />'
            '<solverOption name="mu_strategy" value="adaptive" />'
            '</solverOptions></optimization>',
        )

    def test_option_pairs(self):
        root = osol_document([2.0], [('print_level', 0)])
        opt = root.find('optimization')
        self.assertEqual(
            [child.tag for child in opt], ['variables', 'solverOptions']
        )
        self.assertEqual(
            tostr(opt.find('solverOptions')),
            '<solverOptions numberOfSolverOptions="1">'
            '<solverOption name="print_level" value="0" /></solverOptions>',
        )

    def test_write_and_read(self):
        with TempfileManager.new_context() as tempfile:
            fname = os.path.join(tempfile.mkdtemp(), 'test.osol')
            self.assertEqual(write_osol(fname, [0.0, -2.5, float('inf')]), fname)
            with open(fname) as FILE:
                text = FILE.read()
            x0 = read_initial_values(fname, 3)
        self.assertIn('xmlns="os.optimizationservices.org"', text)
        self.assertEqual(x0, [0.0, -2.5, float('inf')])

    def test_read_missing_values(self):
        x0 = read_initial_values(StringIO('<osol><optimization/></osol>'), 2)
        self.assertEqual(len(x0), 2)
        self.assertTrue(all(math.isnan(v) for v in x0))

    def test_read_partial_values(self):
        x0 = read_initial_values(
            StringIO(
                '<osol xmlns="os.optimizationservices.org"><optimization>'
                '<variables><initialVariableValues numberOfVar="1">'
                '<var idx="1" value="3"/></initialVariableValues></variables>'
                '</optimization></osol>'
            ),
            2,
        )
        self.assertTrue(math.isnan(x0[0]))
        self.assertEqual(x0[1], 3.0)

    def test_read_unparseable(self):
        with self.assertRaisesRegex(OSrLReadError, "Could not parse OSoL document"):
            read_initial_values(StringIO('<osol>'), 1)


if __name__ == '__main__':
    unittest.main()
