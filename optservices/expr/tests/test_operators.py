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

import pyomo.common.unittest as unittest

from optservices.expr.operators import (
    BINARY,
    DIVISION_OPERATORS,
    POWER_OPERATORS,
    PRODUCT_OPERATORS,
    UNARY,
    VARIADIC,
    arity_class,
    binary_operators,
    lookup,
    operator_tables,
    unary_operators,
    variadic_operators,
)


class TestOperatorTables(unittest.TestCase):
    def test_arity_class(self):
        self.assertIsNone(arity_class(0))
        self.assertEqual(arity_class(1), UNARY)
        self.assertEqual(arity_class(2), BINARY)
        self.assertEqual(arity_class(3), VARIADIC)
        self.assertEqual(arity_class(10), VARIADIC)

    def test_same_token_different_arity(self):
        self.assertEqual(lookup('-', 1), 'negate')
        self.assertEqual(lookup('-', 2), 'minus')
        self.assertIsNone(lookup('-', 3))
        self.assertEqual(lookup('+', 2), 'plus')
        self.assertEqual(lookup('+', 3), 'sum')
        self.assertEqual(lookup('*', 2), 'times')
        self.assertEqual(lookup('*', 5), 'product')
        self.assertEqual(lookup('log', 1), 'ln')
        self.assertEqual(lookup('log', 2), 'log')
        self.assertIsNone(lookup('sin', 0))
        self.assertIsNone(lookup('sin', 2))

    def test_unary_table(self):
        self.assertEqual(unary_operators['abs2'], 'square')
        self.assertEqual(unary_operators['ceil'], 'ceiling')
        self.assertEqual(unary_operators['asinh'], 'arcsinh')
        self.assertEqual(unary_operators['acsch'], 'arccsch')
        for op in ('abs', 'floor', 'exp', 'erf', 'sin', 'tanh', 'csch'):
            self.assertEqual(unary_operators[op], op)

    def test_binary_table(self):
        self.assertEqual(binary_operators['/'], 'divide')
        self.assertEqual(binary_operators['div'], 'quotient')
        self.assertEqual(binary_operators['%'], 'rem')
        self.assertEqual(binary_operators['^'], 'power')
        self.assertEqual(set(variadic_operators), {'+', '*'})

    def test_special_case_tokens(self):
        self.assertEqual(POWER_OPERATORS, {'**', '^', 'pow'})
        self.assertEqual(PRODUCT_OPERATORS, {'*'})
        self.assertEqual(DIVISION_OPERATORS, {'/'})

    def test_tables_are_read_only(self):
        self.assertIs(operator_tables[UNARY], unary_operators)
        with self.assertRaises(TypeError):
            unary_operators['sin'] = 'cos'
        with self.assertRaises(TypeError):
            operator_tables[UNARY] = {}
        self.assertEqual(unary_operators['sin'], 'sin')


if __name__ == '__main__':
    unittest.main()
