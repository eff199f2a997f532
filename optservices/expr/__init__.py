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

from optservices.expr.nodes import (
    ExprType,
    ExpressionNode,
    Constant,
    VariableRef,
    Call,
    call,
    expr_type,
    constant_value,
)
from optservices.expr.operators import (
    unary_operators,
    binary_operators,
    variadic_operators,
    arity_class,
)
