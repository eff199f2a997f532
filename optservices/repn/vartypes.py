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

"""Map variable kinds to OSiL ``<var type=...>`` codes."""

from pyomo.common.enums import NamedIntEnum

from optservices.common.errors import UnknownVarTypeError


class VarKind(NamedIntEnum):
    """The kinds of decision variable a model may declare"""

    continuous = 0
    integer = 1
    binary = 2
    semiContinuous = 3
    semiInteger = 4
    # OSiL has no fixed type: written as continuous, relying on lb == ub
    fixed = 5

    def __str__(self):
        return self.name


osil_var_types = {
    VarKind.continuous: 'C',
    VarKind.integer: 'I',
    VarKind.binary: 'B',
    VarKind.semiContinuous: 'D',
    VarKind.semiInteger: 'J',
    VarKind.fixed: 'C',
}


def osil_var_type(kind):
    """Return the single-character OSiL type code for ``kind``

    ``kind`` may be a :class:`VarKind` member or the name of one.
    """
    try:
        return osil_var_types[VarKind(kind)]
    except (ValueError, KeyError):
        raise UnknownVarTypeError(kind) from None
