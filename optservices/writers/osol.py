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

"""Write (and read back) OSoL (Optimization Services option Language) files.

The OSoL file carries the warm start point and any solver options.
Every initial value is written, including zeros.
"""

import xml.etree.ElementTree as ET
from collections.abc import Mapping

from optservices.common.errors import OSrLReadError
from optservices.common.osxml import create_root, find_child, new_child, write_document
from optservices.repn.vector import dense_to_xml, nan, xml_to_dense


def _option_items(options):
    if options is None:
        return []
    if isinstance(options, Mapping):
        return list(options.items())
    return list(options)


def osol_document(x0=(), options=None):
    """Build the OSoL element tree for a warm start and solver options"""
    root = create_root('osol', 'OSoL')
    optimization = new_child(root, 'optimization')
    if len(x0):
        variables = new_child(optimization, 'variables')
        init = new_child(variables, 'initialVariableValues', numberOfVar=len(x0))
        dense_to_xml(init, 'var', x0, default=None, as_attribute=True)
    items = _option_items(options)
    if items:
        solver_options = new_child(
            optimization, 'solverOptions', numberOfSolverOptions=len(items)
        )
        for name, val in items:
            new_child(solver_options, 'solverOption', name=name, value=val)
    return root


def write_osol(filename, x0=(), options=None):
    """Write the OSoL file for ``x0`` and ``options`` to ``filename``

    ``options`` may be a mapping or a sequence of ``(name, value)``
    pairs; values are written with the same number formatting as the
    rest of the document.
    """
    return write_document(osol_document(x0, options), filename)


def read_initial_values(source, n_vars):
    """Return the dense warm start point stored in an OSoL file

    Variables without an initial value are NaN.
    """
    try:
        root = ET.parse(source).getroot()
    except ET.ParseError as e:
        raise OSrLReadError(f"Could not parse OSoL document: {e}") from None
    node = root
    for tag in ('optimization', 'variables', 'initialVariableValues'):
        node = find_child(node, tag)
        if node is None:
            return [nan] * n_vars
    return xml_to_dense(node, n_vars)
