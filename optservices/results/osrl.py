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

"""Read OSrL (Optimization Services result Language) documents.

Only the first ``<solution>`` is decoded; OSSolverService returns
exactly one for the solvers it drives, and anything else is reported as
a warning.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional

from pyomo.common.config import (
    ADVANCED_OPTION,
    ConfigDict,
    ConfigValue,
    In,
    NonNegativeFloat,
    NonNegativeInt,
)

from optservices.common.errors import OSrLReadError, check_dimension
from optservices.common.osxml import find_child, localname, str2val
from optservices.repn.vector import xml_to_dense
from optservices.results.status import SolveOutcome, normalize_status

logger = logging.getLogger(__name__)


class OSrLResults(ConfigDict):
    """
    Attributes
    ----------
    outcome: SolveOutcome
        The normalized outcome of the solve.
    status_type: str
        The raw ``type`` of the solution ``<status>``.
    status_description: str
        The raw ``description`` of the solution ``<status>`` (if any).
    objective_value: float
        The objective value of the reported solution.
    solution: list
        Dense primal values (NaN for variables the solver did not report).
    duals: list
        Dense constraint dual values, if the solver returned them.
    general_status: str
        The ``type`` of the ``<general>/<generalStatus>`` element.
    message: str
        Any message returned by the solver service.
    solver_invoked: str
        The solver reported as invoked by the service.
    timing_info: ConfigDict
        Wall time for the solve (filled in by the solver interface).
    solver_log: str
        (ADVANCED OPTION) The captured solver output.
    """

    def __init__(
        self,
        description=None,
        doc=None,
        implicit=False,
        implicit_domain=None,
        visibility=0,
    ):
        super().__init__(
            description=description,
            doc=doc,
            implicit=implicit,
            implicit_domain=implicit_domain,
            visibility=visibility,
        )

        self.outcome: SolveOutcome = self.declare(
            'outcome',
            ConfigValue(
                domain=In(SolveOutcome),
                default=SolveOutcome.error,
                description="The normalized outcome of the solve.",
            ),
        )
        self.status_type: Optional[str] = self.declare(
            'status_type',
            ConfigValue(domain=str, description="The raw OSrL solution status type."),
        )
        self.status_description: Optional[str] = self.declare(
            'status_description',
            ConfigValue(
                domain=str, description="The raw OSrL solution status description."
            ),
        )
        self.objective_value: Optional[float] = self.declare(
            'objective_value',
            ConfigValue(
                domain=float,
                default=None,
                description="The objective value of the reported solution.",
            ),
        )
        self.solution: Optional[List[float]] = self.declare(
            'solution',
            ConfigValue(default=None, description="Dense primal solution values."),
        )
        self.duals: Optional[List[float]] = self.declare(
            'duals',
            ConfigValue(default=None, description="Dense constraint dual values."),
        )
        self.number_of_variables: Optional[int] = self.declare(
            'number_of_variables', ConfigValue(domain=NonNegativeInt)
        )
        self.number_of_constraints: Optional[int] = self.declare(
            'number_of_constraints', ConfigValue(domain=NonNegativeInt)
        )
        self.number_of_solutions: Optional[int] = self.declare(
            'number_of_solutions', ConfigValue(domain=NonNegativeInt)
        )
        self.general_status: Optional[str] = self.declare(
            'general_status', ConfigValue(domain=str)
        )
        self.message: Optional[str] = self.declare(
            'message',
            ConfigValue(domain=str, description="Messages returned by the service."),
        )
        self.solver_invoked: Optional[str] = self.declare(
            'solver_invoked', ConfigValue(domain=str)
        )
        self.timing_info: ConfigDict = self.declare(
            'timing_info', ConfigDict(implicit=True)
        )
        self.timing_info.wall_time: Optional[float] = self.timing_info.declare(
            'wall_time',
            ConfigValue(
                domain=NonNegativeFloat,
                description="Elapsed wall clock time for the solver process.",
            ),
        )
        self.solver_log: Optional[str] = self.declare(
            'solver_log',
            ConfigValue(
                domain=str,
                default=None,
                visibility=ADVANCED_OPTION,
                description="Any solver log messages.",
            ),
        )


def _int_attribute(elem, name):
    val = elem.attrib.get(name)
    if val is None:
        raise OSrLReadError(
            f"OSrL element <{localname(elem.tag)}> is missing the '{name}' attribute"
        )
    try:
        return int(val)
    except ValueError:
        raise OSrLReadError(
            f"OSrL attribute {name}={val!r} is not an integer"
        ) from None


def _required_child(elem, tag):
    child = find_child(elem, tag)
    if child is None:
        raise OSrLReadError(
            f"OSrL element <{localname(elem.tag)}> has no <{tag}> element"
        )
    return child


def _read_general(general, results):
    status = find_child(general, 'generalStatus')
    if status is not None:
        results.general_status = status.attrib.get('type')
        if results.message is None and status.attrib.get('description'):
            results.message = status.attrib['description']
    for tag, attr in (('message', 'message'), ('solverInvoked', 'solver_invoked')):
        child = find_child(general, tag)
        if child is not None and child.text:
            results[attr] = child.text.strip()


def read_osrl(source, n_vars=None, n_cons=None, results=None):
    """Parse an OSrL document and return an :class:`OSrLResults`

    Parameters
    ----------
    source: str or file-like
        The OSrL file to read.

    n_vars: int, optional
        The number of variables sent to the solver.  The document must
        report the same number.

    n_cons: int, optional
        The number of constraints sent to the solver.  The document
        must report the same number.

    results: OSrLResults, optional
        An existing results object to populate.

    """
    if results is None:
        results = OSrLResults()
    try:
        root = ET.parse(source).getroot()
    except ET.ParseError as e:
        raise OSrLReadError(f"Could not parse OSrL document: {e}") from e

    general = find_child(root, 'general')
    if general is not None:
        _read_general(general, results)

    optimization = find_child(root, 'optimization')
    if optimization is None:
        if results.general_status == 'error':
            raise OSrLReadError(
                f"The solver service reported an error: {results.message}"
            )
        raise OSrLReadError("OSrL document has no <optimization> element")

    results.number_of_variables = _int_attribute(optimization, 'numberOfVariables')
    results.number_of_constraints = _int_attribute(
        optimization, 'numberOfConstraints'
    )
    if n_vars is None:
        n_vars = results.number_of_variables
    else:
        check_dimension('numberOfVariables', n_vars, results.number_of_variables)
    if n_cons is None:
        n_cons = results.number_of_constraints
    else:
        check_dimension('numberOfConstraints', n_cons, results.number_of_constraints)

    n_soln = optimization.attrib.get('numberOfSolutions')
    if n_soln != '1':
        logger.warning("numberOfSolutions expected to be 1, was %s", n_soln)
    if n_soln is not None and n_soln.isdigit():
        results.number_of_solutions = int(n_soln)

    solution = _required_child(optimization, 'solution')
    status = _required_child(solution, 'status')
    results.status_type = status.attrib.get('type')
    results.status_description = status.attrib.get('description')
    results.outcome = normalize_status(
        results.status_type, results.status_description
    )
    message = find_child(solution, 'message')
    if message is not None and message.text:
        results.message = message.text.strip()

    variables = find_child(solution, 'variables')
    values = None if variables is None else find_child(variables, 'values')
    if values is not None:
        if 'numberOfVar' in values.attrib:
            check_dimension(
                'numberOfVar', n_vars, _int_attribute(values, 'numberOfVar')
            )
        results.solution = xml_to_dense(values, n_vars)

    objectives = find_child(solution, 'objectives')
    objvalues = None if objectives is None else find_child(objectives, 'values')
    if objvalues is not None:
        n_obj = objvalues.attrib.get('numberOfObj')
        if n_obj != '1':
            logger.warning("numberOfObj expected to be 1, was %s", n_obj)
        obj = find_child(objvalues, 'obj')
        if obj is not None and obj.text:
            try:
                results.objective_value = str2val(obj.text)
            except ValueError:
                raise OSrLReadError(
                    f"Could not parse objective value {obj.text!r}"
                ) from None

    constraints = find_child(solution, 'constraints')
    duals = None if constraints is None else find_child(constraints, 'dualValues')
    if duals is not None:
        results.duals = xml_to_dense(duals, n_cons)

    return results
