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

"""Classify OSrL solution status strings.

OS solvers report a ``<status type="...">`` for every solution, plus an
optional free-text ``description``.  The ``type`` vocabulary is wider
than what callers need, and some solvers (Bonmin, Couenne) report an
exceeded limit only through the description, so both are consulted.
"""

import enum
import logging

from optservices.common.errors import UnknownStatusError

logger = logging.getLogger(__name__)


class SolveOutcome(enum.Enum):
    """
    The canonical outcome of one solve.

    Attributes
    ----------
    optimal
        The solver reports an optimal (global or local) solution.
    infeasible
        The problem was found to be infeasible.
    unbounded
        The problem was found to be unbounded.
    userLimit
        The solver stopped on a limit (time, iterations, nodes, ...).
    error
        Anything else, including statuses whose meaning is uncertain.
    """

    optimal = 'Optimal'
    infeasible = 'Infeasible'
    unbounded = 'Unbounded'
    userLimit = 'UserLimit'
    error = 'Error'

    def __str__(self):
        return self.value


solution_status_map = {
    'unbounded': SolveOutcome.unbounded,
    'globallyOptimal': SolveOutcome.optimal,
    'locallyOptimal': SolveOutcome.optimal,
    'optimal': SolveOutcome.optimal,
    # feasible but unproven: report conservatively
    'bestSoFar': SolveOutcome.error,
    'feasible': SolveOutcome.error,
    'infeasible': SolveOutcome.infeasible,
    'unsure': SolveOutcome.error,
    'error': SolveOutcome.error,
    # OSBonminSolver and OSCouenneSolver report LIMIT_EXCEEDED as 'other'
    'other': SolveOutcome.error,
    'stoppedByLimit': SolveOutcome.userLimit,
    'stoppedByBounds': SolveOutcome.error,
    # misspelled variants emitted by some OSIpoptSolver / OSBonminSolver builds
    'IpoptAccetable': SolveOutcome.optimal,
    'BonminAccetable': SolveOutcome.optimal,
    'BonminAcceptable': SolveOutcome.optimal,
    'IpoptAcceptable': SolveOutcome.optimal,
}

LIMIT_PREFIX = 'LIMIT'


def normalize_status(status_type, description=None):
    """Map an OSrL status ``type`` (and ``description``) to a :class:`SolveOutcome`

    Raises
    ------
    UnknownStatusError
        If ``status_type`` is not a recognized OSrL status.
    """
    try:
        outcome = solution_status_map[status_type]
    except (KeyError, TypeError):
        raise UnknownStatusError(status_type) from None
    if (
        description
        and description.startswith(LIMIT_PREFIX)
        and outcome is not SolveOutcome.userLimit
    ):
        logger.warning(
            "OSrL status was '%s' but the description was:\n    %s\n"
            "Reporting the outcome as %s instead of %s.",
            status_type,
            description,
            SolveOutcome.userLimit,
            outcome,
        )
        outcome = SolveOutcome.userLimit
    return outcome
