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

import logging

from pyomo.common import Executable
from pyomo.common.config import (
    ConfigDict,
    ConfigValue,
    NonNegativeFloat,
    NonNegativeInt,
    Path,
)

logger = logging.getLogger('optservices.solver')


class OSSolverConfig(ConfigDict):
    """
    Attributes
    ----------
    executable: Executable
        The OSSolverService executable
    solver: str
        The solver OSSolverService should dispatch to (``-solver``).  An
        empty string lets the service pick its default.
    working_dir: str
        Directory for the OSiL / OSoL / OSrL files.  If None, a temporary
        directory is created and removed after the solve.
    basename: str
        Base name (without extension) of the files written to
        ``working_dir``
    tee: bool
        If True, then the solver log goes to stdout
    solver_output_logger: logging.Logger
        Logger receiving the solver log when ``tee`` is False
    log_level: int
        Level at which the solver log is sent to ``solver_output_logger``
    time_limit: float
        Wall clock limit on the OSSolverService process
    warn_on_maximize: bool
        Log a warning before solving a maximization problem
    raise_exception_on_nonoptimal_result: bool
        If True, raise a RuntimeError when the outcome is not optimal
    solver_options: ConfigDict
        Options written to the ``<solverOptions>`` section of the OSoL file
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

        self.executable = self.declare(
            'executable', ConfigValue(default=Executable('OSSolverService'))
        )
        self.solver: str = self.declare('solver', ConfigValue(domain=str, default=''))
        self.working_dir: str = self.declare(
            'working_dir', ConfigValue(domain=Path(), default=None)
        )
        self.basename: str = self.declare(
            'basename', ConfigValue(domain=str, default='problem')
        )
        self.tee: bool = self.declare('tee', ConfigValue(domain=bool, default=False))
        self.solver_output_logger = self.declare(
            'solver_output_logger', ConfigValue(default=logger)
        )
        self.log_level = self.declare(
            'log_level', ConfigValue(domain=NonNegativeInt, default=logging.INFO)
        )
        self.time_limit: float = self.declare(
            'time_limit', ConfigValue(domain=NonNegativeFloat)
        )
        self.warn_on_maximize: bool = self.declare(
            'warn_on_maximize', ConfigValue(domain=bool, default=True)
        )
        self.raise_exception_on_nonoptimal_result: bool = self.declare(
            'raise_exception_on_nonoptimal_result',
            ConfigValue(domain=bool, default=False),
        )
        self.solver_options: ConfigDict = self.declare(
            'solver_options', ConfigDict(implicit=True)
        )
