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

import datetime
import enum
import io
import logging
import os
import re
import subprocess
import sys

from pyomo.common.enums import ObjectiveSense
from pyomo.common.log import LogStream
from pyomo.common.tee import TeeStream
from pyomo.common.tempfiles import TempfileManager

from optservices.common.errors import OSSolverError
from optservices.results.osrl import read_osrl
from optservices.results.status import SolveOutcome
from optservices.solver.config import OSSolverConfig
from optservices.solver.factory import SolverFactory
from optservices.writers.osol import write_osol

logger = logging.getLogger(__name__)

_version_re = re.compile(r'(\d+(?:\.\d+)+)')


@SolverFactory.register('os', doc='COIN-OR OSSolverService (OSiL / OSoL / OSrL files)')
class OSSolver(object):
    """Solve :class:`~optservices.solver.model.OSiLModel` instances by
    running the ``OSSolverService`` executable

    Each solve writes ``<basename>.osil`` and ``<basename>.osol`` into
    the working directory, runs::

        OSSolverService -osil <f>.osil -osol <f>.osol -osrl <f>.osrl [-solver <name>]

    and parses ``<basename>.osrl`` into an
    :class:`~optservices.results.osrl.OSrLResults`.
    """

    CONFIG = OSSolverConfig()

    class Availability(enum.IntEnum):
        FullLicense = 2
        LimitedLicense = 1
        NotFound = 0
        BadVersion = -1

        def __bool__(self):
            return self._value_ > 0

        def __format__(self, format_spec):
            return format(self.name, format_spec)

        def __str__(self):
            return self.name

    def __init__(self, **kwds):
        self._config = self.CONFIG(kwds)

    @property
    def config(self):
        return self._config

    @config.setter
    def config(self, val):
        self._config = val

    @property
    def solver_options(self):
        return self._config.solver_options

    def available(self):
        if self.config.executable.path() is None:
            return self.Availability.NotFound
        return self.Availability.FullLicense

    def version(self):
        """Return the OSSolverService version as a tuple (None if unknown)"""
        results = subprocess.run(
            [str(self.config.executable), '--version'],
            timeout=5,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            universal_newlines=True,
        )
        match = _version_re.search(results.stdout)
        if match is None:
            return None
        return tuple(int(i) for i in match.group(1).split('.'))

    def _create_command_line(self, basename, config):
        cmd = [
            str(config.executable),
            '-osil',
            basename + '.osil',
            '-osol',
            basename + '.osol',
            '-osrl',
            basename + '.osrl',
        ]
        if config.solver:
            cmd.extend(['-solver', config.solver])
        return cmd

    def solve(self, model, **kwds):
        """Solve ``model`` and return its :class:`OSrLResults`

        Keyword arguments override the solver configuration for this
        call only.
        """
        start_timestamp = datetime.datetime.now(datetime.timezone.utc)
        avail = self.available()
        if not avail:
            raise OSSolverError(f'Solver {self.__class__} is not available ({avail}).')
        config = self.config(value=kwds.pop('options', {}), preserve_implicit=True)
        config.set_value(kwds)

        if config.warn_on_maximize and model.sense == ObjectiveSense.maximize:
            logger.warning(
                "Maximization problems are currently known to be buggy with "
                "OSSolverService and MINLP solvers, see "
                "https://projects.coin-or.org/OS/ticket/52. Formulate your "
                "problem as a minimization for more reliable results."
            )

        with TempfileManager.new_context() as tempfile:
            if config.working_dir is None:
                dname = tempfile.mkdtemp()
            else:
                dname = config.working_dir
            if not os.path.exists(dname):
                os.makedirs(dname)
            basename = os.path.join(dname, config.basename)
            osrl = basename + '.osrl'
            if os.path.exists(osrl):
                # do not read back the results of an earlier solve
                os.remove(osrl)

            model.write(basename + '.osil')
            write_osol(
                basename + '.osol',
                model.warmstart or (),
                config.solver_options.value(),
            )
            cmd = self._create_command_line(basename, config)

            # give the process a moment to write its results past the limit
            if config.time_limit is not None:
                timeout = config.time_limit + min(
                    max(1.0, 0.01 * config.time_limit), 100
                )
            else:
                timeout = None

            ostreams = [io.StringIO()]
            if config.tee:
                ostreams.append(sys.stdout)
            else:
                ostreams.append(
                    LogStream(
                        level=config.log_level, logger=config.solver_output_logger
                    )
                )
            try:
                with TeeStream(*ostreams) as t:
                    process = subprocess.run(
                        cmd,
                        timeout=timeout,
                        universal_newlines=True,
                        stdout=t.STDOUT,
                        stderr=t.STDERR,
                    )
            except OSError as e:
                raise OSSolverError(f"Could not execute {cmd[0]!r}: {e}") from e
            log = ostreams[0].getvalue()

            if process.returncode != 0:
                raise OSSolverError(
                    f"OSSolverService exited with return code {process.returncode}",
                    log=log,
                )
            if not os.path.exists(osrl):
                raise OSSolverError(
                    f"OSSolverService did not write the results file {osrl!r}",
                    log=log,
                )
            results = read_osrl(osrl, model.num_vars, model.num_constraints)

        results.solver_log = log
        if not results.solver_invoked and config.solver:
            results.solver_invoked = config.solver
        if (
            config.raise_exception_on_nonoptimal_result
            and results.outcome != SolveOutcome.optimal
        ):
            raise RuntimeError(
                "Solver did not find the optimal solution "
                f"(outcome: {results.outcome}). Set "
                "opt.config.raise_exception_on_nonoptimal_result = False to "
                "bypass this error."
            )

        end_timestamp = datetime.datetime.now(datetime.timezone.utc)
        results.timing_info.start_timestamp = start_timestamp
        results.timing_info.wall_time = (
            end_timestamp - start_timestamp
        ).total_seconds()
        return results
