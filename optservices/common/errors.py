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

from pyomo.common.errors import ApplicationError, PyomoException, format_exception


class OSServicesError(PyomoException):
    """
    Exception class for other optservices exceptions to inherit from,
    allowing translation errors to be caught in a general way.
    """


class ShapeError(OSServicesError, ValueError):
    """
    An expression or linear term does not match the canonical form
    required at the point where it was encountered.
    """


class UnknownOperatorError(OSServicesError, ValueError):
    """
    An operator token has no OSnL counterpart for the number of
    arguments it was called with.
    """

    def __init__(self, op, arity):
        self.op = op
        self.arity = arity
        super().__init__(
            f"Do not know how to convert {arity} operator {op!r} to OSnL"
        )


class UnknownStatusError(OSServicesError, ValueError):
    """An OSrL solution status type that is not recognized."""

    def __init__(self, status_type):
        self.status_type = status_type
        super().__init__(f"Unknown solution status type {status_type!r}")


class UnknownVarTypeError(OSServicesError, ValueError):
    """A variable kind that has no OSiL type code."""

    def __init__(self, kind):
        self.kind = kind
        super().__init__(f"Unrecognized variable type {kind!r}")


class DimensionMismatchError(OSServicesError, ValueError):
    """
    Caller-supplied arrays (or counts reported by the solver) disagree
    in length, or an index falls outside the declared dimension.
    """


class OSrLReadError(OSServicesError, ValueError):
    """The results document could not be parsed or is structurally invalid."""


class OSSolverError(OSServicesError, ApplicationError):
    """
    The OSSolverService process could not be run or exited with an error.

    The captured solver output (if any) is available as ``log``.
    """

    def __init__(self, msg, log=None):
        self.log = log
        if log:
            msg = format_exception(
                msg, epilog="Solver output:\n" + log.rstrip(), exception=self
            )
        super().__init__(msg)


def check_dimension(what, expected, received):
    """Raise :class:`DimensionMismatchError` unless ``expected == received``"""
    if expected != received:
        raise DimensionMismatchError(
            f"Expected {what} == {expected!r}, got {received!r}"
        )


def check_index(what, idx, n):
    """Raise :class:`DimensionMismatchError` unless ``0 <= idx < n``"""
    if idx < 0 or idx >= n:
        raise DimensionMismatchError(f"{what} {idx!r} is out of range [0, {n})")
