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

"""Convert between dense vectors and sparse ``(index, value)`` lists.

OS documents carry vectors (objective coefficients, initial values,
primal solutions, dual values) as lists of ``idx``-tagged elements.
Indices are zero-based on the wire, which is also the index base used
throughout optservices.
"""

import math

from optservices.common.errors import OSrLReadError, check_index
from optservices.common.osxml import new_child, str2val

nan = float('nan')


def sparse_to_dense(n, entries, default=nan):
    """Expand ``(index, value)`` pairs into a list of length ``n``

    Values for repeated indices are summed.  Indices that never appear
    keep ``default``.
    """
    ans = [default] * n
    seen = [False] * n
    for idx, val in entries:
        check_index('Index', idx, n)
        if seen[idx]:
            ans[idx] += val
        else:
            seen[idx] = True
            ans[idx] = val
    return ans


def dense_to_sparse(values, default=0.0):
    """Return the ``(index, value)`` pairs of ``values`` that differ from ``default``

    With ``default=None`` every entry is returned.
    """
    if default is None:
        return list(enumerate(values))
    if default != default:
        # NaN never compares equal: drop the NaN entries instead
        return [(i, v) for i, v in enumerate(values) if not math.isnan(v)]
    return [(i, v) for i, v in enumerate(values) if v != default]


def xml_entries(elem):
    """Yield ``(idx, value)`` for every child element of ``elem``

    The value is read from the element text, or from a ``value``
    attribute when the element has no text (as in OSoL).
    """
    for child in elem:
        try:
            idx = int(child.attrib['idx'])
        except (KeyError, ValueError):
            raise OSrLReadError(
                f"Element <{child.tag}> under <{elem.tag}> "
                "does not carry an integer 'idx' attribute"
            ) from None
        text = child.text
        if text is None or not text.strip():
            text = child.attrib.get('value')
        if text is None:
            raise OSrLReadError(
                f"Element <{child.tag} idx=\"{idx}\"> does not carry a value"
            )
        try:
            yield idx, str2val(text)
        except ValueError:
            raise OSrLReadError(
                f"Could not parse value {text!r} for <{child.tag} idx=\"{idx}\">"
            ) from None


def xml_to_dense(elem, n, default=nan):
    """Read the ``idx``-tagged children of ``elem`` into a dense list"""
    return sparse_to_dense(n, xml_entries(elem), default)


def dense_to_xml(parent, tag, values, default=0.0, as_attribute=False):
    """Write the non-default entries of ``values`` as ``tag`` children of ``parent``

    Returns the number of elements written.
    """
    count = 0
    for idx, val in dense_to_sparse(values, default):
        if as_attribute:
            new_child(parent, tag, idx=idx, value=val)
        else:
            new_child(parent, tag, text=val, idx=idx)
        count += 1
    return count
