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

"""Small helpers shared by the OSiL / OSoL writers and the OSrL reader.

All three documents live in the ``os.optimizationservices.org``
namespace.  Documents are built with :mod:`xml.etree.ElementTree` using
plain (un-prefixed) tag names and an explicit ``xmlns`` attribute on the
root, which is what OSSolverService expects to read back.
"""

import math
import xml.etree.ElementTree as ET

from pyomo.common.numeric_types import native_integer_types, native_numeric_types

OS_NAMESPACE = 'os.optimizationservices.org'
XSI_NAMESPACE = 'http://www.w3.org/2001/XMLSchema-instance'
SCHEMA_URL = 'http://www.optimizationservices.org/schemas/2.0/%s.xsd'

_inf = float('inf')


def create_root(tag, schema):
    """Create the root element of an OS document

    Parameters
    ----------
    tag: str
        The root tag (``osil``, ``osol``, ``osrl``)

    schema: str
        The schema name (``OSiL``, ``OSoL``, ``OSrL``)
    """
    root = ET.Element(tag)
    root.set('xmlns', OS_NAMESPACE)
    root.set('xmlns:xsi', XSI_NAMESPACE)
    root.set('xsi:schemaLocation', f'{OS_NAMESPACE} {SCHEMA_URL % schema}')
    return root


def new_child(parent, tag, text=None, **attrs):
    child = ET.SubElement(parent, tag)
    for key, val in attrs.items():
        child.set(key, val2str(val))
    if text is not None:
        child.text = val2str(text)
    return child


def set_attribute(elem, name, val):
    elem.set(name, val2str(val))


def val2str(val):
    """Render a value the way OS documents spell numbers"""
    if val.__class__ is str:
        return val
    if val.__class__ in native_integer_types:
        return str(int(val))
    if val.__class__ in native_numeric_types:
        val = float(val)
        if val == _inf:
            return 'INF'
        if val == -_inf:
            return '-INF'
        if math.isnan(val):
            return 'NaN'
        return repr(val)
    return str(val)


def str2val(text):
    """Parse a number as written in an OS document"""
    text = text.strip()
    if text in ('INF', 'Infinity', 'inf'):
        return _inf
    if text in ('-INF', '-Infinity', '-inf'):
        return -_inf
    if text == 'NaN':
        return float('nan')
    return float(text)


def localname(tag):
    """Strip any ``{namespace}`` prefix from an ElementTree tag"""
    if tag[:1] == '{':
        return tag.rsplit('}', 1)[1]
    return tag


def find_child(elem, tag):
    """Return the first direct child named ``tag`` (in any namespace)"""
    for child in elem:
        if localname(child.tag) == tag:
            return child
    return None


def find_children(elem, tag):
    return [child for child in elem if localname(child.tag) == tag]


def write_document(root, filename):
    """Write an element tree to ``filename`` with an XML declaration"""
    ET.indent(root, space="  ")
    ET.ElementTree(root).write(filename, encoding='UTF-8', xml_declaration=True)
    return filename
