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


def test_default_marker_is_registered(pytestconfig):
    markers = [line.split(':', 1)[0] for line in pytestconfig.getini('markers')]
    assert 'default' in markers
    assert 'solver(name)' in markers


def test_unmarked_tests_get_default_marker(request):
    assert request.node.get_closest_marker('default') is not None
    assert request.node.get_closest_marker('solver') is None
