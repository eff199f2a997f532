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

# NOTE: releaselevel should be left at 'invalid' for development and set
#     to 'final' for releases.  This module is exec'ed by setup.py, so it
#     must not import anything from optservices.
major = 0
minor = 3
micro = 0
releaselevel = 'final'
serial = 0

if releaselevel == 'invalid':
    releaselevel = 'devel'

version_info = (major, minor, micro, releaselevel, serial)

__version__ = '.'.join(str(x) for x in version_info[:3])
if releaselevel.startswith('devel'):
    __version__ += ".dev%d" % (serial,)

version = __version__
if releaselevel != 'final':
    version += ' (' + releaselevel + ')'
