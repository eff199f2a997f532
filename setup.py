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

"""
Script to generate the installer for optservices.
"""

import os
from setuptools import setup, find_packages


def import_optservices_module(*path):
    _module_globals = dict(globals())
    _module_globals['__name__'] = None
    _source = os.path.join(os.path.dirname(__file__), *path)
    with open(_source) as _FILE:
        exec(_FILE.read(), _module_globals)
    return _module_globals


def get_version():
    # Source optservices/version/info.py to get the version number
    return import_optservices_module('optservices', 'version', 'info.py')[
        '__version__'
    ]


setup_kwargs = dict(
    name='optservices',
    version=get_version(),
    description=(
        'Translate optimization problems to the COIN-OR Optimization Services '
        'OSiL / OSoL formats and solve them with OSSolverService'
    ),
    license='BSD',
    python_requires='>=3.9',
    install_requires=['pyomo>=6.8'],
    extras_require={
        'tests': ['coverage', 'parameterized', 'pytest'],
        'optional': [
            'numpy',
            'scipy',  # sparse constraint matrices in load_problem
        ],
    },
    packages=find_packages(exclude=("scripts",)),
)


setup(**setup_kwargs)
