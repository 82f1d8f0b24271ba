# -*- coding: utf-8 -*-
"""This module contains the setup for the installation of fluxsbml."""
from sys import argv

from setuptools import find_packages, setup


setup_kwargs = dict()
setup_requirements = []
# prevent pytest-runner from being installed on every invocation
if {'pytest', 'test', 'ptr'}.intersection(argv):
    setup_requirements.append("pytest-runner")

extras = {
    "test": ["pytest"],
}
extras["all"] = sorted(set(sum(extras.values(), [])))

try:
    with open('README.rst') as handle:
        setup_kwargs["long_description"] = handle.read()
except IOError:
    setup_kwargs["long_description"] = ''

if __name__ == "__main__":
    setup(
        name="fluxsbml",
        version="0.1.0",
        package_dir={"": "src"},
        packages=find_packages("src"),
        setup_requires=setup_requirements,
        install_requires=[
            "cobra>=0.26",
            "depinfo~=1.7",
            "numpy>=1.19,<2",
            "pandas>=1.0",
            "python-libsbml>=5.19",
            "scipy>=1.2",
            "sympy>=1.0",
            "tabulate>=0.8"
        ],
        tests_require=[
            "pytest"
        ],
        extras_require=extras,
        description="fluxsbml reads and writes SBML models with the 'fbc' "
                    "package extension",
        license="MIT",
        keywords=("metabolism biology sbml fbc flux balance constraints "
                  "cobra"),
        classifiers=[
            'Development Status :: 3 - Alpha',
            'Environment :: Console',
            'Intended Audience :: Developers',
            'Intended Audience :: Science/Research',
            'License :: OSI Approved :: MIT License',
            'Operating System :: OS Independent',
            'Programming Language :: Python :: 3',
            'Programming Language :: Python :: Implementation :: CPython',
            'Topic :: Scientific/Engineering',
            'Topic :: Scientific/Engineering :: Bio-Informatics'
        ],
        python_requires='>=3.7',
        include_package_data=True,
        platforms="GNU/Linux, Mac OS X >= 10.7, Microsoft Windows >= 7",
        **setup_kwargs
    )
