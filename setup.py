#!/usr/bin/env python3

# python setup.py sdist --format=zip,gztar

import sys
import importlib.util

from setuptools import setup, find_packages

MIN_PYTHON_VERSION = "3.8.0"
_min_python_version_tuple = tuple(map(int, (MIN_PYTHON_VERSION.split("."))))


if sys.version_info[:3] < _min_python_version_tuple:
    sys.exit("Error: ecgdsa requires Python version >= %s..." % MIN_PYTHON_VERSION)

with open('contrib/requirements/requirements.txt') as f:
    requirements = f.read().splitlines()

# load version.py; needlessly complicated alternative to "imp.load_source":
version_spec = importlib.util.spec_from_file_location('version', 'ecgdsa/version.py')
version_module = version = importlib.util.module_from_spec(version_spec)
version_spec.loader.exec_module(version_module)

extras_require = {
    'tests': ['pytest'],
}


setup(
    name="ecgdsa",
    version=version.ECGDSA_VERSION,
    python_requires='>={}'.format(MIN_PYTHON_VERSION),
    install_requires=requirements,
    extras_require=extras_require,
    packages=(['ecgdsa',]
              + [('ecgdsa.'+pkg) for pkg in
                 find_packages('ecgdsa', exclude=["tests"])]),
    package_dir={
        'ecgdsa': 'ecgdsa'
    },
    include_package_data=True,
    scripts=['ecgdsa/ecgdsa-keytool'],
    description="EC-GDSA key encoding (PKIX, PKCS#8, PEM)",
    license="MIT Licence",
    long_description="""PKIX and PKCS#8 encoding of EC-GDSA public and private keys""",
)
