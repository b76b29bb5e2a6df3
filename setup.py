import io
import os
from os import path

from setuptools import find_packages
from setuptools import setup

MYDIR = path.abspath(os.path.dirname(__file__))


def load_version():
    filename = path.join(MYDIR, 'forwarded', 'version.py')
    globs = {}
    with io.open(filename, encoding='utf-8') as version_file:
        exec(version_file.read(), globs)
    return globs['__version__']


setup(
    name='forwarded-header',
    version=load_version(),
    description=(
        'Parse, normalize and serialize the HTTP Forwarded header (RFC 7239) '
        'and its X-Forwarded-* predecessors.'
    ),
    license='Apache-2.0',
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: Apache Software License',
        'Programming Language :: Python :: 3',
        'Topic :: Internet :: WWW/HTTP',
    ],
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    extras_require={
        'test': ['pytest'],
    },
)
