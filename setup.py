import glob

from setuptools import find_packages
from setuptools import setup

import stategraph

setup(
    name="stategraph",
    version=stategraph.__version__,
    provides=['stategraph'],
    author="Yelp",
    author_email="yelplabs@yelp.com",
    description='Render hierarchical state machines as graphviz diagrams',
    classifiers=[
        "Programming Language :: Python",
        'Programming Language :: Python :: 3',
        "Operating System :: OS Independent",
        "License :: OSI Approved :: Apache Software License",
        "Topic :: Software Development :: Documentation",
        "Intended Audience :: Developers",
        "Development Status :: 4 - Beta",
    ],
    packages=find_packages(exclude=['tests.*', 'tests']),
    scripts=[
        path for path in glob.glob('stategraph/bin/*.py')
        if not path.endswith('__init__.py')
    ],
    install_requires=[
        'pyrsistent',
        'PyYAML',
    ],
    extras_require={
        'test': ['pytest'],
    },
    python_requires='>=3.6',
    include_package_data=True,
    long_description="""
stategraph draws the structure of a hierarchical state machine: states,
nested super states, transitions with their triggers, actions and guards, and
decision nodes. It writes graphviz dot text, which `dot` turns into a diagram.
""",
)
