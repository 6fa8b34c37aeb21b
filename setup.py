#!/usr/bin/env python

import os
from setuptools import setup

def read(fname):
    with open(os.path.join(os.path.dirname(__file__), fname), encoding="utf-8") as fileobj:
        return fileobj.read()


setup(
    name='bookgraph',
    version='0.1.0',
    description='GraphQL API over an in-memory store of books and authors',
    long_description=read("README.rst"),
    packages=['bookgraph', 'bookgraph.graph', 'bookgraph.graphql'],
    keywords="graphql books authors",
    python_requires=">=3.8",
    install_requires=[
        "graphql-core>=3.2,<3.3",
        "flask>=2.2",
    ],
    extras_require={
        "test": ["pytest", "precisely"],
    },
    entry_points={
        "console_scripts": [
            "bookgraph-server=bookgraph.server:main",
        ],
    },
    license="BSD-2-Clause",
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
    ],
)
