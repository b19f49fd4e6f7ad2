#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- encoding: utf-8 -*-

from setuptools import find_packages
from setuptools import setup

setup(
    name="notarius",
    version="0.0.0",
    license="GPL-3.0-or-later",
    description="steno stroke to text translation",
    long_description="Turns a stream of steno strokes into text, with undo and retroactive corrections.",
    author="Rose Davidson",
    author_email="rose@metaclassical.com",
    packages=find_packages("src"),
    package_dir={"": "src"},
    package_data={"notarius.translation": ["data/*.txt"]},
    include_package_data=True,
    zip_safe=False,
    classifiers=[
        # complete classifier list: http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Text Processing",
    ],
    keywords=["steno", "stenography", "plover"],
    python_requires=">=3.10",
    install_requires=[
        "cattrs>=22.1.0",
        "pygtrie>=2.4.2",
        "trio>=0.22.0",
        "msgspec>=0.18.0",
    ],
    extras_require={
        "test": ["pytest>=6.2.4", "pytest-trio>=0.8.0"],
    },
    setup_requires=[
        "setuptools>=30.3.0",
        "wheel",
    ],
    entry_points={
        "console_scripts": [
            "notarius-translate = notarius.scripts:translate_cli",
            "notarius-lookup = notarius.scripts:lookup_cli",
        ],
    },
)
