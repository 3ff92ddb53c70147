#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="normpost",
    version="0.1.0",
    description="Closed-form normal-mean posterior updates with sampling diagnostics",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",

    # this will find the normpost/ package (and any subpackages),
    # but exclude tests, examples, etc.
    packages=find_packages(exclude=["tests*", "examples*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
        "pandas>=1.5",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
        "test": [
            "pytest",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    include_package_data=False,
)
