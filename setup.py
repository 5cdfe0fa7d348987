#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup script for Insulcalc

Thermal insulation sizing engine: surface heat transfer coefficients,
insulated heat loss and condensation-safe insulation thickness.
"""

from setuptools import setup, find_packages
from pathlib import Path

VERSION = "1.0.0"

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
if readme_file.exists():
    long_description = readme_file.read_text(encoding="utf-8")
else:
    long_description = "Thermal insulation sizing engine for pipes and sheets"

setup(
    name="insulcalc",
    version=VERSION,
    description="Thermal insulation sizing engine - heat loss and condensation avoidance",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["insulcalc", "insulcalc.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.5.0",
        "prometheus-client>=0.19.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "pytest-cov>=4.1.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    keywords="insulation heat-loss condensation dew-point thermal",
)
