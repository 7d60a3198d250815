#!/usr/bin/env python3
"""
Setup script for enumfactory.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text() if readme_path.exists() else ""

# Read requirements
requirements_path = Path(__file__).parent / "requirements.txt"
requirements = []
if requirements_path.exists():
    with open(requirements_path) as f:
        requirements = [
            line.strip() for line in f
            if line.strip() and not line.startswith('#')
        ]

setup(
    name="enumfactory",
    version="0.1.0",
    author="enumfactory Team",
    description="Declarative enumerations with ordinal-indexed metadata tables and safe accessors",
    long_description=long_description,
    long_description_content_type="text/markdown",

    packages=find_packages(where=".", include=["enumfactory", "enumfactory.*"]),
    package_dir={"": "."},

    python_requires=">=3.8",
    install_requires=requirements,

    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "mypy>=1.0.0",
        ],
    },

    entry_points={
        "console_scripts": [
            "enumfactory=enumfactory.cli:main",
        ],
    },

    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Code Generators",
    ],

    keywords="enum, enumeration, code-generation, lookup-table, metadata",
)
