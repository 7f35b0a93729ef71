#!/usr/bin/env python3
"""
chainset - Separate-chaining hash sets with fail-fast iteration
"""

from setuptools import setup

# Read long description from README
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="chainset",
    version="1.0.0",
    author="chainset Contributors",
    author_email="chainset@example.org",
    description="Separate-chaining hash sets with load-factor resizing and fail-fast iterators",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=["chainset"],
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20.0",
    ],
    extras_require={
        "bench": ["psutil>=5.8.0"],
        "test": ["pytest>=7.0"],
    },
)
