#!/usr/bin/env python3
"""
Setup configuration for GS1 Application Identifier Decoder
"""

from setuptools import setup, find_packages

setup(
    name="gs1-ai-decoder",
    version="1.0.0",
    author="GS1 Decoder Team",
    author_email="",
    description="Decoder for GS1-128 and GS1 DataMatrix Application Identifier payloads",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        # No external dependencies for core functionality
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "hypothesis>=6.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    keywords="gs1 barcode parser gs1-128 datamatrix gtin application-identifier",
)
