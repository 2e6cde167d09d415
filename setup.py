"""
Setup script for txfilter package

Handles package dependencies and installation configuration.
"""

from setuptools import setup, find_packages

setup(
    name="txfilter",
    version="0.1",
    description="Fluent builder for blockchain transaction filter expressions",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "web3>=7.0.0",
        "pydantic>=2.5.0",
        "loguru>=0.7.0",
        "tomli>=2.0.0",
        "hexbytes>=0.3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "tomli-w>=1.0.0",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
