"""
Setup script for the prob_lib package.
"""

from setuptools import setup, find_packages

setup(
    name="prob_lib",
    version="0.1.0",
    description="Composable finite discrete probability distributions",
    author="RL4Finance",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    install_requires=[
        "numpy>=1.20.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    python_requires=">=3.7",
)
