# setup.py
from setuptools import setup, find_packages

setup(
    name="concept_graph_engine",
    version="0.1.0",
    description="Concept graph analysis, query and layout engine",
    packages=find_packages(
        exclude=(
            "tests",
            "tests.*",
            "docs",
            "build",
            "dist",
        )
    ),
    install_requires=[
        "numpy",
        "networkx",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.10",
)
