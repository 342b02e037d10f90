# setup.py
from setuptools import setup, find_packages

setup(
    name="contract-validators",       # the *distribution* name on PyPI
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),  # will find contract_validators/
    python_requires=">=3.10",
    install_requires=["pandas"],      # DataFrame document sources
    description="Composable validators and dataclass-driven schema inference for JSON-like documents",
    author="Your Name",
    license="Creative Commons Attribution-NonCommercial-ShareAlike 4.0 International License",
)
