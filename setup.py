# setup.py
from setuptools import setup, find_packages

setup(
    name="typegraph-validator",       # the *distribution* name on PyPI
    version="0.14.2",
    packages=find_packages(exclude=["tests", "tests.*"]),  # will find typegraph/
    install_requires=["pandas"],      # diagnostics tables (typegraph.card)
    include_package_data=True,        # so we can bundle the example schema
    package_data={
        "typegraph.schemas": ["*.json"],
    },
    entry_points={
        "console_scripts": ["typegraph-validate=typegraph.__main__:main"],
    },
    python_requires=">=3.9",
    description="Validate JSON values against a compiled schema of named types, unions and constraints",
    author="Your Name",
    license="Creative Commons Attribution-NonCommercial-ShareAlike 4.0 International License",
)
