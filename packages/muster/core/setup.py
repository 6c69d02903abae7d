from setuptools import find_namespace_packages, setup

# Physical structure matches import path: packages/muster/core -> muster.core
packages = find_namespace_packages(where="../..", include=["muster.core", "muster.core.*"])

setup(
    name="muster-core",
    packages=packages,
    package_dir={"": "../.."},
    install_requires=["pydantic>=2.5", "PyYAML>=6.0", "numpy>=1.26"],
)
