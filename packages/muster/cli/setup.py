from setuptools import find_namespace_packages, setup

# Physical structure matches import path: packages/muster/cli -> muster.cli
packages = find_namespace_packages(where="../..", include=["muster.cli", "muster.cli.*"])

setup(
    name="muster-cli",
    packages=packages,
    package_dir={"": "../.."},
    install_requires=["muster-core", "rich>=13.0"],
    entry_points={"console_scripts": ["muster = muster.cli.main:main"]},
)
