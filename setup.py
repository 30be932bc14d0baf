from setuptools import setup, find_packages

setup(
    name="accessor-core",
    version="1.0.0",
    packages=find_packages(include=["accessor_core", "accessor_core.*"]),
    install_requires=[
        "pyyaml>=5.4",
        "jsonschema>=4.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    package_data={
        "accessor_core": ["schemas/*.json"],
    },
)
