from setuptools import find_packages, setup

setup(
    name="javafetch",
    version="0.1.0",
    description="Resolve, download and cache Java runtimes from vendor release catalogs",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "requests",
        "urllib3",
        "semantic_version",
        "platformdirs",
        "PyYAML",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "javafetch=javafetch.cli:main",
        ],
    },
)
