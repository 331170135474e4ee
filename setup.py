from setuptools import setup, find_packages

setup(
    name="apply-edit",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pyyaml",
        # Interactive diff review (--review)
        "textual",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "apply-edit=apply_edit.cli:main",
        ],
    },
    description="Apply a single SEARCH/REPLACE edit to a file.",
)
