"""Setup script for imgnorm package."""

from setuptools import setup, find_packages

setup(
    name="imgnorm",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.5.0",
        "opencv-python>=4.5.0",
        "mrcfile>=1.4.0",
        "pyyaml>=6.0",
        "click>=8.0",
    ],
    extras_require={
        "tests": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "imgnorm-stats=imgnorm.cli.stats:main",
            "imgnorm-convert=imgnorm.cli.convert:main",
        ],
    },
)
