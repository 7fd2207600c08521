"""
Setup script for kml

Pure Python package; the numerical work is delegated to numpy and scipy.
The package lives under python/kml.
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from python/kml/__init__.py
def get_version():
    version_file = Path("python/kml/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="kml",
    version=get_version(),
    description="Kernel matrices from composable pairwise functions",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "python"},
    packages=find_packages(where="python", include=["kml", "kml.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.21",
        "scipy>=1.7",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    zip_safe=True,
)
