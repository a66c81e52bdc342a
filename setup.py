from pathlib import Path
import re

from setuptools import setup, find_packages

PACKAGE_ROOT = Path(__file__).parent / "implementation" / "python"

# Read the version without importing the package (its dependencies may not be installed yet)
__version__ = re.search(
    r'^__version__ = "([^"]+)"',
    (PACKAGE_ROOT / "growseq" / "version.py").read_text(encoding="utf-8"),
    re.MULTILINE,
).group(1)

setup(
    name="growseq",
    version=__version__,
    package_dir={"": "implementation/python"},
    packages=find_packages(where="implementation/python", include=["growseq", "growseq.*"]),
    install_requires=[
        "typer>=0.9.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "hypothesis>=6.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "growseq=growseq.main:app",
        ],
    },
    python_requires=">=3.9",
)
