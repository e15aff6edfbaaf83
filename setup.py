from pathlib import Path
from setuptools import setup, find_packages


def read_readme() -> str:
    readme_path = Path(__file__).resolve().parent / "README.md"
    return readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""


setup(
    name="parab64",
    version="1.0.0",
    packages=find_packages(exclude=("tests", "tests.*", "debug")),
    install_requires=[
        "colorama>=0.4.6",
        "numpy>=1.24.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["parab64=parab64.main:main"],
    },
    python_requires=">=3.10",
    description="Parallel, order-preserving chunked base64 transcoder",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
)
