import re
from pathlib import Path

from setuptools import setup, find_packages


def read_version():
    text = (Path(__file__).parent / "src" / "rlog" / "_version.py").read_text(encoding="utf-8")
    parts = dict(re.findall(r'^(MAJOR|MINOR|PATCH) = (\d+)', text, re.M))
    return f"{parts['MAJOR']}.{parts['MINOR']}.{parts['PATCH']}"


setup(
    name="pyrlog",
    version=read_version(),
    description="Logging configured from the outside — per-file level filters, numeric trace depths, no setup code",
    author="Dustin",
    author_email="6962246+djdarcy@users.noreply.github.com",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Logging",
    ],
    python_requires=">=3.10",
)
