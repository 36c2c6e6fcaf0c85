#!/usr/bin/env python3

from setuptools import setup, find_packages

with open("requirements.txt", "r") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith("#")]

with open("README.md", "r") as f:
    long_description = f.read()

setup(
    name="flowsandbox",
    version="0.1.0",
    author="FlowSandbox Team",
    description="An interactive 2D particle sandbox driven by a noise flow field",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["flowsandbox", "flowsandbox.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Visualization",
    ],
    entry_points={
        "console_scripts": [
            "flowsandbox=flowsandbox.main:main",
        ],
    },
)
