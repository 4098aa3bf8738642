"""
Setup script for the JSON to TOON converter.
"""
from setuptools import setup, find_packages

setup(
    name="toon-converter",
    version="1.0.0",
    description="Convert JSON documents to Token-Oriented Object Notation (TOON)",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["config", "main"],
    install_requires=[
        "requests>=2.31.0",
        "tenacity>=8.2.3",
        "python-dotenv>=1.0.0",
        "tqdm>=4.66.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "json2toon=main:main",
        ],
    },
    python_requires=">=3.8",
)
