# setup.py
from setuptools import setup, find_packages

setup(
    name="map_scout",
    version="0.1.0",
    description="Асинхронный сборщик source maps MapScout",
    packages=find_packages(include=["map_scout", "map_scout.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["map_scout=map_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
