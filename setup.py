# setup.py
from setuptools import setup, find_packages

setup(
    name="robots_policy",
    version="0.1.0",
    description="Парсер robots.txt и движок правил доступа для краулеров",
    packages=find_packages(exclude=("tests", "tests.*")),
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
        "console_scripts": [
            "robots-policy=robots_policy.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
