# setup.py
from setuptools import setup, find_packages

setup(
    name="wget_mirror",
    version="0.1.0",
    description="Recursive same-origin website mirror (wget --mirror clone)",
    packages=find_packages(include=["wget_mirror", "wget_mirror.*"]),
    install_requires=[
        "aiofiles>=23.1",
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
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
            "wget-mirror=wget_mirror.cli:cli",
            "wgetMirror=wget_mirror.cli:mirror_command",
        ],
    },
    python_requires=">=3.11",
)
