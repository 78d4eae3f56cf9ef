# setup.py
from setuptools import setup, find_packages

setup(
    name="sitecrawl",
    version="0.1.0",
    description="Asynchronous same-host web crawler SiteCrawl",
    packages=find_packages(include=["sitecrawl", "sitecrawl.*"]),
    package_data={"sitecrawl.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.0",
        "Jinja2>=3.1",
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
        "console_scripts": ["sitecrawl=sitecrawl.cli:cli"],
    },
    python_requires=">=3.11",
)
