"""Setup configuration for Swellwatch."""

from setuptools import find_packages, setup

setup(
    name="swellwatch",
    version="0.1.0",
    description="NDBC buoy report ingestion — resilient fetch, parse and unit normalization",
    python_requires=">=3.11",
    packages=find_packages(where="src", include=["swellwatch*"]),
    package_dir={"": "src"},
    install_requires=[
        "httpx>=0.27.0",
        "pydantic>=2.6.0",
        "pydantic-settings>=2.1.0",
    ],
    entry_points={
        "console_scripts": [
            "swellwatch=swellwatch.cli:cli_entry",
        ],
    },
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
            "respx>=0.21.0",
        ],
    },
)
