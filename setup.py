# setup.py
from setuptools import find_packages, setup

setup(
    name="equipment-inventory",
    version="0.1.0",
    packages=find_packages(include=["equipment_inventory", "equipment_inventory.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.29",
        "sqlalchemy[asyncio]>=2.0",
        "asyncpg>=0.29",
        "alembic>=1.13",
        "psycopg[binary]>=3.1",
        "pydantic>=2.6",
        "pydantic-settings>=2.2",
        "structlog>=24.1",
        "sentry-sdk>=1.45",
        "limits>=3.10",
        "httpx>=0.27",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "python-dotenv>=1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "equipment-inventory=equipment_inventory.client.cli:main",
        ],
    },
)
