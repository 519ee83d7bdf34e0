#!/usr/bin/env python3
"""Setup script for WidgetDesk."""

from setuptools import find_packages, setup

setup(
    name="widgetdesk",
    version="0.1.0",
    description="Personal dashboard of draggable, resizable widgets",
    packages=find_packages(include=["widgetdesk", "widgetdesk.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.27",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "loguru>=0.7",
        "sqlalchemy[asyncio]>=2.0",
        "aiosqlite>=0.19",
        "asyncpg>=0.29",
        "python-jose[cryptography]>=3.3",
        "passlib[bcrypt]>=1.7.4",
        # passlib reads bcrypt.__about__, which later bcrypt releases removed
        "bcrypt==4.0.1",
        "prometheus-client>=0.19",
        "python-multipart>=0.0.9",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
            "faker>=24.0",
        ],
    },
)
