# setup.py
from setuptools import setup, find_packages

install_requires = [
    # --- UI ---
    # ft.run and the ft.Icons / ft.Colors enums need the 0.70+ line
    "flet>=0.70.0,<0.85",

    # --- DATABASE & MODELS ---
    "duckdb>=0.10.0",
    "pydantic>=2.0.0",

    # --- CONFIG ---
    "python-dotenv>=1.0.0",
    "pyyaml>=6.0.0",

    # --- UTILS ---
    "httpx>=0.27.0",  # Access gate validation endpoint

    # --- TESTS---
    "pytest-asyncio==1.3.0",
    "pytest"
]

setup(
    name="vetria",
    version="0.3.0",
    description="Vetria|Stylish Glass",
    packages=find_packages(include=["vetria", "vetria.*"]),
    package_data={"vetria.shared.config": ["settings/*.yaml"]},
    include_package_data=True,
    install_requires=install_requires,
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "vetria=vetria.app.main:run",
        ],
    },
)
