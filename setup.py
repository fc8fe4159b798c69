from setuptools import setup, find_packages

setup(
    name="petrodata-nexus",
    version="1.0.0",
    packages=find_packages(include=["petrodata", "petrodata.*"]),
    package_data={"petrodata.infrastructure.operations": ["*.sql"]},
    install_requires=[
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "pydantic-settings",
        "duckdb",
        "polars>=1.0",
        "httpx",
        "python-dotenv"
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "pytest-cov"
        ]
    },
    python_requires=">=3.9",
)
