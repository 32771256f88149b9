"""Setup configuration for the jigsaw-engine package."""

from setuptools import find_packages, setup

setup(
    name="jigsaw-engine",
    version="0.1.0",
    packages=find_packages(include=["jigsaw_shapes", "jigsaw_shapes.*", "jigsaw_app", "jigsaw_app.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "pillow",
        "numpy",
        "pydantic>=2",
        "pydantic-settings",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "httpx",
            "black",
            "flake8",
            "mypy",
            "isort",
        ],
    },
)
