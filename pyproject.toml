[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "faststats"
version = "0.1.0"
description = "HTTP service that keeps rolling min, max, last, average and variance over windows of streamed values per symbol"
requires-python = ">=3.10"
keywords = ["statistics", "rolling window", "monotonic queue", "http", "time series"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Scientific/Engineering :: Information Analysis",
]
dependencies = [
    "starlette",
    "uvicorn",
]

[project.optional-dependencies]
test = [
    "pytest",
    "httpx",
]

[project.scripts]
faststats = "faststats.app:main"

[tool.hatch.build.targets.wheel]
packages = ["faststats"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
