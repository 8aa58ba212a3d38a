[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "commonkit"
version = "0.1.0"
description = "Common service helpers: geohash, JSON comment stripping, dates, worker pools, logging, and clients for Redis, MySQL and SeaweedFS"
requires-python = ">=3.10"
keywords = ["geohash", "redis", "mysql", "seaweedfs", "logging", "utilities"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
]
dependencies = [
    "numpy",
    "redis",
    "msgpack",
    "sqlalchemy",
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["commonkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
