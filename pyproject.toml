[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "phoenixerp"
version = "0.1.0"
description = "Data-access and utility layer for a table-driven ERP back end: SQL helpers, DDL statements, auto numbering, ordering and session tokens."
requires-python = ">=3.10"
keywords = ["erp", "sql", "ddl", "auto-numbering", "tree", "business"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["phoenixerp"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
