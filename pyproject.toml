[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sdkmodel"
version = "0.1.0"
description = "Object model for OpenAPI schemas seen as SQL tables: schema navigation, server URLs, dialect views and request-body merging."
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
]
keywords = ["openapi", "sql", "schema", "views", "server-url", "json-path", "xml"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sdkmodel"]

[tool.hatch.build.targets.sdist]
include = ["sdkmodel", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
