[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mgclient"
version = "4.6.1"
description = "Client for the Mailgun HTTP API: messages, stored messages, routes, webhooks, list members and stats"
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["mailgun", "email", "webhooks", "routes", "api-client"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Email",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["mgclient"]

[tool.hatch.build.targets.sdist]
include = ["mgclient", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
