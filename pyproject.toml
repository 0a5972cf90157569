[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ledgerkit"
version = "0.1.0"
description = "Payment infrastructure toolkit: canonical payment types, a mock connector, webhook verification, idempotency and a local simulator"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "payments",
    "webhooks",
    "hmac",
    "idempotency",
    "psp",
    "connector",
    "simulator",
    "fixtures",
]
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
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
lk = "ledgerkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ledgerkit"]

[tool.hatch.build.targets.sdist]
include = [
    "ledgerkit",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
