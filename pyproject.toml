[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "snake"
version = "0.2.0"
description = "Building blocks for small web services: cache drivers and encodings, JWT helpers, user records, a mail queue and a project scaffolding tool."
requires-python = ">=3.10"
keywords = ["cache", "lru", "jwt", "bcrypt", "microservice", "scaffolding", "redis", "smtp"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]
dependencies = [
    "bcrypt",
    "msgpack",
    "pyjwt",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
snake = "snake.cli.main:main"

[tool.hatch.build.targets.wheel]
packages = ["snake"]

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
ignore_missing_imports = true
