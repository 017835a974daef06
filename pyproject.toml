[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jikanwrap"
version = "0.1.0"
description = "Client for the Jikan MyAnimeList API with a disk and memory response cache, typed models and a small JSON anime search service."
requires-python = ">=3.11"
dependencies = [
    "requests",
]
keywords = ["anime", "myanimelist", "jikan", "api", "client", "cache", "wsgi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["jikanwrap"]

[tool.hatch.build.targets.sdist]
include = ["jikanwrap", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
