[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "layaway"
version = "0.2.1"
description = "Layout creation for Sway via a relative and human-readable DSL."
requires-python = ">=3.11"
keywords = ["sway", "wayland", "outputs", "screens", "layout", "dsl"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers",
    "Topic :: Utilities",
]
dependencies = [
    "platformdirs",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
layaway = "layaway.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["layaway"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
strict = true
