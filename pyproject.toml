[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jvmlite"
version = "0.0.1"
description = "A small Java virtual machine: class file parser, classpath search and a bytecode interpreter"
requires-python = ">=3.10"
dependencies = []
keywords = ["jvm", "java", "bytecode", "interpreter", "class file", "classpath"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jvmlite = "jvmlite.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["jvmlite"]

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
