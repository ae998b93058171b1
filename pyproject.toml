[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "regforge"
version = "0.1.0"
description = "Generate C headers, assembly includes, assembly symbols, IP-XACT XML and C++ simulator sources from register descriptions."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "registers",
    "ip-xact",
    "code generation",
    "hardware description",
    "memory map",
]
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
    "Topic :: Software Development :: Code Generators",
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["regforge"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
