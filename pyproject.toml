[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "starbytes"
version = "0.4"
description = "Runtime object model, type matching and a minimal language server for the Starbytes language"
requires-python = ">=3.10"
dependencies = []
keywords = ["starbytes", "interpreter", "runtime", "language-server", "lsp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Interpreters",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
starbytes-lsp = "starbytes.lsp_server:main"

[tool.hatch.build.targets.wheel]
packages = ["starbytes"]

[tool.pytest.ini_options]
addopts = "-ra"
