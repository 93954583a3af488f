[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "cminusc"
version = "0.1.0"
description = "Intermediate-code generation for the C-minus language: symbol table, syntax tree, quadruples and temporary register allocation"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "c-minus", "intermediate-code", "quadruples", "symbol-table"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["cminusc*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
