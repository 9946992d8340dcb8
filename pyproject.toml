[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "errchain"
version = "0.1.0"
description = "Walk exception cause chains and split condition expressions at their comparison operator"
requires-python = ">=3.10"
dependencies = []
keywords = ["error", "exception", "cause", "chain", "tokenizer", "comparison"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["errchain"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
