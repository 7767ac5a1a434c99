[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zkcircom"
version = "0.1.0"
description = "Read Circom R1CS files, compute circuit witnesses and check constraint satisfaction"
requires-python = ">=3.10"
dependencies = []
keywords = ["circom", "r1cs", "zero-knowledge", "snark", "witness", "bn128", "bls12-381"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zkcircom"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
