[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pqsig"
version = "0.1.0"
description = "Building blocks for ML-DSA (FIPS 204) lattice signatures and RFC 6979 deterministic nonces"
requires-python = ">=3.10"
dependencies = []
keywords = ["cryptography", "signature", "ml-dsa", "dilithium", "lattice", "ntt", "rfc6979", "hmac-drbg"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pqsig"]

[tool.pytest.ini_options]
addopts = "-ra"
