[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lamportkit"
version = "0.1.0"
description = "Solana ledger data models, subscription-message conversions, balance queries and a deposit ledger"
requires-python = ">=3.10"
keywords = ["solana", "geyser", "lamports", "rpc", "base58", "blockchain"]
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
    "Topic :: Office/Business :: Financial",
]
dependencies = [
    "httpx>=0.24",
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "pytest-asyncio>=0.21",
    "respx>=0.20",
]

[project.scripts]
lamportkit-balances = "lamportkit.balances:main"

[tool.hatch.build.targets.wheel]
packages = ["lamportkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
