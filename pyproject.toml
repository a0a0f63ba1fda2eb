[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "realmlobby"
version = "0.1.0"
description = "Lobby server building blocks for Champions of Norrath and Return to Arms: wire buffers, realm crypto, sessions, chat rooms and character saves"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "game-server",
    "lobby",
    "champions-of-norrath",
    "return-to-arms",
    "rijndael",
    "rle",
    "matchmaking",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["realmlobby"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
