[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slisko"
version = "0.1.0"
description = "LED pattern controller that animates the status and link lights of network router chassis"
requires-python = ">=3.11"
keywords = ["led", "apa102", "ddp", "wled", "lighting", "animation", "chassis"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Environment :: Web Environment",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "aiohttp",
    "websocket-client",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
slisko = "slisko.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["slisko"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
