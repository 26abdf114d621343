[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "webgames"
version = "0.1.0"
description = "Checkers and rock-paper-scissors served as CGI programs that render HTML"
requires-python = ">=3.10"
dependencies = []
keywords = ["checkers", "draughts", "rock-paper-scissors", "cgi", "html", "game"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: CGI Tools/Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
webgames-checkers = "webgames.page:main"
webgames-checkers-move = "webgames.update:main"
webgames-rps = "webgames.rps:main"

[tool.hatch.build.targets.wheel]
packages = ["webgames"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
