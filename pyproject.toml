[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "consume_alert"
version = "0.1.0"
description = "Parse card payment notifications, classify spending and report consumption summaries."
requires-python = ">=3.10"
keywords = ["expenses", "consumption", "card payments", "search index", "chat bot", "accounting"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Accounting",
]
dependencies = [
    "requests",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["consume_alert"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
