[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "eventhorizon"
version = "0.1.0"
description = "CQRS and event sourcing building blocks: events, matchers, handler middleware, WSGI command and query apps, and two example domains"
requires-python = ">=3.10"
dependencies = []
keywords = ["cqrs", "event-sourcing", "ddd", "events", "aggregates", "projections", "saga", "wsgi"]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
eh-coverage = "eventhorizon.coverage:main"

[tool.hatch.build.targets.wheel]
packages = ["eventhorizon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
