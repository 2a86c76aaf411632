"""CQRS and event sourcing building blocks, WSGI apps and example domains."""

__version__ = "0.1.0"