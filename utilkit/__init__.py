"""Utilities: text helpers, a nullable value, a priority queue, number and colour helpers, JSON and XML writers."""

__version__ = "0.1.0"