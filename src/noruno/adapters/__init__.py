"""Adapters module - Repository implementations for different storage backends.

This package contains concrete implementations (adapters) for the repository interfaces:
- sqlite: single SQLite database file (default)
- json_file: one JSON document per entity kind
"""
