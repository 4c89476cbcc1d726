"""External adapters for prefstore.

This package contains all external dependencies (SQLite, PostgreSQL,
the command line) and provides implementations of the core port
interfaces.

Adapter Organization:

- record/: Conversion between domain objects and stored Items
- store/: Record store backends and the preference repository
- cli/: Command-line get/put commands
"""
