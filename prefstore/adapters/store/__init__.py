"""Record store adapters for persistence.

Implementations support multiple backends:
- SQLite (zero-config, single-file)
- PostgreSQL (distributed, scalable)

PreferenceRepository layers Preference conversion over any of them.
"""
