"""prefstore: preference records for a key-value document table."""
