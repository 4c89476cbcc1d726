"""Test suite for prefstore.

Organized into three categories:

1. core/: Unit tests for core domain logic
   - No external dependencies, fast execution

2. adapters/: Tests for adapter implementations
   - Record conversion, SQLite against a temporary file,
     PostgreSQL against a mocked pool

3. fakes/: Port implementations for testing
   - In-memory RecordStorePort and PreferenceStorePort
"""
