"""Fake implementations of core ports for testing.

- FakeRecordStorePort: In-memory item storage
- FakePreferenceStorePort: In-memory preference storage
"""

from .store import FakePreferenceStorePort, FakeRecordStorePort

__all__ = [
    "FakePreferenceStorePort",
    "FakeRecordStorePort",
]
