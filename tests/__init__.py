"""
Test suite for cal-session.

This package contains:
- Unit tests for models, error state, config and utilities
- Session manager and authorization gate tests against an in-memory provider
- EventKit provider tests against mocked PyObjC objects
- CLI dispatch and command tests
"""
