"""
Test suite for web-surf.

Provides tests for all modules:
- Unit tests for individual components
- Browser tests against a fake site served through httpx.MockTransport
- Fixtures for common test data
"""
