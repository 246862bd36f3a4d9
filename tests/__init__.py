"""Test suite for the transport back office.

Test structure:
- unit/: Unit tests - domain, application services and adapters in isolation
- api/: API tests - HTTP behavior through TestClient (gate, routers, errors)
"""
