"""Unit tests: one layer at a time, collaborators mocked or faked."""
