"""Harness unit tests (fakes only, no real browser)."""
