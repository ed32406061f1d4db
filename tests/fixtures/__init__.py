"""Shared test doubles for ACL tests."""
