"""Test suite for propcheck-kit."""
