"""Unit tests for propcheck-kit."""
