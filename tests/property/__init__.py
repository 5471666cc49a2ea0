"""Property-based tests for propcheck-kit."""
