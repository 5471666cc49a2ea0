"""
Test fixtures package for propcheck-kit tests.

Provides sample types for the notation serializer and telemetry
generators for acceptance tests.
"""
