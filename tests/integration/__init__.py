"""Integration tests running full property checks through Hypothesis."""
