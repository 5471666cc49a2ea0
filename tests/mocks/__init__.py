"""
Mock utilities package for propcheck-kit tests.

Provides runners and writers that record what they receive.
"""

from .runners import RaisingRunner, RecordingRunner, RecordingWriter

__all__ = ["RaisingRunner", "RecordingRunner", "RecordingWriter"]
