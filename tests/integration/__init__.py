"""
Integration tests for cedar.

These tests run the complete build pipeline against a real C compiler and
are skipped when gcc is not on PATH.
"""
