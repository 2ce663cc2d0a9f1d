"""
Test suite for matrix-trace

Contains:
- tests/unit/          : Unit tests for individual modules
"""
