"""
Test suite for hugenum

Contains:
- tests/unit/          : Unit tests for individual modules
"""
