"""
Test suite for bigdec

Contains:
- tests/unit/          : Unit tests for individual modules
"""
