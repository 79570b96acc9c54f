"""
Test suite for token_input

Contains:
- tests/unit/          : Unit tests for individual modules
"""
