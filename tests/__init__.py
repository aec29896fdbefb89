"""
Test suite for the u64 primality toolkit

Contains:
- tests/unit/          : Unit tests for individual modules
"""
