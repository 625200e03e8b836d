"""
Test suite for riemann-sum

Contains:
- tests/unit/          : Unit tests for individual modules
"""
