"""
Test suite for the energy marketplace core

Contains:
- tests/unit/          : Unit tests for individual modules and engines
"""
