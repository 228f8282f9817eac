"""
ProseCheck Tests Package
========================
Test suite for the prosecheck engine and its components.

Run all tests: python3 -m pytest tests/ -v
Run specific: python3 -m pytest tests/prosecheck/test_engine.py -v
"""

__version__ = "1.0.0"
