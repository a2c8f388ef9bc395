"""
Test suite for the packing list parser.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_packing_list_validator.py -v
"""
