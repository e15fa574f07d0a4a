"""
Unit Tests for the Draughts Engine

Covers the board rules, evaluation terms, hashing, search and the player facade.

Running Tests:
    pytest tests/
    pytest tests/test_search.py -k minimax
    pytest tests/ --cov=draughts_engine --cov-report=term-missing
"""
