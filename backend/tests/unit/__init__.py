"""
Unit Tests

Unit tests run in isolation without external dependencies.
The leveling engine and dashboard aggregation are pure, so nothing is mocked.
"""
