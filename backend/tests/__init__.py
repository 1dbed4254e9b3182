"""
TOEIC Study Test Suite

Test Structure:
    tests/
    ├── conftest.py          # Shared fixtures and configuration
    ├── unit/                # Unit tests (pure functions, models, config)
    └── integration/         # API tests through the FastAPI app

Running Tests:
    # Run all tests
    pytest backend/tests -v

    # Run only unit tests
    pytest backend/tests/unit -v
"""
