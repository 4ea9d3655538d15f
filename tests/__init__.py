"""
Session service tests.

Running Tests:
    # Run all tests
    pytest tests/

    # Run only the HTTP layer
    pytest tests/test_api.py

    # Run with coverage
    pytest --cov=authsession tests/
"""
