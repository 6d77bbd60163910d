"""
Pytest configuration and fixtures for fieldguard tests

This module provides shared fixtures for the unit tests.
"""
import pytest

from fieldguard import ValidationEngine, Validator


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )


# =======================
# ENGINE FIXTURES
# =======================

@pytest.fixture
def engine() -> ValidationEngine:
    """Engine with the default validator registry"""
    return ValidationEngine()


@pytest.fixture
def validator(engine) -> Validator:
    """Validator facade around the default engine"""
    return Validator(engine)


# =======================
# SAMPLE DATA FIXTURES
# =======================

@pytest.fixture
def signup_data() -> dict:
    """A valid signup payload"""
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "age": 36,
        "role": "admin",
        "password": "secret123",
        "password_confirmation": "secret123",
        "website": "https://example.com/ada",
        "born": "1815-12-10",
    }


@pytest.fixture
def signup_rules() -> dict:
    """Rules matching signup_data, mixing the declaration forms"""
    return {
        "name": "required|min:2|max:100",
        "email": "required|email",
        "age": ["required", "int", "min:18"],
        "role": "in:admin,editor",
        "password": "required|min:8|confirmed",
        "website": "url",
        "born": "date_format:Y-m-d",
    }
