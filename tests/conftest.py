"""
Pytest configuration and fixtures for exterminator tests

This module provides shared schemas and records for unit and integration tests.
"""
import pytest

from exterminator import number, string
from exterminator.observability.logger import configure_loggers


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require external services"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that exercise the command line end to end"
    )


@pytest.fixture
def reset_library_loggers():
    """Rebind library log handlers to the current stderr after each test"""
    yield
    configure_loggers()


# =======================
# SCHEMA FIXTURES
# =======================

@pytest.fixture
def person_schema():
    """
    Schema covering every text rule family

    Returns:
        Mapping of field name to configured validator
    """
    return {
        "name": string().required().min(3).max(30),
        "username": string().required().alpha_numeric().min(3).max(30).lowercase().trim(),
        "email": string().required().email(domains=["exterminator.com", "gmail.com", "outlook.com"]),
        "officeMail": string().email(exclude_domains=["gmail.com"]),
        "phone": string().phone("us"),
        "password": string().password(),
        "confirmPassword": string().password().equals("password"),
        "gender": string().one_of(["Male", "Female", "Other"]),
    }


@pytest.fixture
def valid_person():
    """A record that satisfies person_schema"""
    return {
        "name": "Sizar Corpse",
        "username": "sizarcorpse",
        "email": "sizarcorpse@exterminator.com",
        "officeMail": "sizaroffice@outlook.com",
        "phone": "(555) 555-5555",
        "password": "SizarCorpse123@",
        "confirmPassword": "SizarCorpse123@",
        "gender": "Male",
    }


@pytest.fixture
def account_schema():
    """Schema with numeric and cross-field rules"""
    return {
        "balance": number().required().greater("dew"),
        "dew": number().required().positive(),
    }


# =======================
# FILE FIXTURES
# =======================

PERSON_SCHEMA_YAML = """
fields:
  name:
    type: string
    rules:
      - required
      - min: 3
      - max: 30
  username:
    type: string
    rules:
      - required
      - alpha_numeric
      - lowercase
      - trim
  age:
    type: number
    rules:
      - integer
      - min: 0
      - max: {value: 150, message: "Too old"}
"""


@pytest.fixture
def schema_file(tmp_path):
    """YAML schema file for person records"""
    path = tmp_path / "person.yaml"
    path.write_text(PERSON_SCHEMA_YAML)
    return path
