"""
Shared fixtures for portal tests.

Keeps logging on the console only and provides fresh in-memory state objects.
"""

import os

os.environ.setdefault("LOG_TO_FILE", "false")

import pytest

from jobportal.catalog import JobCatalog
from jobportal.config import load_seed_jobs
from jobportal.ledger import ApplicationLedger
from jobportal.session import SessionStore
from jobportal.storage import MemoryKeyValueStore


@pytest.fixture(autouse=True)
def default_credentials(monkeypatch):
    """Pin the mock credentials regardless of any local .env."""
    monkeypatch.setenv("ADMIN_EMAIL", "admin@jobportal.com")
    monkeypatch.setenv("ADMIN_PASSWORD", "password123")
    monkeypatch.setenv("ADMIN_USER_ID", "admin-id-123")
    monkeypatch.setenv("USER_PASSWORD", "user123")
    monkeypatch.setenv("REDIRECT_DELAY", "1.5")


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def sessions(store):
    return SessionStore(store)


@pytest.fixture
def ledger():
    return ApplicationLedger()


@pytest.fixture
def catalog(ledger):
    return JobCatalog(ledger, load_seed_jobs())


@pytest.fixture
def job_fields():
    return {
        "title": "Backend Engineer",
        "description": "Build APIs.",
        "requirements": "Python, Flask",
        "location": "Remote (EU)",
        "salary": "$100,000",
        "job_type": "Contract",
    }
