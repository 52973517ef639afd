"""Pytest configuration: put src on the path and provide shared record fixtures."""

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
_src = _root / "src"
if _src.is_dir() and str(_src) not in sys.path:
    sys.path.insert(0, str(_src))


@pytest.fixture
def users():
    """Five users with a nested account, one with no linked account."""
    return [
        {"_id": "u1", "firstName": "Ann", "lastName": "Smithson", "email": "ann@example.com",
         "status": "active", "account": {"balance": "1200.50", "currency": "USD"}, "createdAt": "2024-03-01T10:00:00Z"},
        {"_id": "u2", "firstName": "Bob", "lastName": "Jones", "email": "bob@example.com",
         "status": "inactive", "account": {"balance": "15", "currency": "EUR"}, "createdAt": "2024-01-15T08:30:00Z"},
        {"_id": "u3", "firstName": "Cara", "lastName": "Smith", "email": "cara@example.com",
         "status": "active", "account": {"balance": 300, "currency": "USD"}, "createdAt": "2024-02-10T12:00:00Z"},
        {"_id": "u4", "firstName": "Dan", "lastName": "Lee", "email": "dan@example.com",
         "status": "suspended", "createdAt": None},
        {"_id": "u5", "firstName": "Eve", "lastName": "Black", "email": "eve@example.com",
         "status": "active", "account": {"balance": "-20", "currency": "USD"}, "createdAt": "2023-12-31T23:59:00Z"},
    ]
