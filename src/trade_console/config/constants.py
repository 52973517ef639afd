"""Global configuration constants for Trade Console.

These values are intentionally free of any UI / Tkinter concerns so they
can be reused by the view engine, the API client, and the desktop console.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

# Base directory for local files (defaults to project root)
BASE_DIR = Path(__file__).resolve().parents[3]

# --- File paths ---
TOKEN_FILE = os.environ.get("TRADE_CONSOLE_TOKEN_FILE", str(BASE_DIR / "session_token.json"))
LOG_FILE = os.environ.get("TRADE_CONSOLE_LOG_FILE") or None

# Admin API
API_URL = os.environ.get("TRADE_CONSOLE_API_URL", "https://jaazmarkets-server.onrender.com").rstrip("/")
API_TIMEOUT = 120  # seconds; whole collections are fetched in one request

LOG_LEVEL = getattr(logging, os.environ.get("TRADE_CONSOLE_LOG_LEVEL", "INFO").upper(), logging.INFO)

# --- View engine ---
ALL = "all"  # facet sentinel: no constraint
PATH_SEPARATOR = "."
PAGE_SIZE_OPTIONS = (10, 25, 50, 100)
DEFAULT_PAGE_SIZE = 10

SORT_ASC = "asc"
SORT_DESC = "desc"
SORT_DIRECTIONS = (SORT_ASC, SORT_DESC)

KIND_STRING = "string"
KIND_NUMBER = "number"
KIND_DATE = "date"
VALUE_KINDS = (KIND_STRING, KIND_NUMBER, KIND_DATE)

# --- Facet options (label, value); "all" is prepended by each screen ---
USER_STATUSES = [("Active", "active"), ("Suspended", "suspended"), ("Pending", "pending"), ("Closed", "closed")]
KYC_STATUSES = [("Approved", "approved"), ("Pending", "pending"), ("Submitted", "submitted"), ("Rejected", "rejected")]
USER_ROLES = [("User", "user"), ("Admin", "admin"), ("Super Admin", "superadmin")]
TRADING_STATUSES = [("Profitable", "profitable"), ("Losing", "losing"), ("No Trades", "no_trades")]

ACCOUNT_STATUSES = [("Active", "active"), ("Suspended", "suspended"), ("Closed", "closed")]
ACCOUNT_TYPES = [("Real", "Real"), ("Demo", "Demo")]
PLATFORMS = [("MT4", "MT4"), ("MT5", "MT5"), ("cTrader", "cTrader")]

ACCOUNT_TYPE_STATUSES = [("Active", "active"), ("Inactive", "inactive")]
ACCOUNT_TYPE_CATEGORIES = [
    ("Standard Accounts", "Standard accounts"),
    ("Professional Accounts", "Professional accounts"),
]

DEPOSIT_STATUSES = [
    ("Completed", "completed"),
    ("Processing", "processing"),
    ("Pending", "pending"),
    ("Failed", "failed"),
    ("Cancelled", "cancelled"),
]
DEPOSIT_METHODS = [("Bank Transfer", "bank_transfer"), ("Crypto", "crypto"), ("Card", "card"), ("Wallet", "wallet")]

WITHDRAWAL_STATUSES = [
    ("Completed", "completed"),
    ("Processing", "processing"),
    ("Pending", "pending"),
    ("Rejected", "rejected"),
    ("Cancelled", "cancelled"),
]
WITHDRAWAL_METHODS = [("Bank Transfer", "bank_transfer"), ("Crypto", "crypto"), ("Wallet", "wallet")]

ORDER_STATUSES = [("Executed", "executed"), ("Pending", "pending"), ("Cancelled", "cancelled"), ("Expired", "expired")]
ORDER_TYPES = [("Buy Limit", "buy_limit"), ("Sell Limit", "sell_limit"), ("Buy Stop", "buy_stop"), ("Sell Stop", "sell_stop")]
TRADE_STATUSES = [("Open", "open"), ("Closed", "closed")]

# Transaction states counted as "pending" on the summary cards
PENDING_TRANSACTION_STATUSES = {"pending", "processing"}

# Account payloads may arrive bucketed by kind instead of as a flat list
ACCOUNT_BUCKETS = ("real", "demo", "archived")
