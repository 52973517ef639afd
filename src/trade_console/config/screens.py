"""List screen definitions: endpoints, search fields, facets, columns and CSV layout.

Each screen is plain configuration over the shared view engine; nothing here
filters or sorts by itself.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from trade_console.config.constants import (
    ACCOUNT_STATUSES,
    ACCOUNT_TYPE_CATEGORIES,
    ACCOUNT_TYPE_STATUSES,
    ACCOUNT_TYPES,
    ALL,
    DEPOSIT_METHODS,
    DEPOSIT_STATUSES,
    KIND_DATE,
    KIND_NUMBER,
    KIND_STRING,
    KYC_STATUSES,
    ORDER_STATUSES,
    ORDER_TYPES,
    PLATFORMS,
    SORT_DESC,
    TRADE_STATUSES,
    TRADING_STATUSES,
    USER_ROLES,
    USER_STATUSES,
    WITHDRAWAL_METHODS,
    WITHDRAWAL_STATUSES,
)
from trade_console.models.core import ExportColumn, Record, SortConfig


@dataclass(frozen=True)
class FacetSpec:
    """One dropdown filter: field path, caption and (label, value) options without "all"."""

    field: str
    label: str
    options: Sequence[Tuple[str, Any]]

    def choices(self) -> List[Tuple[str, Any]]:
        """Options with the leading "All ..." entry the dropdown shows."""
        return [(f"All {self.label}", ALL)] + list(self.options)


@dataclass(frozen=True)
class ColumnSpec:
    header: str
    path: str
    kind: str = KIND_STRING
    sortable: bool = True
    width: int = 120


@dataclass(frozen=True)
class ScreenConfig:
    key: str
    title: str
    endpoint: str
    search_paths: Sequence[str]
    columns: Sequence[ColumnSpec]
    export: Sequence[ExportColumn]
    facets: Sequence[FacetSpec] = ()
    default_sort: SortConfig = field(default_factory=SortConfig)
    params: Optional[Dict[str, Any]] = None
    collection_key: Optional[str] = None
    normalize: Optional[Callable[[Record], Record]] = None
    entity_name: str = ""
    item_endpoint: Optional[str] = None
    # PATCH <item_url>/<status_action> with {status_field: value}
    status_action: Optional[str] = None
    status_field: str = "status"
    status_options: Sequence[Tuple[str, Any]] = ()
    deletable: bool = False

    def item_url(self, rid: str) -> str:
        """Endpoint for one record, e.g. /admin/users/<id>."""
        return f"{self.item_endpoint or self.endpoint}/{rid}"

    @property
    def export_entity(self) -> str:
        return self.entity_name or self.key.replace("_", "-")


def _export(*pairs: Tuple[str, str]) -> List[ExportColumn]:
    return [ExportColumn(header, path) for header, path in pairs]


def trading_status(user: Record) -> Optional[str]:
    """Classify a user for the trading facet: profitable, losing, no_trades, or None."""
    total = user.get("totalTrades")
    if isinstance(total, bool) or not isinstance(total, (int, float)):
        return None
    if total == 0:
        return "no_trades"
    if total > 0:
        return "profitable" if user.get("isProfitable") else "losing"
    return None


def normalize_user(user: Record) -> Record:
    out = dict(user)
    out["tradingStatus"] = trading_status(user)
    return out


def normalize_account_type(account_type: Record) -> Record:
    out = dict(account_type)
    out["status"] = "active" if account_type.get("isActive") else "inactive"
    return out


_TRANSACTION_USER_SEARCH = ("userId.firstName", "userId.lastName", "userId.email")

USERS = ScreenConfig(
    key="users",
    title="Users",
    endpoint="/admin/users",
    search_paths=("firstname", "lastname", "email", "mobile", "userId", "id"),
    facets=(
        FacetSpec("status", "Status", USER_STATUSES),
        FacetSpec("kyc", "KYC", KYC_STATUSES),
        FacetSpec("role", "Roles", USER_ROLES),
        FacetSpec("tradingStatus", "Users", TRADING_STATUSES),
    ),
    columns=(
        ColumnSpec("User ID", "userId"),
        ColumnSpec("First Name", "firstname"),
        ColumnSpec("Last Name", "lastname"),
        ColumnSpec("Email", "email", width=200),
        ColumnSpec("Status", "status", sortable=False),
        ColumnSpec("KYC", "kyc", sortable=False),
        ColumnSpec("Trades", "totalTrades", KIND_NUMBER, width=80),
        ColumnSpec("P&L", "totalProfitLoss", KIND_NUMBER, width=100),
    ),
    export=_export(
        ("User ID", "userId"),
        ("First Name", "firstname"),
        ("Last Name", "lastname"),
        ("Email", "email"),
        ("Mobile", "mobile"),
        ("Role", "role"),
        ("Status", "status"),
        ("KYC", "kyc"),
        ("Wallet Balance", "walletbalance"),
        ("Currency", "currency"),
        ("Total Trades", "totalTrades"),
    ),
    normalize=normalize_user,
    status_action="status",
    status_options=USER_STATUSES,
    deletable=True,
)

ACCOUNTS = ScreenConfig(
    key="accounts",
    title="Accounts",
    endpoint="/account/admin/all",
    params={"page": 1, "limit": 1000},
    item_endpoint="/account/admin",
    status_action="status",
    status_options=ACCOUNT_STATUSES,
    deletable=True,
    search_paths=(
        "accountNumber",
        "login",
        "userId.firstName",
        "userId.lastName",
        "userId.email",
        "accountClass",
    ),
    facets=(
        FacetSpec("status", "Status", ACCOUNT_STATUSES),
        FacetSpec("accountType", "Types", ACCOUNT_TYPES),
        FacetSpec("platform", "Platforms", PLATFORMS),
    ),
    columns=(
        ColumnSpec("Account Number", "accountNumber", width=140),
        ColumnSpec("User", "userId.email", width=200),
        ColumnSpec("Type", "accountType", width=80),
        ColumnSpec("Platform", "platform", width=80),
        ColumnSpec("Balance", "balance", KIND_NUMBER),
        ColumnSpec("Status", "status"),
    ),
    export=_export(
        ("Account Number", "accountNumber"),
        ("Login", "login"),
        ("Account Type", "accountType"),
        ("Platform", "platform"),
        ("Account Class", "accountClass"),
        ("Balance", "balance"),
        ("Currency", "currency"),
        ("Leverage", "leverage"),
        ("Status", "status"),
        ("User Email", "userId.email"),
    ),
)

ACCOUNT_TYPES_SCREEN = ScreenConfig(
    key="account_types",
    title="Account Types",
    endpoint="/admin/settings/account-types",
    search_paths=("name", "description", "maxLeverage", "minDeposit"),
    facets=(
        FacetSpec("status", "Status", ACCOUNT_TYPE_STATUSES),
        FacetSpec("category", "Categories", ACCOUNT_TYPE_CATEGORIES),
    ),
    columns=(
        ColumnSpec("Name", "name", width=160),
        ColumnSpec("Category", "category", width=160),
        ColumnSpec("Min Deposit", "minDeposit", KIND_NUMBER),
        ColumnSpec("Max Leverage", "maxLeverage"),
        ColumnSpec("Status", "isActive"),
    ),
    export=_export(
        ("ID", "id"),
        ("Name", "name"),
        ("Category", "category"),
        ("Description", "description"),
        ("Min Deposit", "minDeposit"),
        ("Min Spread", "minSpread"),
        ("Max Leverage", "maxLeverage"),
        ("Commission", "commission"),
        ("Status", "isActive"),
    ),
    normalize=normalize_account_type,
    status_action="toggle-status",
    status_field="isActive",
    status_options=[("Active", True), ("Inactive", False)],
    deletable=True,
    entity_name="account-types",
)

DEPOSITS = ScreenConfig(
    key="deposits",
    title="Deposits",
    endpoint="/transactions/admin/deposits",
    params={"limit": 1000},
    search_paths=("_id", "id", "transactionId", "paymentMethod") + _TRANSACTION_USER_SEARCH,
    facets=(
        FacetSpec("status", "Status", DEPOSIT_STATUSES),
        FacetSpec("paymentMethod", "Methods", DEPOSIT_METHODS),
    ),
    columns=(
        ColumnSpec("Transaction ID", "transactionId", width=160),
        ColumnSpec("User", "userId.email", sortable=False, width=200),
        ColumnSpec("Amount", "amount", KIND_NUMBER),
        ColumnSpec("Method", "paymentMethod", sortable=False),
        ColumnSpec("Status", "status", sortable=False),
        ColumnSpec("Created At", "createdAt", KIND_DATE, width=170),
    ),
    export=_export(
        ("Transaction ID", "transactionId"),
        ("User", "userId.firstName"),
        ("Email", "userId.email"),
        ("Amount", "amount"),
        ("Currency", "currency"),
        ("Method", "paymentMethod"),
        ("Status", "status"),
        ("Created At", "createdAt"),
    ),
    default_sort=SortConfig("createdAt", SORT_DESC, KIND_DATE),
    status_action="status",
    status_options=DEPOSIT_STATUSES,
    deletable=True,
)

WITHDRAWALS = ScreenConfig(
    key="withdrawals",
    title="Withdrawals",
    endpoint="/transactions/admin/withdrawals",
    params={"limit": 1000},
    search_paths=(
        "_id",
        "id",
        "transactionId",
        "withdrawalMethod",
        "withdrawalDetails.walletAddress",
    ) + _TRANSACTION_USER_SEARCH,
    facets=(
        FacetSpec("status", "Status", WITHDRAWAL_STATUSES),
        FacetSpec("withdrawalMethod", "Methods", WITHDRAWAL_METHODS),
    ),
    columns=(
        ColumnSpec("Transaction ID", "transactionId", width=160),
        ColumnSpec("User", "userId.email", sortable=False, width=200),
        ColumnSpec("Amount", "amount", KIND_NUMBER),
        ColumnSpec("Net Amount", "netAmount", KIND_NUMBER),
        ColumnSpec("Method", "withdrawalMethod", sortable=False),
        ColumnSpec("Status", "status", sortable=False),
        ColumnSpec("Created At", "createdAt", KIND_DATE, width=170),
    ),
    export=_export(
        ("Transaction ID", "transactionId"),
        ("User", "userId.firstName"),
        ("Email", "userId.email"),
        ("Amount", "amount"),
        ("Fee", "fee"),
        ("Net Amount", "netAmount"),
        ("Currency", "currency"),
        ("Method", "withdrawalMethod"),
        ("Status", "status"),
        ("Created At", "createdAt"),
    ),
    default_sort=SortConfig("createdAt", SORT_DESC, KIND_DATE),
    status_action="status",
    status_options=WITHDRAWAL_STATUSES,
    deletable=True,
)

ORDERS = ScreenConfig(
    key="orders",
    title="Orders",
    endpoint="/admin/orders",
    search_paths=("orderId", "symbol", "userId.email"),
    facets=(
        FacetSpec("status", "Status", ORDER_STATUSES),
        FacetSpec("type", "Types", ORDER_TYPES),
    ),
    columns=(
        ColumnSpec("Order ID", "orderId", width=140),
        ColumnSpec("Symbol", "symbol", width=90),
        ColumnSpec("Type", "type", sortable=False, width=90),
        ColumnSpec("Volume", "volume", KIND_NUMBER, width=90),
        ColumnSpec("Price", "orderPrice", KIND_NUMBER),
        ColumnSpec("Status", "status"),
    ),
    export=_export(
        ("Order ID", "orderId"),
        ("Symbol", "symbol"),
        ("Type", "type"),
        ("Volume", "volume"),
        ("Price", "orderPrice"),
        ("Status", "status"),
    ),
)

TRADES = ScreenConfig(
    key="trades",
    title="Trades",
    endpoint="/admin/trades",
    search_paths=("tradeId", "symbol", "userId.email"),
    facets=(FacetSpec("status", "Trades", TRADE_STATUSES),),
    columns=(
        ColumnSpec("Trade ID", "tradeId", width=140),
        ColumnSpec("Symbol", "symbol", width=90),
        ColumnSpec("Type", "type", sortable=False, width=80),
        ColumnSpec("Volume", "volume", KIND_NUMBER, width=90),
        ColumnSpec("Open Price", "openPrice", KIND_NUMBER, sortable=False),
        ColumnSpec("Close Price", "closePrice", KIND_NUMBER, sortable=False),
        ColumnSpec("Profit/Loss", "profitLoss", KIND_NUMBER),
        ColumnSpec("Status", "status"),
    ),
    export=_export(
        ("Trade ID", "tradeId"),
        ("Symbol", "symbol"),
        ("Type", "type"),
        ("Volume", "volume"),
        ("Open Price", "openPrice"),
        ("Close Price", "closePrice"),
        ("Profit/Loss", "profitLoss"),
        ("Status", "status"),
    ),
)

REFERRALS = ScreenConfig(
    key="referrals",
    title="Referrals",
    endpoint="/refer/admin/stats",
    collection_key="topReferrers",
    search_paths=("firstName", "lastName", "email"),
    columns=(
        ColumnSpec("First Name", "firstName"),
        ColumnSpec("Last Name", "lastName"),
        ColumnSpec("Email", "email", width=200),
        ColumnSpec("Referrals", "totalReferrals", KIND_NUMBER, width=90),
        ColumnSpec("Earnings", "referralEarnings", KIND_NUMBER),
    ),
    export=_export(
        ("First Name", "firstName"),
        ("Last Name", "lastName"),
        ("Email", "email"),
        ("Total Referrals", "totalReferrals"),
        ("Referral Earnings", "referralEarnings"),
    ),
)

SCREENS: Dict[str, ScreenConfig] = {
    s.key: s
    for s in (USERS, ACCOUNTS, ACCOUNT_TYPES_SCREEN, DEPOSITS, WITHDRAWALS, ORDERS, TRADES, REFERRALS)
}


def get_screen(key: str) -> ScreenConfig:
    """Return the screen for key. Raises KeyError for unknown screens."""
    try:
        return SCREENS[key]
    except KeyError:
        raise KeyError(f"Unknown screen {key!r}; expected one of {sorted(SCREENS)}") from None
