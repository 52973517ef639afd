"""Summary-card statistics for the list screens (pure functions).

Stats are computed over the whole fetched collection, not the filtered view,
so the cards stay put while the operator searches.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

from trade_console.config.constants import PENDING_TRANSACTION_STATUSES
from trade_console.models.core import Record, TradingStats, TransactionStats
from trade_console.services.fields import to_number


def transaction_stats(records: Iterable[Record]) -> TransactionStats:
    """
    Totals for deposits or withdrawals.

    Returns:
        total count, completed count, summed amount of completed rows (amounts
        may arrive as strings), and the pending + processing count.
    """
    items = list(records)
    completed = [r for r in items if r.get("status") == "completed"]
    return {
        "total": len(items),
        "completed": len(completed),
        "completed_amount": round(sum(to_number(r.get("amount")) for r in completed), 2),
        "pending": sum(1 for r in items if r.get("status") in PENDING_TRANSACTION_STATUSES),
    }


def trading_stats(orders: Iterable[Record], trades: Iterable[Record]) -> TradingStats:
    """Order and trade counts, volumes, closed P&L, average spread and win/loss split."""
    orders = list(orders)
    trades = list(trades)
    closed = [t for t in trades if t.get("status") == "closed"]

    total_spread = 0.0
    for t in trades:
        open_price = to_number(t.get("openPrice"))
        close_price = to_number(t.get("closePrice"))
        if open_price and close_price:
            total_spread += abs(close_price - open_price)

    return {
        "total_orders": len(orders),
        "executed_orders": sum(1 for o in orders if o.get("status") == "executed"),
        "pending_orders": sum(1 for o in orders if o.get("status") == "pending"),
        "total_order_volume": sum(to_number(o.get("volume")) for o in orders),
        "total_trades": len(trades),
        "open_trades": sum(1 for t in trades if t.get("status") == "open"),
        "closed_trades": len(closed),
        "total_trade_volume": sum(to_number(t.get("volume")) for t in trades),
        "total_profit_loss": sum(to_number(t.get("profitLoss")) for t in closed),
        "avg_spread": total_spread / len(trades) if trades else 0.0,
        "winning_trades": sum(1 for t in closed if to_number(t.get("profitLoss")) > 0),
        "losing_trades": sum(1 for t in closed if to_number(t.get("profitLoss")) < 0),
    }


def count_by(records: Iterable[Record], field: str) -> Dict[str, int]:
    """Count records per value of field; missing values are counted under ""."""
    counts: Dict[str, int] = {}
    for r in records:
        value = r.get(field)
        label = "" if value is None else str(value)
        counts[label] = counts.get(label, 0) + 1
    return counts


def user_stats(users: Iterable[Record]) -> Dict[str, Any]:
    items = list(users)
    return {
        "total": len(items),
        "by_status": count_by(items, "status"),
        "by_kyc": count_by(items, "kyc"),
        "total_wallet_balance": sum(to_number(u.get("walletbalance")) for u in items),
    }


def account_stats(accounts: Iterable[Record]) -> Dict[str, Any]:
    items = list(accounts)
    return {
        "total": len(items),
        "by_status": count_by(items, "status"),
        "by_type": count_by(items, "accountType"),
        "total_balance": sum(to_number(a.get("balance")) for a in items),
    }


def referral_stats(referrers: Iterable[Record]) -> Dict[str, Any]:
    items = list(referrers)
    return {
        "total": len(items),
        "total_referrals": int(sum(to_number(r.get("totalReferrals")) for r in items)),
        "total_earnings": sum(to_number(r.get("referralEarnings")) for r in items),
    }


def screen_stats(key: str, records: List[Record]) -> Dict[str, Any]:
    """Dispatch to the stats function for a screen key; unknown screens get a plain count."""
    if key in ("deposits", "withdrawals"):
        return dict(transaction_stats(records))
    if key == "orders":
        return dict(trading_stats(records, []))
    if key == "trades":
        return dict(trading_stats([], records))
    if key == "users":
        return user_stats(records)
    if key == "accounts":
        return account_stats(records)
    if key == "referrals":
        return referral_stats(records)
    return {"total": len(records)}
