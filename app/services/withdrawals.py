"""
Provider Withdrawal Ledger
Available balance = lifetime earned share - sum of logged withdrawals.
The withdrawn total is always re-derived from the audit log; there is no
stored balance column.
"""
import logging
import re
from typing import Any, Optional

from sqlalchemy.orm import Session

from ..exceptions import InsufficientBalance, InvalidAmount
from ..models.activity_log import ActivityLog
from ..models.user import User
from ..schemas.withdrawal import WithdrawalSummary
from ..utils.money import parse_positive_amount, round_money
from .analytics import analytics_service

logger = logging.getLogger(__name__)

WITHDRAW_ACTION = "PROVIDER_WITHDRAWAL"
AMOUNT_PATTERN = re.compile(r"amount=([0-9]+(?:\.[0-9]+)?)", re.IGNORECASE)


def parse_withdraw_amount(details: Optional[str]) -> float:
    """Amount recorded in a withdrawal log entry; 0 when missing or unparsable"""
    if not details:
        return 0.0
    match = AMOUNT_PATTERN.search(details)
    if not match:
        return 0.0
    return float(match.group(1))


def format_withdraw_details(amount: float) -> str:
    return f"amount={amount:.2f}"


class WithdrawalService:

    def withdrawn_total(self, db: Session, provider_id: int) -> float:
        rows = (
            db.query(ActivityLog.details)
            .filter(
                ActivityLog.user_id == provider_id,
                ActivityLog.action == WITHDRAW_ACTION,
            )
            .all()
        )
        return sum(parse_withdraw_amount(row.details) for row in rows)

    def get_withdrawal_summary(self, db: Session, provider_id: int) -> WithdrawalSummary:
        analytics = analytics_service.get_provider_analytics(db, provider_id)
        total_earned = round_money(analytics.provider_totals.provider_share_total)
        withdrawn = self.withdrawn_total(db, provider_id)

        return WithdrawalSummary(
            total_earned=total_earned,
            withdrawn_total=round_money(withdrawn),
            available_balance=round_money(max(total_earned - withdrawn, 0)),
        )

    def _lock_provider(self, db: Session, provider_id: int) -> Optional[User]:
        """
        Row lock on the provider's user record for the rest of the transaction.
        Concurrent requests for the same provider queue here, so each one reads
        the balance only after the previous withdrawal has committed.
        """
        return (
            db.query(User)
            .filter(User.id == provider_id)
            .with_for_update()
            .one_or_none()
        )

    def request_withdrawal(self, db: Session, provider_id: int, amount: Any) -> WithdrawalSummary:
        """
        Validate, check against a freshly computed balance and append one
        PROVIDER_WITHDRAWAL entry. Returns the recomputed summary.

        Raises:
            InvalidAmount: amount is not a finite positive number
            InsufficientBalance: amount exceeds the available balance
        """
        requested = parse_positive_amount(amount)
        if requested is None:
            raise InvalidAmount()

        try:
            self._lock_provider(db, provider_id)

            summary = self.get_withdrawal_summary(db, provider_id)
            if requested > summary.available_balance:
                raise InsufficientBalance(requested, summary.available_balance)

            rounded = round_money(requested)
            db.add(ActivityLog(
                user_id=provider_id,
                action=WITHDRAW_ACTION,
                details=format_withdraw_details(rounded),
            ))
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"💸 Withdrawal logged: provider {provider_id} amount={rounded:.2f}")

        return self.get_withdrawal_summary(db, provider_id)


# Singleton instance
withdrawal_service = WithdrawalService()
