import math

import pytest

from app.exceptions import InsufficientBalance, InvalidAmount
from app.models import ActivityLog
from app.services.withdrawals import (
    WITHDRAW_ACTION,
    format_withdraw_details,
    parse_withdraw_amount,
    withdrawal_service,
)
from app.utils.money import parse_positive_amount
from conftest import add_log, add_transaction, add_watch, make_media


@pytest.fixture
def earning_provider(db, provider, viewer):
    """Sole provider on the platform with 100.00 lifetime earnings"""
    media = make_media(db, provider, title="Only Title")
    add_watch(db, viewer, media, 600)
    add_transaction(db, 200)
    return provider


def _withdrawal_rows(db, provider):
    return (
        db.query(ActivityLog)
        .filter(ActivityLog.user_id == provider.id, ActivityLog.action == WITHDRAW_ACTION)
        .count()
    )


@pytest.mark.parametrize("details, expected", [
    ("amount=30.00", 30.0),
    ("AMOUNT=12.5", 12.5),
    ("requested amount=7 via mobile", 7.0),
    ("amount=abc", 0.0),
    ("", 0.0),
    (None, 0.0),
])
def test_parse_withdraw_amount(details, expected):
    assert parse_withdraw_amount(details) == expected


def test_format_withdraw_details_uses_two_places():
    assert format_withdraw_details(50) == "amount=50.00"
    assert format_withdraw_details(12.5) == "amount=12.50"


@pytest.mark.parametrize("value", [None, "", "abc", 0, -5, "-1", float("nan"), float("inf"), True])
def test_parse_positive_amount_rejects(value):
    assert parse_positive_amount(value) is None


@pytest.mark.parametrize("value, expected", [(50, 50.0), ("12.5", 12.5), (0.001, 0.001)])
def test_parse_positive_amount_accepts(value, expected):
    assert math.isclose(parse_positive_amount(value), expected)


def test_summary_without_withdrawals(db, earning_provider):
    summary = withdrawal_service.get_withdrawal_summary(db, earning_provider.id)

    assert summary.total_earned == 100.0
    assert summary.withdrawn_total == 0.0
    assert summary.available_balance == 100.0


def test_summary_subtracts_logged_withdrawals(db, earning_provider):
    add_log(db, earning_provider, WITHDRAW_ACTION, "amount=30.00")
    add_log(db, earning_provider, WITHDRAW_ACTION, "amount=20.00")
    add_log(db, earning_provider, WITHDRAW_ACTION, "garbled entry")
    add_log(db, earning_provider, "LOGIN", "amount=99.00")

    summary = withdrawal_service.get_withdrawal_summary(db, earning_provider.id)

    assert summary.withdrawn_total == 50.0
    assert summary.available_balance == 50.0


def test_available_balance_never_negative(db, earning_provider):
    add_log(db, earning_provider, WITHDRAW_ACTION, "amount=150.00")

    summary = withdrawal_service.get_withdrawal_summary(db, earning_provider.id)

    assert summary.withdrawn_total == 150.0
    assert summary.available_balance == 0.0


def test_withdrawal_over_balance_is_rejected_without_writing(db, earning_provider):
    add_log(db, earning_provider, WITHDRAW_ACTION, "amount=30.00")
    add_log(db, earning_provider, WITHDRAW_ACTION, "amount=20.00")

    with pytest.raises(InsufficientBalance) as exc_info:
        withdrawal_service.request_withdrawal(db, earning_provider.id, 60)

    assert exc_info.value.message == "Withdrawal amount exceeds your available balance"
    assert exc_info.value.available == 50.0
    assert _withdrawal_rows(db, earning_provider) == 2


def test_withdrawal_of_full_balance_succeeds(db, earning_provider):
    add_log(db, earning_provider, WITHDRAW_ACTION, "amount=30.00")
    add_log(db, earning_provider, WITHDRAW_ACTION, "amount=20.00")

    summary = withdrawal_service.request_withdrawal(db, earning_provider.id, 50)

    assert summary.total_earned == 100.0
    assert summary.withdrawn_total == 100.0
    assert summary.available_balance == 0.0

    latest = (
        db.query(ActivityLog)
        .filter(ActivityLog.user_id == earning_provider.id)
        .order_by(ActivityLog.id.desc())
        .first()
    )
    assert latest.action == WITHDRAW_ACTION
    assert latest.details == "amount=50.00"


def test_withdrawal_accepts_numeric_strings(db, earning_provider):
    summary = withdrawal_service.request_withdrawal(db, earning_provider.id, "25.5")

    assert summary.withdrawn_total == 25.5
    assert summary.available_balance == 74.5


@pytest.mark.parametrize("amount", [None, "abc", 0, -10])
def test_invalid_amount_is_rejected_without_writing(db, earning_provider, amount):
    with pytest.raises(InvalidAmount) as exc_info:
        withdrawal_service.request_withdrawal(db, earning_provider.id, amount)

    assert exc_info.value.message == "Please enter a valid withdrawal amount"
    assert _withdrawal_rows(db, earning_provider) == 0


def test_provider_without_earnings_cannot_withdraw(db, provider):
    with pytest.raises(InsufficientBalance):
        withdrawal_service.request_withdrawal(db, provider.id, 1)


def test_consecutive_withdrawals_see_previous_ones(db, earning_provider):
    withdrawal_service.request_withdrawal(db, earning_provider.id, 60)

    with pytest.raises(InsufficientBalance):
        withdrawal_service.request_withdrawal(db, earning_provider.id, 60)

    summary = withdrawal_service.get_withdrawal_summary(db, earning_provider.id)
    assert summary.available_balance == 40.0
