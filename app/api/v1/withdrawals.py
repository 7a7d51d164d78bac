# app/api/v1/withdrawals.py
"""
Provider withdrawals
Router: /api/v1/provider
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ...database import get_db
from ...api.deps import get_current_provider
from ...exceptions import WithdrawalError
from ...models.user import User
from ...schemas.withdrawal import WithdrawalRequest, WithdrawalResponse, WithdrawalSummary
from ...services.withdrawals import withdrawal_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/withdraw", response_model=WithdrawalSummary)
def get_withdrawal_summary(
    current_user: User = Depends(get_current_provider),
    db: Session = Depends(get_db),
):
    """Lifetime earnings, amount already withdrawn and what is left"""
    try:
        return withdrawal_service.get_withdrawal_summary(db, current_user.id)
    except SQLAlchemyError as e:
        logger.error(f"❌ Provider withdraw summary error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load withdrawal summary"
        )


@router.post("/withdraw", response_model=WithdrawalResponse)
def request_withdrawal(
    payload: WithdrawalRequest,
    current_user: User = Depends(get_current_provider),
    db: Session = Depends(get_db),
):
    """
    Log a withdrawal against the provider's available balance.
    Invalid or excessive amounts get a 400 with a specific message.
    """
    try:
        summary = withdrawal_service.request_withdrawal(db, current_user.id, payload.amount)
        return WithdrawalResponse(**summary.model_dump())

    except WithdrawalError as e:
        logger.info(f"⚠️ Withdrawal rejected for provider {current_user.id}: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )
    except SQLAlchemyError as e:
        logger.error(f"❌ Provider withdraw request error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to submit withdrawal request"
        )
