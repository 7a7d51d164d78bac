from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, Union


class WithdrawalSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    total_earned: float = 0.0
    withdrawn_total: float = 0.0
    available_balance: float = 0.0


class WithdrawalRequest(BaseModel):
    """Amount is validated by the ledger so a bad value gets the ledger's message"""
    amount: Optional[Union[float, str]] = None


class WithdrawalResponse(WithdrawalSummary):
    message: str = "Withdrawal request submitted successfully"
