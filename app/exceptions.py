class WithdrawalError(Exception):
    """Rejected withdrawal request. Raised before anything is written."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAmount(WithdrawalError):
    def __init__(self, message: str = "Please enter a valid withdrawal amount"):
        super().__init__(message)


class InsufficientBalance(WithdrawalError):
    def __init__(
        self,
        requested: float,
        available: float,
        message: str = "Withdrawal amount exceeds your available balance",
    ):
        super().__init__(message)
        self.requested = requested
        self.available = available
