from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

# Matches the Numeric(20, 8) ledger columns: at most 12 integer and 8 fractional digits.
AMOUNT_MAX_DIGITS = 20
AMOUNT_DECIMAL_PLACES = 8


class DepositRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES)


class WithdrawalRequest(BaseModel):
    amount: Decimal = Field(..., gt=0, max_digits=AMOUNT_MAX_DIGITS, decimal_places=AMOUNT_DECIMAL_PLACES)


class BalanceResponse(BaseModel):
    amount: Decimal

    model_config = ConfigDict(from_attributes=True)
