from fastapi import APIRouter, Depends, Request
from app.core.config import get_settings
from app.dependencies import get_online_wallet_service
from app.middlewares.rate_limit import limiter
from app.schemas.online_wallet import BalanceResponse, DepositRequest, WithdrawalRequest
from app.services.online_wallet import OnlineWalletService

router = APIRouter()
settings = get_settings()


@router.get("/balance", response_model=BalanceResponse)
def balance(service: OnlineWalletService = Depends(get_online_wallet_service)):
    return service.get_balance()


@router.post("/deposit", response_model=BalanceResponse)
@limiter.limit(settings.rate_limit)
def deposit(
    request: Request,
    payload: DepositRequest,
    service: OnlineWalletService = Depends(get_online_wallet_service),
):
    return service.deposit(payload.amount)


@router.post("/withdraw", response_model=BalanceResponse)
@limiter.limit(settings.rate_limit)
def withdraw(
    request: Request,
    payload: WithdrawalRequest,
    service: OnlineWalletService = Depends(get_online_wallet_service),
):
    # InsufficientBalanceError is mapped to a 400 by the app-level handler.
    return service.withdraw(payload.amount)
