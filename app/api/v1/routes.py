from fastapi import APIRouter
from app.api.v1.endpoints import online_wallet

router = APIRouter()

router.include_router(online_wallet.router, prefix="/onlinewallet", tags=["onlinewallet"])
