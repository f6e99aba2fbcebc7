from app.models.online_wallet_entry import OnlineWalletEntry
from app.models.balance import Balance

__all__ = [
    "OnlineWalletEntry",
    "Balance",
]
