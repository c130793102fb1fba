"""SQLAlchemy models registry for the BachatBox database."""

from .finance import Base, BbGoal, BbTransaction, BbUser, BbWallet, BbWalletTransaction

__all__ = [
    "Base",
    "BbGoal",
    "BbTransaction",
    "BbUser",
    "BbWallet",
    "BbWalletTransaction",
]
