"""db: BachatBox database library (SQLAlchemy models, engine helpers, Alembic).

Public exports
--------------
- ``Base`` and ``metadata`` for Alembic autogenerate/targeting
- ORM models in ``db.models.finance`` (re-exported for convenience)
- Engine/session helpers in ``db.client``
"""

from __future__ import annotations

from .models.finance import Base, BbGoal, BbTransaction, BbUser, BbWallet, BbWalletTransaction

metadata = Base.metadata

__all__ = [
    "Base",
    "metadata",
    "BbGoal",
    "BbTransaction",
    "BbUser",
    "BbWallet",
    "BbWalletTransaction",
]
