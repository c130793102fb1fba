# ruff: noqa: I001
"""BachatBox core tables: users, transactions, goals, wallets.

Revision ID: 0001_bachatbox_core
Revises: None
Create Date: 2026-10-19
"""

from __future__ import annotations

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "0001_bachatbox_core"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _pk() -> sa.Column:
    return sa.Column(
        "id",
        sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
        primary_key=True,
        autoincrement=True,
    )


def upgrade() -> None:
    # bb_users
    op.create_table(
        "bb_users",
        _pk(),
        sa.Column("username", sa.String(), nullable=False, unique=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    # bb_transactions
    op.create_table(
        "bb_transactions",
        _pk(),
        sa.Column(
            "user_id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            sa.ForeignKey("bb_users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(), nullable=False),
        sa.Column("transaction_type", sa.String(), nullable=False),
        sa.Column(
            "date",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "transaction_type in ('income','expense')", name="ck_bb_tx_transaction_type"
        ),
        sa.CheckConstraint("amount >= 0", name="ck_bb_tx_amount_non_negative"),
    )
    op.create_index("ix_bb_transactions_user_id", "bb_transactions", ["user_id"])

    # bb_goals
    op.create_table(
        "bb_goals",
        _pk(),
        sa.Column(
            "user_id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            sa.ForeignKey("bb_users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("target_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("current_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("target_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("monthly_income", sa.Numeric(12, 2), nullable=False),
    )
    op.create_index("ix_bb_goals_user_id", "bb_goals", ["user_id"])

    # bb_wallets (one per user)
    op.create_table(
        "bb_wallets",
        _pk(),
        sa.Column(
            "user_id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            sa.ForeignKey("bb_users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("balance", sa.Numeric(12, 2), nullable=False),
    )

    # bb_wallet_transactions
    op.create_table(
        "bb_wallet_transactions",
        _pk(),
        sa.Column(
            "wallet_id",
            sa.BigInteger().with_variant(sa.Integer(), "sqlite"),
            sa.ForeignKey("bb_wallets.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("transaction_type", sa.String(), nullable=False),
        sa.Column("category", sa.String(), nullable=True),
        sa.Column(
            "date",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.CheckConstraint(
            "transaction_type in ('credit','debit')", name="ck_bb_wtx_transaction_type"
        ),
        sa.CheckConstraint("amount >= 0", name="ck_bb_wtx_amount_non_negative"),
    )
    op.create_index(
        "ix_bb_wallet_transactions_wallet_id", "bb_wallet_transactions", ["wallet_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_bb_wallet_transactions_wallet_id", table_name="bb_wallet_transactions")
    op.drop_table("bb_wallet_transactions")
    op.drop_table("bb_wallets")
    op.drop_index("ix_bb_goals_user_id", table_name="bb_goals")
    op.drop_table("bb_goals")
    op.drop_index("ix_bb_transactions_user_id", table_name="bb_transactions")
    op.drop_table("bb_transactions")
    op.drop_table("bb_users")
