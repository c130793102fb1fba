"""Public interface for the ``bachatbox`` package.

Transaction file import for the BachatBox finance app: CSV/Excel statements
and payment-app exports are decoded, their columns recognized from header
text, and every row normalized into a canonical transaction ready for a
store. This module only re-exports the stable import surface.
"""

from .api import (
    import_transactions,
    preview_file,
    process_csv_transactions,
    store_transactions,
    store_wallet_transactions,
)
from .categories import classify_category, display_name
from .errors import DecodeError, InsufficientBalance, RecordNotFound, UnsupportedFileType
from .goals import SavingsPlan, savings_plan
from .ingest import aimport_batch, decode, detect_roles, import_batch, normalize
from .models import (
    CanonicalTransaction,
    Goal,
    ImportBatch,
    Transaction,
    TransactionCreate,
    Wallet,
    WalletTransaction,
    WalletTransactionCreate,
)
from .storage import ImportSink, MemoryStore
from .wallet import add_money, make_payment

__all__ = [
    # API
    "import_transactions",
    "preview_file",
    "process_csv_transactions",
    "store_transactions",
    "store_wallet_transactions",
    "add_money",
    "savings_plan",
    "make_payment",
    # Pipeline
    "aimport_batch",
    "classify_category",
    "decode",
    "detect_roles",
    "display_name",
    "import_batch",
    "normalize",
    # Storage
    "ImportSink",
    "MemoryStore",
    # Models / types
    "CanonicalTransaction",
    "Goal",
    "ImportBatch",
    "SavingsPlan",
    "Transaction",
    "TransactionCreate",
    "Wallet",
    "WalletTransaction",
    "WalletTransactionCreate",
    # Errors
    "DecodeError",
    "InsufficientBalance",
    "RecordNotFound",
    "UnsupportedFileType",
]
