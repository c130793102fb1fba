"""File import pipeline: decoder, column roles, row normalizer, provider adapters."""

from .assembler import aimport_batch, import_batch
from .decoder import decode, file_kind_for
from .normalize import normalize, parse_amount, parse_date
from .providers import PROVIDERS, ProviderAdapter, get_adapter
from .roles import detect_roles

__all__ = [
    "PROVIDERS",
    "ProviderAdapter",
    "aimport_batch",
    "decode",
    "detect_roles",
    "file_kind_for",
    "get_adapter",
    "import_batch",
    "normalize",
    "parse_amount",
    "parse_date",
]
