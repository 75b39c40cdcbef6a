"""Shared support for the Cryptopia-style REST API family."""

from src.exchange.adapters.cryptopia.adapter import CryptopiaStyleAdapter

__all__ = [
    "CryptopiaStyleAdapter",
]
