"""Adapter construction service."""

from src.exchange.service.factory import create_adapter

__all__ = ["create_adapter"]
