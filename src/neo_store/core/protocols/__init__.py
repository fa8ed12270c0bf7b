"""Store protocols."""

from .store_protocol import StoreProtocol

__all__ = ["StoreProtocol"]
