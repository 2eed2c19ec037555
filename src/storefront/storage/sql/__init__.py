"""Async SQLAlchemy storage adapter."""

from .connection import Database, create_engine
from .repos import CustomerRepository, OrderRepository, ProductRepository

__all__ = [
    "CustomerRepository",
    "Database",
    "OrderRepository",
    "ProductRepository",
    "create_engine",
]
