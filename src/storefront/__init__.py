"""Domain-driven storefront: customers, products and orders with async SQL persistence."""

__version__ = "0.1.0"
