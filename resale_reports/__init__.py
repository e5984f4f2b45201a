"""Inventory and sales analytics for a resale inventory console."""

__version__ = "0.1.0"
