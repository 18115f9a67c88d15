"""Pydantic schemas for point lookup endpoints."""

from enum import Enum


class OrderExpansion(str, Enum):
    """Related entities that can be resolved into an order lookup."""

    CUSTOMER = "customer"
    PRODUCTS = "products"
