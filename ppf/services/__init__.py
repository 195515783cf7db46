"""Service modules"""
from .oracle import PriceFeedOracle

__all__ = ["PriceFeedOracle"]
