"""
Database Module for Cash Flow Forecast

SQLAlchemy models and the trend data repository.
"""

from .models import db, Transaction
from .trend_repository import TrendDataRepository

__all__ = [
    'db',
    'Transaction',
    'TrendDataRepository',
]
