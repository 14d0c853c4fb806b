"""
Cash Flow Forecast

Daily cashflow, revenue and expense forecasting for SMBs.
"""

__version__ = "1.0.0"
