"""
Configuration for Cash Flow Forecast
"""
