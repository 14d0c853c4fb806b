"""
Cash Flow Forecast web application
"""
