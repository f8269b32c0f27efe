"""
Shared utilities for the Bookshelf API (structured logging).
"""
