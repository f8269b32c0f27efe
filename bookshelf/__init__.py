"""
Bookshelf API: an in-memory REST API for book records.

This package provides:
- Book creation, listing with filters, retrieval, update and deletion
- An injectable in-memory store
- Structured request and error logging
"""

__version__ = "1.0.0"
