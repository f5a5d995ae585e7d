"""
Quote Fetcher Test Suite
========================

This package contains the tests for the quote fetcher including:
- Unit tests for the quote model, the data source, configuration and logging
- Integration tests for the complete fetch-and-print flow
"""
