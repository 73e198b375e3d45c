"""
Service layer for business logic.

This package contains the service that orchestrates the statement
conversion pipeline: workbook decoding, header detection, row parsing
and CSV export.
"""
