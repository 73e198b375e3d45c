"""
Core processing modules for the statement converter.

This package contains:
- config: Application configuration and settings
- exceptions: Custom exception classes
- exporters: CSV export
- grid: Cell grid model
- logger: Logging configuration
- normalize: Date and amount normalization
- parsing: Header detection and row parsing
- reader: Workbook decoding (xlsx/xls)
- schema: Pydantic models for pipeline results
"""
