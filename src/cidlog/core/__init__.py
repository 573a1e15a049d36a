"""
Core configuration, diagnostics logging and exceptions for cidlog.
"""
