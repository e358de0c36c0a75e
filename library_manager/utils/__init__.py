"""
Shared utilities for the Library Manager
"""
