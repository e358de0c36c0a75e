"""
Presentation services.
Read models assembled for the presentation layer; no mutations happen here.
"""
