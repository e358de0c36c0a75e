"""
Business layer for the Library Manager.
Domain rules live here; models live in library_manager.data.
"""
