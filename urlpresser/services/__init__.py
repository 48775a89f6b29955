"""
Services module for business logic separation.

This module contains the URL store, the key generator and the service
classes the API endpoints delegate to.
"""
