"""
Version 1 of the API.

Mounted under ``settings.api_prefix`` (``/api`` by default) so the
paths stay ``/api/books`` for existing clients.
"""
