"""Folio — portfolio site backend.

Serves the public marketing site's data (blog, contact form) and a small
session-authenticated admin API for managing blog content.
"""

__version__ = "0.1.0"
