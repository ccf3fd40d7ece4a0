"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF handler rendering those exceptions.

Usage from any app::

    from core.domain.exceptions import NotFound, PermissionDenied, ValidationError
"""
