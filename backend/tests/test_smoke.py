"""
Smoke tests — verify that Django boots, URL routing resolves, and
the core domain modules are importable.

These tests do NOT require real data; they just prove the plumbing
works.
"""

from __future__ import annotations

import pytest
from django.urls import resolve, reverse


# ════════════════════════════════════════════════════════════════════
#  URL Routing Smoke Tests
# ════════════════════════════════════════════════════════════════════

class TestURLRouting:
    """Ensure all top-level app URL names resolve to the expected paths."""

    EXPECTED_URLS = [
        # (url_name, expected_path)
        ("complaint-list",       "/api/complaints/"),
        ("complaint-summary",    "/api/complaints/summary/"),
        ("catalog:train-list",   "/api/catalog/trains/"),
        ("accounts:login",       "/api/accounts/auth/login/"),
        ("accounts:me",          "/api/accounts/me/"),
        ("accounts:me-password", "/api/accounts/me/password/"),
        ("accounts:register",    "/api/accounts/auth/register/"),
        ("accounts:roster",      "/api/accounts/auth/roster/"),
        ("schema",               "/api/schema/"),
    ]

    @pytest.mark.parametrize("url_name,expected_path", EXPECTED_URLS)
    def test_url_reverses(self, url_name: str, expected_path: str):
        assert reverse(url_name) == expected_path

    @pytest.mark.parametrize("url_name,expected_path", EXPECTED_URLS)
    def test_url_resolve_matches_view(self, url_name: str, expected_path: str):
        match = resolve(expected_path)
        assert match.func is not None

    def test_detail_route_rejects_non_uuid(self):
        from django.urls import Resolver404

        with pytest.raises(Resolver404):
            resolve("/api/complaints/summary-x/")


# ════════════════════════════════════════════════════════════════════
#  Exception Behaviour Tests
# ════════════════════════════════════════════════════════════════════

class TestDomainExceptions:
    """Unit tests for domain exception classes."""

    def test_hierarchy(self):
        from core.domain.exceptions import (
            DomainError,
            EvidenceUploadFailed,
            NotFound,
            PermissionDenied,
            StoreError,
            SyncError,
            ValidationError,
        )
        assert issubclass(EvidenceUploadFailed, StoreError)
        for exc in (ValidationError, PermissionDenied, NotFound, StoreError, SyncError):
            assert issubclass(exc, DomainError)

    def test_validation_error_names_field(self):
        from core.domain.exceptions import ValidationError
        err = ValidationError("pnr_number is required.", field="pnr_number")
        assert str(err) == "pnr_number is required."
        assert err.details == {"field": "pnr_number"}

    def test_evidence_upload_failed_carries_complaint_id(self):
        from core.domain.exceptions import EvidenceUploadFailed
        err = EvidenceUploadFailed("upload failed", complaint_id="abc")
        assert err.complaint_id == "abc"
        assert err.details == {"complaint_id": "abc"}


# ════════════════════════════════════════════════════════════════════
#  Exception Handler Tests
# ════════════════════════════════════════════════════════════════════

class TestDomainExceptionHandler:

    @pytest.mark.parametrize(
        "exc_name,expected_status",
        [
            ("ValidationError", 400),
            ("PermissionDenied", 403),
            ("NotFound", 404),
            ("StoreError", 503),
        ],
    )
    def test_status_mapping(self, exc_name: str, expected_status: int):
        from core.domain import exceptions
        from core.domain.exception_handler import domain_exception_handler

        exc = getattr(exceptions, exc_name)("boom")
        response = domain_exception_handler(exc, {"view": None})
        assert response.status_code == expected_status
        assert response.data["detail"] == "boom"

    def test_evidence_upload_failed_body(self):
        from core.domain.exception_handler import domain_exception_handler
        from core.domain.exceptions import EvidenceUploadFailed

        response = domain_exception_handler(
            EvidenceUploadFailed("upload failed", complaint_id="abc"), {},
        )
        assert response.status_code == 503
        assert response.data == {"detail": "upload failed", "complaint_id": "abc"}

    def test_unknown_exception_is_not_handled(self):
        from core.domain.exception_handler import domain_exception_handler
        assert domain_exception_handler(RuntimeError("x"), {}) is None
