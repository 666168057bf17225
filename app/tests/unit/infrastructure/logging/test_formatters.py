"""Unit tests for infrastructure.logging.formatters.

Tests cover:
- add_app_info processor
- mask_sensitive_data processor (credential fields)
- truncate_large_values processor
"""

import pytest

from infrastructure.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_app_info,
    mask_sensitive_data,
    truncate_large_values,
)


@pytest.mark.unit
class TestAddAppInfo:
    def test_adds_name_and_version(self):
        processor = add_app_info("aws-org-metadata", "abc123")

        result = processor(None, "info", {"event": "entry_upserted"})

        assert result["app_name"] == "aws-org-metadata"
        assert result["app_version"] == "abc123"
        assert result["event"] == "entry_upserted"

    def test_default_version(self):
        result = add_app_info("aws-org-metadata")(None, "info", {"event": "x"})

        assert result["app_version"] == "unknown"


@pytest.mark.unit
class TestMaskSensitiveData:
    @pytest.mark.parametrize(
        "key",
        ["secret_access_key", "SessionToken", "external_id", "aws_access_key_id", "credentials"],
    )
    def test_credential_fields_are_masked(self, key):
        processor = mask_sensitive_data()

        result = processor(None, "info", {"event": "x", key: "value"})

        assert result[key] == "***REDACTED***"

    def test_regular_fields_untouched(self):
        processor = mask_sensitive_data()

        result = processor(None, "info", {"event": "x", "entry_id": "111", "role_arn": "arn"})

        assert result["entry_id"] == "111"
        assert result["role_arn"] == "arn"

    def test_none_values_are_left_alone(self):
        result = mask_sensitive_data()(None, "info", {"token": None})

        assert result["token"] is None

    def test_additional_patterns(self):
        processor = mask_sensitive_data(additional_patterns=frozenset({"email"}))

        result = processor(None, "info", {"email_address": "a@example.com"})

        assert result["email_address"] == "***REDACTED***"

    def test_patterns_cover_external_id(self):
        assert "external_id" in SENSITIVE_PATTERNS


@pytest.mark.unit
class TestTruncateLargeValues:
    def test_long_strings_are_truncated(self):
        processor = truncate_large_values(max_length=10)

        result = processor(None, "info", {"error": "x" * 25})

        assert result["error"].startswith("x" * 10)
        assert "25 chars total" in result["error"]

    def test_short_strings_kept(self):
        result = truncate_large_values(max_length=10)(None, "info", {"error": "short"})

        assert result["error"] == "short"
