"""Unit tests for etdep.models.compatibility module."""

from __future__ import annotations

import pytest

from etdep.models import CompatibilityResult


@pytest.mark.unit
class TestCompatibilityResult:
    """Tests for CompatibilityResult."""

    def test_to_json_full(self) -> None:
        result = CompatibilityResult(True, "24.1.0", "[24.0.0, 25.0.0)")

        assert result.to_json() == {
            "isCompatible": True,
            "currentCoreVersion": "24.1.0",
            "coreVersionRange": "[24.0.0, 25.0.0)",
        }
        assert result.failed is False

    def test_to_json_omits_unknown_fields(self) -> None:
        assert CompatibilityResult(False).to_json() == {"isCompatible": False}

    def test_failure(self) -> None:
        result = CompatibilityResult.failure(RuntimeError("boom"), "24.1.0")

        assert result.is_compatible is False
        assert result.failed is True
        assert result.to_json() == {
            "isCompatible": False,
            "currentCoreVersion": "24.1.0",
            "error": "An error occurred: boom",
        }

    def test_failure_keeps_checked_range(self) -> None:
        result = CompatibilityResult.failure(ValueError("bad"), "24.1.0", "24-25")

        assert result.core_version_range == "24-25"
        assert result.error == "An error occurred: bad"
