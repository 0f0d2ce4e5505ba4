"""Unit tests for the Result success/failure value."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from shared.domain.result import Result

pytestmark = pytest.mark.unit


class TestResultConstructors:
    def test_success_carries_value_and_200(self):
        result = Result.success(42)

        assert result.is_success is True
        assert result.is_failure is False
        assert result.value == 42
        assert result.status_code == 200
        assert result.error_message == ""

    def test_failure_carries_code_and_message_without_value(self):
        result = Result.failure(404, "not here")

        assert result.is_success is False
        assert result.is_failure is True
        assert result.value is None
        assert result.status_code == 404
        assert result.error_message == "not here"

    def test_results_compare_by_value(self):
        assert Result.success("a") == Result.success("a")
        assert Result.failure(500, "x") == Result.failure(500, "x")
        assert Result.failure(500, "x") != Result.failure(502, "x")


class TestResultInvariants:
    def test_success_with_non_200_status_rejected(self):
        with pytest.raises(ValueError):
            Result(is_success=True, value=1, status_code=201)

    def test_success_with_error_message_rejected(self):
        with pytest.raises(ValueError):
            Result(is_success=True, value=1, error_message="oops")

    def test_failure_with_value_rejected(self):
        with pytest.raises(ValueError):
            Result(is_success=False, value=1, error_message="x", status_code=400)

    def test_result_is_immutable(self):
        result = Result.success(1)
        with pytest.raises(FrozenInstanceError):
            result.value = 2  # type: ignore[misc]
