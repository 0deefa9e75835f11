"""Tests for AppSync event helpers."""

from typing import Any, Dict

import pytest

from stripe_graphql_api.utils.appsync_types import (
    get_argument,
    get_argument_required,
    get_field,
    get_input,
)
from stripe_graphql_api.utils.errors import AppError, ErrorCode


class TestGetField:
    def test_returns_parent_and_field(self, appsync_event: Dict[str, Any]) -> None:
        """Test that the parent type and field name are read from info."""
        assert get_field(appsync_event) == ("Query", "users")

    def test_missing_info_gives_empty_strings(self) -> None:
        """Test that an event without info yields empty names."""
        assert get_field({}) == ("", "")


class TestArguments:
    def test_get_argument_default(self, appsync_event: Dict[str, Any]) -> None:
        """Test that an absent optional argument returns the default."""
        assert get_argument(appsync_event, "missing", "fallback") == "fallback"

    def test_get_argument_required_missing(self, appsync_event: Dict[str, Any]) -> None:
        """Test that an absent required argument is INVALID_INPUT."""
        with pytest.raises(AppError) as exc_info:
            get_argument_required(appsync_event, "orderId")

        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT
        assert "orderId" in exc_info.value.message

    def test_get_input_requires_object(self) -> None:
        """Test that a non-object input argument is rejected."""
        with pytest.raises(AppError):
            get_input({"arguments": {"input": "not-an-object"}})

    def test_get_input(self) -> None:
        """Test reading the input argument object."""
        assert get_input({"arguments": {"input": {"name": "x"}}}) == {"name": "x"}
