"""Unit tests for core and markup exception classes."""

from __future__ import annotations

import pytest

from core.exceptions import ChatMarkupError, ProcessingError, ValidationError
from markup.exceptions import EmptyInputError, InputTooLargeError, SegmentationError


@pytest.mark.unit
class TestChatMarkupError:
    """Tests for the base exception."""

    @pytest.mark.parametrize(
        "cls, code",
        [
            (ChatMarkupError, "CHAT_MARKUP_ERROR"),
            (ValidationError, "VALIDATION_ERROR"),
            (ProcessingError, "PROCESSING_ERROR"),
        ],
    )
    def test_default_error_code_from_class_name(self, cls: type[ChatMarkupError], code: str) -> None:
        """Test the error code is derived from the class name."""
        assert cls("boom").error_code == code

    def test_explicit_error_code(self) -> None:
        """Test an explicit error code wins."""
        assert ChatMarkupError("boom", error_code="CUSTOM").error_code == "CUSTOM"

    def test_to_dict_minimal(self) -> None:
        """Test only code and message are serialized when nothing else is set."""
        assert ChatMarkupError("boom").to_dict() == {"error_code": "CHAT_MARKUP_ERROR", "message": "boom"}

    def test_to_dict_full(self) -> None:
        """Test details, context and the wrapped exception are serialized."""
        original = KeyError("k")
        err = ProcessingError(
            "failed",
            details="KeyError: 'k'",
            context={"request_id": "req_1"},
            original_exception=original,
        )
        assert err.to_dict() == {
            "error_code": "PROCESSING_ERROR",
            "message": "failed",
            "details": "KeyError: 'k'",
            "context": {"request_id": "req_1"},
            "original_exception": {"type": "KeyError", "module": "builtins", "message": "'k'"},
        }

    def test_str_is_message(self) -> None:
        """Test str() of the exception is its message."""
        assert str(ValidationError("bad input")) == "bad input"


@pytest.mark.unit
@pytest.mark.markup
class TestMarkupExceptions:
    """Tests for the markup service exceptions."""

    def test_input_too_large(self) -> None:
        """Test InputTooLargeError is a ValidationError with a fixed code."""
        err = InputTooLargeError(details="600 characters > 500 allowed")
        assert isinstance(err, ValidationError)
        assert err.error_code == "INPUT_TOO_LARGE"
        assert err.message == "Message input too large"

    def test_empty_input(self) -> None:
        """Test EmptyInputError defaults."""
        err = EmptyInputError(context={"endpoint": "/speakable"})
        assert isinstance(err, ValidationError)
        assert err.error_code == "EMPTY_INPUT"
        assert err.context == {"endpoint": "/speakable"}

    def test_segmentation_error(self) -> None:
        """Test SegmentationError is a ProcessingError keeping the original exception."""
        original = RuntimeError("x")
        err = SegmentationError(original_exception=original)
        assert isinstance(err, ProcessingError)
        assert err.error_code == "SEGMENTATION_ERROR"
        assert err.original_exception is original
