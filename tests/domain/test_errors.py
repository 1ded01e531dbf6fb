"""Tests for domain error types."""

from bank.domain.errors import (
    ConcurrentUpdateError,
    InvalidAmountError,
    InvalidOperationKindError,
    StoreUnavailableError,
    TransactionRecordingFailedError,
    ValidationError,
)


def test_validation_errors_share_a_base() -> None:
    """Input errors should all derive from ValidationError."""
    assert issubclass(InvalidAmountError, ValidationError)
    assert issubclass(InvalidOperationKindError, ValidationError)


def test_concurrent_update_is_a_store_failure() -> None:
    """ConcurrentUpdateError should be a StoreUnavailableError."""
    assert issubclass(ConcurrentUpdateError, StoreUnavailableError)


def test_recording_failure_reports_successful_compensation() -> None:
    """Without a restore error the failure should count as compensated."""
    cause = StoreUnavailableError("insert failed")

    error = TransactionRecordingFailedError("acc-1", cause)

    assert error.compensated is True
    assert error.cause is cause
    assert "insert failed" in str(error)
    assert "inconsistent" not in str(error)


def test_recording_failure_names_both_failures() -> None:
    """The message should name the append and the restore failures."""
    cause = StoreUnavailableError("insert failed")
    restore = StoreUnavailableError("restore failed")

    error = TransactionRecordingFailedError("acc-1", cause, restore)

    assert error.compensated is False
    assert error.compensation_error is restore
    assert "insert failed" in str(error)
    assert "restore failed" in str(error)
    assert "inconsistent" in str(error)
