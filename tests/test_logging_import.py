"""
Test that oracle_logging can be imported without circular import and logger works.
"""

from __future__ import annotations


def test_logging_import():
    """Import get_logger from oracle_logging and use the logger."""
    from asset_oracle.oracle_logging import get_logger

    logger = get_logger("test")
    assert logger is not None
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")
    assert hasattr(logger, "error")
    logger.info("test_message", key="value")


def test_bind_submission_logger():
    """bind_submission returns a logger usable like get_logger."""
    from asset_oracle.oracle_logging import bind_submission

    logger = bind_submission("sub-123")
    logger.info("test_bound_message", step="commitment")


def test_bound_submission_id_and_event_type():
    """Pipeline lines carry submission_id; the positional event becomes event_type."""
    from structlog.testing import capture_logs

    from asset_oracle.oracle_logging import bind_submission
    from asset_oracle.oracle_logging.logger import _rename_event

    with capture_logs() as logs:
        bind_submission("sub-7", "tests").info("commitment_built", leaf_count=4)
    assert logs[0]["submission_id"] == "sub-7"
    assert logs[0]["leaf_count"] == 4
    assert _rename_event(None, "info", {"event": "ledger_skipped"}) == {"event_type": "ledger_skipped"}
