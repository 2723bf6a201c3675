"""
Structured logging for the asset oracle.

JSON logs with timestamp, submission_id, event_type.
Use get_logger() in all oracle modules for aggregation-friendly output.
"""

from asset_oracle.oracle_logging.logger import bind_submission, get_logger

__all__ = ["bind_submission", "get_logger"]
