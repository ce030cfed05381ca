"""Response classification, diagnostics and the detailed-call envelope."""

from .classifier import (
    MESSAGE_PREFIX_LENGTH,
    SUCCESS_CODE,
    Classification,
    Expected,
    Unexpected,
    classify,
    is_unexpected,
    read_diagnostic_message,
)
from .details import CallDetails
from .dump import dump_request, dump_response

__all__ = [
    "MESSAGE_PREFIX_LENGTH",
    "SUCCESS_CODE",
    "CallDetails",
    "Classification",
    "Expected",
    "Unexpected",
    "classify",
    "dump_request",
    "dump_response",
    "is_unexpected",
    "read_diagnostic_message",
]
