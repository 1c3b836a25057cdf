# transfer_audit/errors.py


class TransferAuditError(Exception):
    """Base class for errors raised by transfer_audit itself."""


class ConfigurationError(TransferAuditError, ValueError):
    pass


class GraphError(TransferAuditError):
    """Graph document is missing coordinates or edge lengths."""
