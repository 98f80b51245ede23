"""Exceptions raised by the ledgerview pipeline."""


class LedgerviewError(Exception):
    """Base exception for ledgerview errors"""
    pass


class InputError(LedgerviewError):
    """No input text, unreadable file, or required columns missing"""
    pass


class ComputationError(LedgerviewError):
    """Unexpected failure while aggregating a record set"""
    pass


class ExportError(LedgerviewError):
    """Empty collection or serialization failure during table export"""
    pass
