"""
Exceptions raised by datanode-core.

Everything derives from DataNodeError so callers inside a transaction loop
can catch the whole family in one place. Input validation errors also
subclass ValueError.
"""


class DataNodeError(Exception):
    """Base class for all datanode-core errors."""


class EmptyDataRecordError(DataNodeError):
    """Raised when summarising a DataRecord that holds no readings."""


class InvalidChannelError(DataNodeError, ValueError):
    """Raised when a NodeChannel is built without a variable name."""


class InvalidRecordError(DataNodeError, ValueError):
    """Raised when a reading field does not fit in an unsigned 32-bit integer."""


class InvalidTimeFrameError(DataNodeError, ValueError):
    """Raised for negative epoch seconds or time-frame numbers."""


class OutOfTimeFrameError(DataNodeError):
    """Raised when a reading's timestamp falls outside its DataRecord's time frame."""


class UnknownChannelError(DataNodeError):
    """Raised when storing readings for a channel the node never declared."""


class RecordDecodeError(DataNodeError):
    """Raised when stored bytes cannot be decoded into a DataRecord or DataNode."""
