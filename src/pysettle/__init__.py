from .errors import SettleError
from .manager import Manager, create
from .metadata import (
    LeafMetadata,
    NamespaceMetadata,
    RecordMetadata,
    metadata_to_data,
    metadata_to_dict,
)
from .notify import LoggingSink, NotificationSink, NullSink
from .spec import Fixup, FixupInfo, Leaf, Namespace, Record, Violation
from .validation import validate_spec


__all__ = [
    "Manager",
    "create",
    "SettleError",
    "Leaf",
    "Namespace",
    "Record",
    "Fixup",
    "Violation",
    "FixupInfo",
    "LeafMetadata",
    "NamespaceMetadata",
    "RecordMetadata",
    "metadata_to_data",
    "metadata_to_dict",
    "NotificationSink",
    "LoggingSink",
    "NullSink",
    "validate_spec",
]
