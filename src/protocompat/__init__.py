"""ProtoCompat: detect backward-incompatible protobuf schema changes."""

from protocompat.core.errors import IncompatibleChangesError, MalformedSchemaError
from protocompat.diff import (
    ChangeKind,
    DiffResult,
    Report,
    SchemaSnapshot,
    diff,
    diff_files,
    diff_set,
    diff_snapshots,
    render_change,
    to_snapshot,
)

__all__ = [
    "ChangeKind",
    "DiffResult",
    "IncompatibleChangesError",
    "MalformedSchemaError",
    "Report",
    "SchemaSnapshot",
    "diff",
    "diff_files",
    "diff_set",
    "diff_snapshots",
    "render_change",
    "to_snapshot",
]
