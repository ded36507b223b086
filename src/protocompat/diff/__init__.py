"""Schema diff package: backward-incompatible changes between two schema versions.

Public API re-exports for the diff subpackage.
"""

from protocompat.diff.changes import (
    Change,
    ChangeKind,
    DiffResult,
    Report,
    change_to_dict,
    render_change,
)
from protocompat.diff.engine import (
    diff,
    diff_files,
    diff_set,
    diff_snapshots,
    group_by_package,
)
from protocompat.diff.models import (
    EnumDecl,
    EnumValueDecl,
    FieldDecl,
    FileUnit,
    MessageDecl,
    MethodDecl,
    ReservedRange,
    SchemaSnapshot,
    ServiceDecl,
)
from protocompat.diff.snapshot import (
    snapshot_from_descriptor_set,
    snapshot_from_files,
    snapshot_from_request,
    to_snapshot,
)

__all__ = [
    "Change",
    "ChangeKind",
    "DiffResult",
    "EnumDecl",
    "EnumValueDecl",
    "FieldDecl",
    "FileUnit",
    "MessageDecl",
    "MethodDecl",
    "Report",
    "ReservedRange",
    "SchemaSnapshot",
    "ServiceDecl",
    "change_to_dict",
    "diff",
    "diff_files",
    "diff_set",
    "diff_snapshots",
    "group_by_package",
    "render_change",
    "snapshot_from_descriptor_set",
    "snapshot_from_files",
    "snapshot_from_request",
    "to_snapshot",
]
