"""Derive type-file names and locations from operations.

Operation ids:
  - first character upper-cased
  - trailing _<digits> removed (generators de-duplicate ids that way)

Paths map to one directory per segment, {param} rewritten to [param].

Examples:
  getUser_2                  -> GetUser
  listItems                  -> ListItems
  /users/{id}/orders         -> users/[id]/orders
  GET  /users/{id} getUser   -> users/[id]/getGetUser.ts
"""

from __future__ import annotations

import re
from pathlib import Path

TYPES_EXTENSION = ".ts"

_DEDUP_SUFFIX = re.compile(r"_\d+$")
_PATH_PARAM = re.compile(r"\{(\w+)\}")


def normalize_operation_id(operation_id: str) -> str:
    """Normalize a raw operationId for use in a file name."""
    if not operation_id:
        return operation_id
    return operation_id[0].upper() + _DEDUP_SUFFIX.sub("", operation_id[1:])


def path_to_directory(path: str) -> str:
    """Map an API path template to its relative output directory."""
    return _PATH_PARAM.sub(r"[\1]", path[1:] if path.startswith("/") else path)


def build_file_name(method: str, operation_id: str) -> str:
    """Build the artifact file name, e.g. 'getListItems.ts'."""
    return f"{method.lower()}{operation_id}{TYPES_EXTENSION}"


def artifact_path(output_root: Path, path: str, method: str, operation_id: str) -> Path:
    """Full path of the file holding an operation's types."""
    return output_root / path_to_directory(path) / build_file_name(method, operation_id)
