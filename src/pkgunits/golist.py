"""Decode ``go list -json`` output into package descriptors.

``go list -json -test ./...`` prints one JSON object per package,
concatenated without separators. Test variants carry a bracketed suffix
in ``ImportPath``, e.g. ``example.com/foo [example.com/foo.test]``; the
module path of such a variant is the part before the bracket.
"""

import json
from pathlib import Path
from typing import Any

from .models import Descriptor

_decoder = json.JSONDecoder()


def strip_variant(import_path: str) -> str:
    """'example.com/foo [example.com/foo.test]' -> 'example.com/foo'"""
    bracket = import_path.find(" [")
    if bracket != -1 and import_path.endswith("]"):
        return import_path[:bracket]
    return import_path


def split_json_objects(text: str) -> list[dict[str, Any]]:
    """Split a stream of concatenated JSON objects.

    Also accepts a single JSON array of objects.
    """
    objects: list[dict[str, Any]] = []
    pos = 0
    end = len(text)
    while True:
        while pos < end and text[pos].isspace():
            pos += 1
        if pos >= end:
            break
        try:
            value, pos = _decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            raise ValueError(f"Malformed go list output at offset {e.pos}: {e.msg}") from e
        if isinstance(value, list):
            objects.extend(value)
        else:
            objects.append(value)
    return objects


def descriptor_from_record(record: dict[str, Any]) -> Descriptor:
    """Build a descriptor from one ``go list`` package record."""
    if not isinstance(record, dict):
        raise ValueError(f"Expected a JSON object, got {type(record).__name__}")
    import_path = record.get("ImportPath")
    if not import_path:
        raise ValueError(f"Package record without ImportPath: {record!r:.200}")

    directory = record.get("Dir")
    go_files = []
    for name in record.get("GoFiles") or []:
        if directory and not Path(name).is_absolute():
            go_files.append(str(Path(directory) / name))
        else:
            go_files.append(name)

    return Descriptor(
        id=import_path,
        name=record.get("Name", ""),
        pkg_path=strip_variant(import_path),
        go_files=go_files,
    )


def parse_go_list(text: str) -> list[Descriptor]:
    """
    Parse the complete output of ``go list -json``.

    Args:
        text: Raw command output

    Returns:
        Descriptors in the order the records appear

    Raises:
        ValueError: on malformed JSON or records missing ImportPath
    """
    return [descriptor_from_record(r) for r in split_json_objects(text)]
