from typing import NamedTuple

from . import assignment, events
from .util import file_util

REWRITTEN = "rewritten"
SKIPPED_BINARY = "skipped_binary"
SKIPPED_POD_ONLY = "skipped_pod_only"
SKIPPED_NOT_FOUND = "skipped_not_found"
SKIPPED_NO_MATCH = "skipped_no_match"

SKIPPED = (SKIPPED_BINARY, SKIPPED_POD_ONLY, SKIPPED_NOT_FOUND, SKIPPED_NO_MATCH)


class SourceFile(NamedTuple):
    """
    A file to bump. name is where the result is written, original_name is
    where the current contents are read from (the same path unless the
    sources live in an overlay).
    """
    name: str
    original_name: str
    encoding: str = "UTF-8"
    is_bytes: bool = False

    @classmethod
    def from_path(cls, path, encoding="UTF-8", is_bytes=False):
        return cls(path, path, encoding, is_bytes)


def skip_reason(file: SourceFile):
    if file.is_bytes:
        return SKIPPED_BINARY
    if file.name.endswith(".pod"):
        return SKIPPED_POD_ONLY
    if not file_util.is_readable(file.original_name):
        return SKIPPED_NOT_FOUND
    return None


def process(file: SourceFile, new_version: str, global_: bool = False) -> str:
    """Bumps the $VERSION line of a single file and returns what happened to it."""
    reason = skip_reason(file)
    if reason is None:
        content = file_util.read_raw(file.original_name, file.encoding)
        content, matched = assignment.rewrite(content, new_version, global_)
        if matched:
            file_util.rewrite_in_place(file.name, content, file.encoding)
            events.emit(
                events.FILE_REWRITTEN,
                name=file.name,
                original_name=file.original_name,
                version=new_version,
            )
            return REWRITTEN
        reason = SKIPPED_NO_MATCH

    events.emit(events.FILE_SKIPPED, name=file.name, reason=reason)
    return reason
