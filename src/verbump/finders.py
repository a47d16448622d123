"""Picks the files to bump and works out which version was just released."""
import os

from . import assignment
from .rewriter import SourceFile
from .util import file_util, str_util


def install_modules(root="."):
    lib = os.path.join(root, "lib")
    return file_util.list_files(lib, (".pm", ".pod"))


def exec_files(root="."):
    result = []
    for dirname in ("bin", "script"):
        result.extend(file_util.list_files(os.path.join(root, dirname)))
    return result


FINDERS = {
    ":InstallModules": install_modules,
    ":ExecFiles": exec_files,
}


def find_paths(finders, root="."):
    paths = []
    for finder in finders:
        find = FINDERS.get(finder)
        if find is None:
            raise ValueError(f"Unknown finder: {finder} (known: {', '.join(sorted(FINDERS))})")
        paths.extend(find(root))
    # same file from two finders is only bumped once
    return list(dict.fromkeys(paths))


def to_source_file(path, encoding="UTF-8", root=".", source_root=None):
    original = path
    if source_root:
        original = os.path.join(source_root, os.path.relpath(path, root))
    is_bytes = file_util.is_readable(original) and file_util.is_binary(original, encoding)
    return SourceFile(path, original, encoding, is_bytes)


def select_files(finders=(), paths=None, include=(), exclude=(), encoding="UTF-8", root=".", source_root=None):
    """
    Returns SourceFiles for the explicitly given paths, or for whatever the
    finders come up with when there are none, filtered by include/exclude.
    """
    if not paths:
        paths = find_paths(finders, root)
    paths = str_util.filter_paths(list(paths), include, exclude)
    return [to_source_file(p, encoding, root, source_root) for p in paths]


def release_version(files, explicit=None, env=None):
    """
    The version that was just released: given explicitly, from $V, or read
    from the first module that declares one.
    """
    if explicit:
        return explicit
    env = os.environ if env is None else env
    if env.get("V"):
        return env["V"]
    for file in files:
        if file.is_bytes or not file.original_name.endswith(".pm"):
            continue
        if not file_util.is_readable(file.original_name):
            continue
        version = assignment.current_version(file_util.read_raw(file.original_name, file.encoding))
        if version:
            return version
    return None
