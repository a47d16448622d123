import os

BINARY_SNIFF_SIZE = 8192


def list_files(path, include_ext=None):
    """Lists files below path in sorted order, optionally only the ones ending with include_ext."""
    result = []
    for root, subdirs, files in os.walk(path):
        subdirs.sort()
        for filename in sorted(files):
            if include_ext is None or filename.endswith(include_ext):
                result.append(os.path.join(root, filename))

    return result


def is_readable(filename):
    return os.path.isfile(filename) and os.access(filename, os.R_OK)


def is_binary(filename, encoding="UTF-8"):
    """A file is binary if it has a NUL byte near the start or doesn't decode with its encoding."""
    with open(filename, "rb") as fp:
        data = fp.read()
    if b"\0" in data[:BINARY_SNIFF_SIZE]:
        return True
    try:
        data.decode(encoding)
    except UnicodeDecodeError:
        return True
    return False


def read_raw(filename, encoding="UTF-8"):
    # newline="" keeps \r\n and friends exactly as they are on disk
    with open(filename, "r", encoding=encoding, newline="") as fp:
        return fp.read()


def rewrite_in_place(filename, content, encoding="UTF-8"):
    """
    Replaces the contents of an existing file without recreating it, so its
    permission bits (and whatever else hangs off the inode) are kept.
    """
    with open(filename, "r+", encoding=encoding, newline="") as fp:
        fp.seek(0)
        fp.write(content)
        fp.truncate()
