import os
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from . import events, rewriter
from .rewriter import SourceFile
from .util import file_util
from .version import compute_next_version

MAKEFILE_PL = "Makefile.PL"
MAKEFILE_VERSION_RE = re.compile(r'"VERSION" => "[^"]+"')


@dataclass
class BumpReport:
    version: str
    next_version: str
    files: list[tuple[str, str]] = field(default_factory=list)
    # None when Makefile.PL wasn't looked at, otherwise whether it was changed
    makefile_pl: Optional[bool] = None

    def rewritten(self) -> list[str]:
        return [name for name, outcome in self.files if outcome == rewriter.REWRITTEN]

    def skipped(self) -> list[tuple[str, str]]:
        return [(name, outcome) for name, outcome in self.files if outcome in rewriter.SKIPPED]


def rewrite_makefile_pl(path, next_version) -> bool:
    content = file_util.read_raw(path, "UTF-8")
    content, n = MAKEFILE_VERSION_RE.subn(
        lambda _m: f'"VERSION" => "{next_version}"', content, count=1
    )
    if n:
        file_util.rewrite_in_place(path, content, "UTF-8")
        return True
    return False


def bump(
    files: Iterable[SourceFile],
    release_version: str,
    allow_decimal_underscore: bool = False,
    global_: bool = False,
    munge_makefile_pl: bool = True,
    root: str = ".",
) -> BumpReport:
    """
    Rewrites the $VERSION declaration of every file to the version after
    release_version and, optionally, the VERSION entry of <root>/Makefile.PL.

    An unacceptable release_version raises InvalidVersionError before any
    file is touched. I/O errors propagate and files that were already
    rewritten stay rewritten.
    """
    files = list(files)
    next_version = compute_next_version(release_version, allow_decimal_underscore)
    report = BumpReport(release_version, next_version)
    events.emit(
        events.RUN_STARTED,
        version=release_version,
        next_version=next_version,
        names=[f.name for f in files],
    )

    for file in files:
        outcome = rewriter.process(file, next_version, global_)
        report.files.append((file.name, outcome))

    makefile = os.path.join(root, MAKEFILE_PL)
    if munge_makefile_pl and os.path.isfile(makefile):
        report.makefile_pl = rewrite_makefile_pl(makefile, next_version)
        if report.makefile_pl:
            events.emit(events.METADATA_REWRITTEN, name=makefile, version=next_version)
        else:
            events.emit(events.METADATA_UNCHANGED, name=makefile)

    events.emit(events.RUN_FINISHED, report=report)
    return report
