"""Finds and rewrites ``our $VERSION = '...';`` lines.

Matching is intentionally a line-anchored regular expression and not a Perl
parser: the declaration has to sit at the start of a line, look exactly like
an ``our`` assignment of a quoted version literal, and everything after the
semicolon on that line is thrown away when the line is rewritten.
"""
import re

# perl's version::LAX, used for matching only; what we bump *to* is validated elsewhere
LAX_VERSION = r"""
    (?:
        v\d+ (?: (?:\.\d+)+ (?:_\d+)? )?      # v1  v1.2.3  v1.2.3_4
      | \d* (?:\.\d+){2,} (?:_\d+)?           # 1.2.3  .1.2
      | \d+ (?: \.\d+ | \. )? (?:_\d+)?       # 1  1.  1.23  1.23_01  1_02  1._02
      | \.\d+ (?:_\d+)?                       # .23
      | undef
    )
"""

ASSIGN_RE = re.compile(
    r"""
    ^our \s+ \$VERSION \s* = \s*
    (['"]) (?P<version>""" + LAX_VERSION + r""") \1 \s* ;
    (?: \s* \# \s TRIAL )? [^\n]*
    (?: \n \$VERSION \s = \s eval \s \$VERSION ; )?
    [^\n]*$
    """,
    re.MULTILINE | re.VERBOSE | re.ASCII,
)

NORMALIZE_STATEMENT = "$VERSION = eval $VERSION;"


def needs_normalization(version: str) -> bool:
    """Decimal versions with an underscore need an eval to drop it at runtime."""
    return "_" in version and version.count(".") <= 1


def assignment_code(version: str) -> str:
    code = f"our $VERSION = '{version}';"
    if needs_normalization(version):
        code += "\n" + NORMALIZE_STATEMENT
    return code


def rewrite(content: str, new_version: str, global_: bool = False) -> tuple[str, bool]:
    """
    Replaces the first (or, with global_, every) assignment line in content.
    Returns the new content and whether anything matched.
    """
    code = assignment_code(new_version)
    count = 0 if global_ else 1
    # a callable replacement so the $ and \ in perl code are taken literally
    new_content, n = ASSIGN_RE.subn(lambda _m: code, content, count=count)
    return new_content, n > 0


def current_version(content: str):
    m = ASSIGN_RE.search(content)
    if not m:
        return None
    return m.group("version")
