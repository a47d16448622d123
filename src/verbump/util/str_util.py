import json
import re

def matches_any(s, patterns):
    for p in patterns:
        if p.match(s):
            return True
    return False


def compile_regexps(regexps):
    return [re.compile(".*" + p) for p in regexps]


def filter_paths(paths, include=(), exclude=()):
    """
    Keeps the paths matching any of the include regexps (all of them when
    none are given) and then drops the ones matching any exclude regexp.
    """
    incl_patterns = compile_regexps(include)
    excl_patterns = compile_regexps(exclude)
    if incl_patterns:
        paths = [p for p in paths if matches_any(p, incl_patterns)]
    return [p for p in paths if not matches_any(p, excl_patterns)]


def coerce_str(s):
    """Turns 'true', '12', '[1, 2]' etc into their JSON values, anything else is left as-is."""
    try:
        return json.loads(s)
    except ValueError:
        lowered = s.lower()
        if lowered in ("true", "false"):
            return lowered == "true"
        return s
