import json
import os
from collections import ChainMap
from typing import NamedTuple, Dict, Any, Mapping

from .util.str_util import coerce_str

ENV_PREFIX = "VERBUMP_"


class Option(NamedTuple):
    key: str
    default: Any
    help: str = ""

    def from_dict(self, config_dict: Mapping[str, Any]):
        return config_dict.get(self.key, self.default)


class Settings:
    ALLOW_DECIMAL_UNDERSCORE = Option("allow_decimal_underscore", False, "Allow decimal versions with an underscore")
    GLOBAL = Option("global", False, "Replace every $VERSION assignment, not only the first")
    MUNGE_MAKEFILE_PL = Option("munge_makefile_pl", True, "Also set the version in Makefile.PL")
    FINDERS = Option("finders", [":InstallModules", ":ExecFiles"], "Which files to bump")
    INCLUDE = Option("include", [], "Only bump files matching these regexps")
    EXCLUDE = Option("exclude", [], "Never bump files matching these regexps")
    ENCODING = Option("encoding", "UTF-8", "Encoding of the source files")
    SOURCE_ROOT = Option("source_root", None, "Read original sources from this directory")
    LOG_LEVEL = Option("log_level", "INFO", "Logging level")
    COLORIZE = Option("colorize", True, "Enable colored output")


def get_all_settings() -> list[Option]:
    return [option for _name, option in vars(Settings).items() if isinstance(option, Option)]


def _options_by_key():
    return {option.key: option for option in get_all_settings()}


def coerce_value(option: Option, value, raw=True):
    """Coerces a raw override; a single value for a list setting becomes a one-element list."""
    if raw and isinstance(value, str):
        value = coerce_str(value)
    if isinstance(option.default, list) and not isinstance(value, list):
        value = [str(value)]
    return value


def create_config(*dicts: Dict[str, object]) -> Mapping[str, object]:
    """Creates a dict-like configuration from multiple dictionaries
    Priority order:
    1. command-line flags
    2. -o key=value overrides
    3. VERBUMP_* environment variables
    4. config file
    5. default values
    """
    defaults = {option.key: option.default for option in get_all_settings()}
    priority = [*dicts, defaults]
    return ChainMap({}, *priority)


def conf_get(d, option: Option):
    return d.get(option.key, option.default)


def read_config(config_name) -> Dict[str, object]:
    if not config_name:
        return {}
    with open(config_name, encoding="utf-8") as fp:
        config_dict = json.load(fp)
    options = _options_by_key()
    unknown = set(config_dict) - set(options)
    if unknown:
        raise ValueError(f"Unknown setting(s) in {config_name}: {', '.join(sorted(unknown))}")
    return {key: coerce_value(options[key], value, raw=False) for key, value in config_dict.items()}


def parse_cli_overrides(overrides) -> Dict[str, object]:
    result = {}
    options = _options_by_key()
    for override in overrides or []:
        key, sep, value = override.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected key=value but got: {override}")
        if key not in options:
            raise ValueError(f"Unknown setting: {key}")
        result[key] = coerce_value(options[key], value)
    return result


def parse_env_overrides(env=None) -> Dict[str, object]:
    env = os.environ if env is None else env
    result = {}
    for option in get_all_settings():
        value = env.get(ENV_PREFIX + option.key.upper())
        if value is not None:
            result[option.key] = coerce_value(option, value)
    return result


def dump_config(conf) -> Dict[str, object]:
    return {
        "verbump.bump": {
            "finders": sorted(conf_get(conf, Settings.FINDERS)),
            "global": 1 if conf_get(conf, Settings.GLOBAL) else 0,
            "munge_makefile_pl": 1 if conf_get(conf, Settings.MUNGE_MAKEFILE_PL) else 0,
        }
    }
