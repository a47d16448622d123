"""verbump

Sets $VERSION in a Perl distribution's sources to the version after the one
that was just released.

Usage:
    verbump [options] [-i <regexp>]... [-e <regexp>]... [-o <setting>]... [<file>...]

    V=1.000 verbump (bump to 1.001)

Options:
    -h --help                            show this screen.
    -v --version                         show version.
    -c <cfg_file>, --config=<cfg_file>   JSON config file.
    -r <version>, --release=<version>    the version that was released (default: $V or the first module's $VERSION).
    -g --global                          replace every $VERSION assignment, not only the first.
    -u --allow-decimal-underscore        allow decimal versions with an underscore, like 1.002_003.
    --no-makefile                        leave Makefile.PL alone.
    --source-root=<dir>                  read the original sources from <dir>.
    -i <regexp>                          only bump files matching regexp(s).
    -e <regexp>                          don't bump files matching regexp(s).
    -o <setting>                         override a setting, as key=value.
"""
import sys

from docopt import docopt

from verbump import __version__
from . import finders
from .bump import bump
from .config import (
    Settings,
    conf_get,
    create_config,
    dump_config,
    parse_cli_overrides,
    parse_env_overrides,
    read_config,
)
from .sinks import install_sinks
from .util import log

version = __version__


def cli_flags(arguments):
    # only flags that were actually passed, so lower priority sources still apply
    flags = {}
    if arguments.get("--global"):
        flags[Settings.GLOBAL.key] = True
    if arguments.get("--allow-decimal-underscore"):
        flags[Settings.ALLOW_DECIMAL_UNDERSCORE.key] = True
    if arguments.get("--no-makefile"):
        flags[Settings.MUNGE_MAKEFILE_PL.key] = False
    if arguments.get("--source-root"):
        flags[Settings.SOURCE_ROOT.key] = arguments["--source-root"]
    if arguments.get("-i"):
        flags[Settings.INCLUDE.key] = arguments["-i"]
    if arguments.get("-e"):
        flags[Settings.EXCLUDE.key] = arguments["-e"]
    return flags


def configure_logging(conf):
    log.use_colors(conf_get(conf, Settings.COLORIZE))
    log.set_default_level(str(conf_get(conf, Settings.LOG_LEVEL)).upper())


def load_config(arguments):
    return create_config(
        cli_flags(arguments),
        parse_cli_overrides(arguments.get("-o")),
        parse_env_overrides(),
        read_config(arguments.get("--config")),
    )


def run(argv=None):
    arguments = docopt(__doc__, argv=argv, version=f"verbump {version}")
    try:
        conf = load_config(arguments)
        configure_logging(conf)
    except (ValueError, OSError) as e:
        log.error(f"Bad configuration: {e}")
        return False

    log.debug(f"verbump {version} | config={dump_config(conf)}")

    installation = install_sinks()
    try:
        files = finders.select_files(
            finders=conf_get(conf, Settings.FINDERS),
            paths=arguments.get("<file>"),
            include=conf_get(conf, Settings.INCLUDE),
            exclude=conf_get(conf, Settings.EXCLUDE),
            encoding=conf_get(conf, Settings.ENCODING),
            source_root=conf_get(conf, Settings.SOURCE_ROOT),
        )
        log.debug(f"{len(files)} files found.")
        released = finders.release_version(files, explicit=arguments.get("--release"))
        if not released:
            log.error("Can't tell which version was released, pass --release or set $V")
            return False

        bump(
            files,
            released,
            allow_decimal_underscore=conf_get(conf, Settings.ALLOW_DECIMAL_UNDERSCORE),
            global_=conf_get(conf, Settings.GLOBAL),
            munge_makefile_pl=conf_get(conf, Settings.MUNGE_MAKEFILE_PL),
        )
    except (ValueError, LookupError, OSError) as e:
        # InvalidVersionError and decoding errors are ValueErrors, an unknown encoding is a LookupError
        log.error(str(e))
        return False
    finally:
        installation.close()

    return True


def run_verbump():
    result = run()
    if not result:
        sys.exit(1)
    else:
        sys.exit(0)


if __name__ == "__main__":
    run_verbump()
