"""
Run Maven (or the Maven daemon) and colorize its output.

Usage: mvn-color [--color=auto|always|never] <maven arguments...>

Every argument other than --color is passed to the wrapped tool untouched.
"""
import argparse
import os
import sys
from . import initializer
from . import logger
from . import shell_executor


def _build_parser(prog: str) -> argparse.ArgumentParser:
    # no -h/--help and no abbreviations: everything else belongs to maven
    parser = argparse.ArgumentParser(
        prog=prog,
        usage=f"{prog} [--color=auto|always|never] [maven arguments...]",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("--color", choices=initializer.COLOR_MODES, default=None,
                        help="colorize output: auto (terminal only), always or never")
    return parser


def _default_is_tty(stream) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def _truthy(value) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


def _is_this_module(prog: str) -> bool:
    try:
        return os.path.samefile(prog, __file__)
    except OSError:
        return False


def should_colorize(mode: str, stream, is_tty=None) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    return (is_tty or _default_is_tty)(stream)


def run(argv=None, prog=None, environ=None, stdout=None, is_tty=None, execv=os.execv) -> int:
    prog = prog if prog is not None else sys.argv[0]
    argv = list(argv) if argv is not None else sys.argv[1:]
    stdout = stdout if stdout is not None else sys.stdout
    environ = environ if environ is not None else os.environ
    logger.set_debug_suppressed(not _truthy(environ.get("MVNCOLOR_DEBUG")))
    if _is_this_module(prog):
        # python -m mvncolor.app
        prog = "mvn"
    display = os.path.basename(prog)

    parser = _build_parser(display)
    try:
        parsed, forwarded = parser.parse_known_args(argv)
    except SystemExit as e:
        # argparse already printed usage and the message
        return e.code if isinstance(e.code, int) else 2

    try:
        config = initializer.Initializer(prog, environ).init(parsed.color)
    except initializer.ConfigError as e:
        logger.error(str(e), prog=display)
        return 1
    mode = config.color
    cmd = [config.executable] + forwarded

    if not should_colorize(mode, stdout, is_tty):
        err = shell_executor.exec_tool(cmd, execv=execv)
        if err is not None:
            logger.error(f"cannot run {config.executable}: {err}", prog=display)
            return shell_executor.spawn_error_status(err)
        return 0

    rc, err = shell_executor.run_colorized(cmd, out=stdout)
    if err is not None:
        logger.error(f"cannot run {config.executable}: {err}", prog=display)
        return shell_executor.spawn_error_status(err)
    return rc


def main():
    sys.exit(run())


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
