import os
import subprocess
import sys
from . import logger
from .colorizer import colorize


def _exit_status(rc):
    # killed by signal N -> shell-style 128 + N
    if rc is not None and rc < 0:
        return 128 - rc
    return rc


def _stream_lines(pipe, write_fn):
    try:
        for line in iter(pipe.readline, ""):
            write_fn(line)
    finally:
        pipe.close()


def run_colorized(cmd_list, out=None, transform=colorize):
    """
    Run command (list) with stdout and stderr merged, writing every line
    through transform() to out (default sys.stdout) as soon as it arrives.
    Returns (returncode, exception_or_None).
    """
    out = out if out is not None else sys.stdout
    try:
        proc = subprocess.Popen(
            cmd_list,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            bufsize=1,
            text=True,
            encoding="utf-8",
            errors="replace"
        )
    except OSError as e:
        return None, e

    logger.debug(f"started pid {proc.pid}: {' '.join(cmd_list)}")

    def write(line):
        out.write(transform(line))
        out.flush()

    try:
        _stream_lines(proc.stdout, write)
    except KeyboardInterrupt:
        # the child got the same SIGINT; let it finish and report its status
        logger.debug("interrupted, waiting for child")
    rc = proc.wait()
    logger.debug(f"pid {proc.pid} exited with {rc}")
    return _exit_status(rc), None


def exec_tool(cmd_list, execv=os.execv):
    """
    Replace the current process with cmd_list, leaving its output untouched.
    Only returns (the OSError) when the exec itself fails.
    """
    logger.debug(f"exec: {' '.join(cmd_list)}")
    try:
        sys.stdout.flush()
        sys.stderr.flush()
        execv(cmd_list[0], cmd_list)
    except OSError as e:
        return e
    return None


def spawn_error_status(err) -> int:
    if isinstance(err, FileNotFoundError):
        return 127
    if isinstance(err, PermissionError):
        return 126
    return 1
