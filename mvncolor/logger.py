import os
import datetime
import sys

# runtime flag controlling debug message suppression; app.run sets it from MVNCOLOR_DEBUG
_DEBUG_SUPPRESSED = True

def set_debug_suppressed(v: bool):
	"""Suppress debug-level logs when True."""
	global _DEBUG_SUPPRESSED
	_DEBUG_SUPPRESSED = bool(v)

def is_debug_suppressed() -> bool:
	"""Query whether debug-level logs are suppressed."""
	return _DEBUG_SUPPRESSED

def _now():
	return datetime.datetime.now().isoformat()

def _timestamp_enabled():
	# read dynamically from env
	return os.environ.get("MVNCOLOR_TIMESTAMP", "0").strip().lower() in ("1", "true", "yes", "on")

def log(msg: str, end: str = "\n", file=None, flush: bool = True):
	"""
	Print a diagnostic message. Timestamping is controlled by MVNCOLOR_TIMESTAMP.
	Diagnostics go to stderr by default so they never mix into the build output.
	"""
	out = file if file is not None else sys.stderr
	s = str(msg)
	if _timestamp_enabled():
		s = f"{_now()} {s}"
	print(s, file=out, end=end, flush=flush)

def debug(msg: str, file=None):
	if not is_debug_suppressed():
		log(f"[debug] {msg}", file=file)

def error(msg: str, prog: str = None, file=None):
	"""Report a fatal condition as '<prog>: error: <msg>'."""
	prefix = f"{prog}: " if prog else ""
	log(f"{prefix}error: {msg}", file=file)
