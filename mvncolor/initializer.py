import os
import shutil
import sys
from dataclasses import dataclass
from . import logger

COLOR_MODES = ("auto", "always", "never")

# invocation name -> (tool, env var with explicit path, env var with install home)
TOOLS = {
    "mvn": ("mvn", "MVNCOLOR_MVN", "MAVEN_HOME"),
    "mvnd": ("mvnd", "MVNCOLOR_MVND", "MVND_HOME"),
}


class ConfigError(RuntimeError):
    """Fatal configuration problem detected before the wrapped tool runs."""


@dataclass
class ToolConfig:
    name: str
    executable: str
    color: str = "auto"


def invocation_name(prog: str) -> str:
    """
    Map argv[0] to a recognized tool key.
    Accepts 'mvn', 'mvnd' and the console-script names 'mvn-color'/'mvnd-color'.
    """
    base = os.path.basename(prog or "")
    for ext in (".exe", ".py"):
        if base.lower().endswith(ext):
            base = base[: -len(ext)]
    if base.endswith("-color"):
        base = base[: -len("-color")]
    if base not in TOOLS:
        raise ConfigError(f"unrecognized invocation name '{os.path.basename(prog or '')}' (expected one of: {', '.join(sorted(TOOLS))})")
    return base


def _same_file(a: str, b: str) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False


def _which_skipping(tool: str, path_env: str, own_path: str):
    """Search PATH for tool, ignoring entries that resolve to the wrapper itself."""
    for entry in (path_env or "").split(os.pathsep):
        if not entry:
            continue
        cand = shutil.which(tool, path=entry)
        if not cand:
            continue
        if own_path and _same_file(cand, own_path):
            logger.debug(f"skipping {cand}: points back at the wrapper")
            continue
        return cand
    return None


class Initializer:
    def __init__(self, prog=None, environ=None):
        self.prog = prog if prog is not None else sys.argv[0]
        self.environ = environ if environ is not None else os.environ

    def locate(self, name: str) -> str:
        tool, path_var, home_var = TOOLS[name]
        explicit = self.environ.get(path_var)
        if explicit:
            logger.debug(f"{tool} from {path_var}: {explicit}")
            return explicit
        home = self.environ.get(home_var)
        if home:
            cand = os.path.join(home, "bin", tool)
            logger.debug(f"{tool} from {home_var}: {cand}")
            return cand
        cand = _which_skipping(tool, self.environ.get("PATH", ""), self.prog)
        if cand:
            logger.debug(f"{tool} from PATH: {cand}")
            return cand
        raise ConfigError(f"cannot locate '{tool}'; set {path_var} or {home_var}, or put {tool} on PATH")

    def default_color(self) -> str:
        mode = self.environ.get("MVNCOLOR_COLOR", "auto").strip().lower() or "auto"
        if mode not in COLOR_MODES:
            raise ConfigError(f"invalid MVNCOLOR_COLOR '{mode}' (expected one of: {', '.join(COLOR_MODES)})")
        return mode

    def init(self, color=None) -> ToolConfig:
        """Resolve the tool; MVNCOLOR_COLOR is only consulted when no color mode is given."""
        name = invocation_name(self.prog)
        executable = self.locate(name)
        return ToolConfig(name, executable, color or self.default_color())
