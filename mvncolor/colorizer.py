"""
Maven output colorizer.

Each rule is a pure function Line -> Line. Rules match against the plain text
of the line and only record styled spans; markers are inserted once, by
render(), after every rule has run. That keeps end-of-line anchors working and
makes it impossible for a rule to match an escape sequence added by another.
"""
import re
from dataclasses import dataclass
from typing import Callable, Tuple

from . import colors
from .colors import (
    BOLD_CYAN, BOLD_GREEN, BOLD_RED, BOLD_YELLOW, CYAN, DEFAULT, GREEN, RED, RESET,
)


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    style: str


@dataclass(frozen=True)
class Line:
    """Plain text of one output line plus the styled spans found so far."""
    text: str
    spans: Tuple[Span, ...] = ()

    def wrap(self, start: int, end: int, style: str) -> "Line":
        if end <= start:
            return self
        return Line(self.text, self.spans + (Span(start, end, style),))

    def wrap_groups(self, match, styles) -> "Line":
        """Style match groups; styles maps group index/name -> style."""
        line = self
        for group, style in styles.items():
            if match.group(group) is not None:
                line = line.wrap(match.start(group), match.end(group), style)
        return line


Rule = Callable[[Line], Line]


# 1) level tag at line start
LEVEL_PAT = re.compile(r"^\[\s*(WARN|WARNING|ERROR|DEBUG|INFO|TRACE)\s*\]")

def level_tag(line: Line) -> Line:
    m = LEVEL_PAT.match(line.text)
    if not m:
        return line
    return line.wrap(m.start(), m.end(), colors.LEVEL_COLORS[m.group(1)])


# 2) section banners
DASHES_PAT = re.compile(r"(?<!-)-{50,}$")
TESTS_PAT = re.compile(r"T E S T S")

def banner(line: Line) -> Line:
    for rx in (DASHES_PAT, TESTS_PAT):
        m = rx.search(line.text)
        if m:
            line = line.wrap(m.start(), m.end(), BOLD_GREEN)
    return line


# 3) surefire/failsafe summaries
SUMMARY_PAT = re.compile(
    r"(?P<run>Tests run: [^,]*), Failures: (?P<failures>[^,]*), "
    r"Errors: (?P<errors>[^,]*), Skipped: (?P<skipped>[^,]*)"
)
ELAPSED_PAT = re.compile(r"Time elapsed: (\d+(?:[.,]\d+)?)")

def test_summary(line: Line) -> Line:
    m = SUMMARY_PAT.search(line.text)
    if m:
        line = line.wrap_groups(m, {
            "run": BOLD_GREEN,
            "failures": BOLD_RED,
            "errors": BOLD_RED,
            "skipped": BOLD_YELLOW,
        })
    m = ELAPSED_PAT.search(line.text)
    if m:
        line = line.wrap(m.start(1), m.end(1), BOLD_CYAN)
    return line


# 4) build and reactor outcomes
OUTCOME_RULES = [
    (re.compile(r"BUILD SUCCESS"), BOLD_GREEN),
    (re.compile(r"BUILD FAILURE"), BOLD_RED),
    (re.compile(r"SUCCESS \[[^\]]*\]$"), BOLD_GREEN),
    (re.compile(r"FAILURE \[[^\]]*\]$"), BOLD_RED),
    (re.compile(r"SKIPPED$"), BOLD_YELLOW),
]
TOTAL_TIME_PAT = re.compile(r"Total time:\s*([\w:.]+(?:\s+[\w:.]+)*)")

def build_outcome(line: Line) -> Line:
    for rx, style in OUTCOME_RULES:
        m = rx.search(line.text)
        if m:
            line = line.wrap(m.start(), m.end(), style)
    m = TOTAL_TIME_PAT.search(line.text)
    if m:
        line = line.wrap(m.start(1), m.end(1), CYAN)
    return line


# 5) "--- maven-compiler-plugin:3.11.0:compile (default-compile) @ app ---"
PLUGIN_OPEN = "--- "
PLUGIN_CLOSE = " ---"

def plugin_marker(line: Line) -> Line:
    # the marker starts at the first "--- " that leaves room for a non-empty name
    text = line.text
    if not text.endswith(PLUGIN_CLOSE):
        return line
    start = text.find(PLUGIN_OPEN)
    if start < 0 or len(text) - start < len(PLUGIN_OPEN) + 1 + len(PLUGIN_CLOSE):
        return line
    return line.wrap(start, len(text), CYAN)


# 6) stack trace frames; <generated> and Native Method have no line number
FRAME_PAT = re.compile(
    r"^(?P<at>\tat )"
    r"(?P<module>[\w.$@]+/)?"
    r"(?P<package>(?:[\w$]+\.)+)"
    r"(?P<method><?[\w$]+>?)"
    r"(?P<open>\()"
    r"(?:(?P<special><generated>|Native Method)"
    r"|(?P<file>[\w$]+)(?P<ext>\.java:)(?P<lineno>\d+))"
    r"(?P<close>\))"
)
FRAME_STYLES = {
    "at": BOLD_RED,
    "module": DEFAULT,
    "package": DEFAULT,
    "method": GREEN,
    "open": DEFAULT,
    "special": RED,
    "file": RED,
    "ext": DEFAULT,
    "lineno": CYAN,
    "close": DEFAULT,
}

def stack_frame(line: Line) -> Line:
    m = FRAME_PAT.match(line.text)
    if not m:
        return line
    return line.wrap_groups(m, FRAME_STYLES)


# 7) exception type names, every occurrence
EXCEPTION_PAT = re.compile(r"\b\w*Exception\b")

def exception_names(line: Line) -> Line:
    for m in EXCEPTION_PAT.finditer(line.text):
        line = line.wrap(m.start(), m.end(), BOLD_RED)
    return line


RULES: Tuple[Rule, ...] = (
    level_tag,
    banner,
    test_summary,
    build_outcome,
    plugin_marker,
    stack_frame,
    exception_names,
)


def apply_rules(text: str) -> Line:
    line = Line(text)
    for rule in RULES:
        line = rule(line)
    return line


def _style_at(spans, pos: int) -> str:
    # later spans win where they overlap earlier ones
    for span in reversed(spans):
        if span.start <= pos < span.end:
            return span.style
    return DEFAULT


def render(line: Line) -> str:
    """Insert markers for every styled run; each run is closed with a reset."""
    if not line.spans:
        return line.text
    cuts = {0, len(line.text)}
    for span in line.spans:
        cuts.add(span.start)
        cuts.add(span.end)
    cuts = sorted(c for c in cuts if 0 <= c <= len(line.text))

    runs = []
    for start, end in zip(cuts, cuts[1:]):
        style = _style_at(line.spans, start)
        if runs and runs[-1][1] == style:
            runs[-1] = (runs[-1][0] + line.text[start:end], style)
        else:
            runs.append((line.text[start:end], style))
    return "".join(colors.paint(text, style) for text, style in runs)


def colorize(line: str) -> str:
    """
    Colorize one line of build output.
    The result always ends with a reset marker, placed before the original
    line terminator when there is one.
    """
    body = line.rstrip("\r\n")
    newline = line[len(body):]
    return render(apply_rules(body)) + RESET + newline
