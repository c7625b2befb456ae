# ANSI display-attribute markers used by the line colorizer

RESET = "\033[0m"
BOLD = "\033[1m"

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"

# "no attributes"; rendered as a plain reset between styled runs
DEFAULT = ""

BOLD_RED = BOLD + RED
BOLD_GREEN = BOLD + GREEN
BOLD_YELLOW = BOLD + YELLOW
BOLD_CYAN = BOLD + CYAN

LEVEL_COLORS = {
    "WARN": YELLOW,
    "WARNING": YELLOW,
    "ERROR": RED,
    "DEBUG": GREEN,
    "INFO": CYAN,
    "TRACE": MAGENTA,
}

def paint(text: str, style: str) -> str:
    """Wrap text in a style and a reset; an empty style leaves text untouched."""
    if not style or not text:
        return text
    return f"{style}{text}{RESET}"
