import os
import sys


# ANSI color codes
class Colors:
    GREEN = '\033[92m'
    RED = '\033[91m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


def supports_color(stream=None):
    """Check if the stream (stdout by default) supports color output."""
    stream = stream or sys.stdout
    if not hasattr(stream, "isatty") or not stream.isatty():
        return False

    if os.environ.get('NO_COLOR'):
        return False

    # Check for Windows
    if os.name == 'nt':
        # Windows 10 version 1607 and later supports ANSI
        return os.environ.get('ANSICON') is not None or \
            'WT_SESSION' in os.environ or \
            'ConEmuANSI' in os.environ or \
            os.environ.get('TERM_PROGRAM') == 'vscode'

    # Most Unix-like platforms support color
    return True


def colored(text, color, stream=None):
    """Apply color to text if the target stream supports it."""
    if supports_color(stream):
        return f"{color}{text}{Colors.RESET}"
    return text
