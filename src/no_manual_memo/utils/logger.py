"""Terminal-safe text for lint reports.

Severity and status icons fall back to ASCII on terminals that cannot
encode UTF-8 (legacy Windows consoles, some CI runners).
"""
import sys
import locale

ICON_MAP = {
    '✖': 'x',
    '✗': 'x',
    '⚠': '!',
    '✔': 'OK',
    '✓': 'OK',
    '🔧': '[fix]',
    '→': '->',
    '…': '...',
    '•': '*',
}

SEVERITY_ICONS = {
    1: '⚠',
    2: '✖',
}


def detect_terminal_encoding() -> str:
    """Detect the terminal's encoding capability.

    Returns:
        str: Terminal encoding ('utf-8', 'cp1252', 'ascii', etc.)
    """
    if getattr(sys.stdout, 'encoding', None):
        return sys.stdout.encoding.lower()

    try:
        return locale.getpreferredencoding().lower()
    except (AttributeError, ValueError):
        return 'ascii'


def is_utf8_capable() -> bool:
    return detect_terminal_encoding().replace('_', '-') in ('utf-8', 'utf8')


def sanitize_for_terminal(text: str) -> str:
    """Replace report icons with ASCII equivalents if the terminal isn't UTF-8."""
    if is_utf8_capable():
        return text

    for unicode_char, ascii_replacement in ICON_MAP.items():
        text = text.replace(unicode_char, ascii_replacement)
    return text


def severity_icon(severity: int) -> str:
    return sanitize_for_terminal(SEVERITY_ICONS.get(severity, '•'))
