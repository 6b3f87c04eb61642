"""Byte-range text replacements produced by rule autofixes."""
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from tree_sitter import Node


@dataclass(frozen=True)
class Fix:
    start_byte: int
    end_byte: int
    text: str

    @property
    def range(self) -> Tuple[int, int]:
        return (self.start_byte, self.end_byte)


class RuleFixer:
    """Editing handle passed to a rule's fix callback."""

    def replace_text(self, node: Node, text: str) -> Fix:
        return Fix(node.start_byte, node.end_byte, text)


def apply_fixes(source_code: bytes, fixes: Iterable[Fix]) -> Tuple[bytes, List[Fix]]:
    """Apply every fix that does not overlap an earlier one.

    Fixes are taken by ascending start offset; one that overlaps an already
    accepted fix is left out and returned so the caller can re-lint and try
    again on the rewritten source.

    Returns:
        (rewritten source, skipped fixes)
    """
    accepted: List[Fix] = []
    skipped: List[Fix] = []
    last_end = -1

    for fix in sorted(fixes, key=lambda f: (f.start_byte, f.end_byte)):
        if fix.start_byte < last_end:
            skipped.append(fix)
            continue
        accepted.append(fix)
        last_end = fix.end_byte

    # Apply in DESCENDING order to preserve offsets
    modified = bytearray(source_code)
    for fix in reversed(accepted):
        modified[fix.start_byte:fix.end_byte] = fix.text.encode('utf-8')

    return bytes(modified), skipped
