"""Shared fixtures: run a single rule over a snippet of JSX/TSX."""
import textwrap

import pytest

from no_manual_memo.engine.linter import Linter
from no_manual_memo.plugin import RULES


@pytest.fixture
def lint():
    """Diagnostics produced by one rule on dedented source."""
    def _lint(code, rule_name, filename='Component.jsx'):
        linter = Linter(RULES, {rule_name: 'error'})
        return linter.verify(textwrap.dedent(code), filename).diagnostics
    return _lint


@pytest.fixture
def fix():
    """Source after applying one rule's fixes (a single pass, like a rule tester)."""
    def _fix(code, rule_name, filename='Component.jsx'):
        linter = Linter(RULES, {rule_name: 'error'}, max_fix_passes=1)
        return linter.verify_and_fix(textwrap.dedent(code), filename).output
    return _fix
