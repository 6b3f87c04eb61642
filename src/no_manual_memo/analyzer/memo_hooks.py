"""Memo-only custom hook classification.

A custom hook is "memo-only" when the only hooks it calls are ``useMemo``
and ``useCallback`` and it produces no JSX. Such a hook blocks the React
Compiler from optimizing its callers and is reported as a whole instead of
call by call.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from tree_sitter import Node

from .ast_utils import (
    FUNCTION_TYPES,
    JSX_TYPES,
    callee_name,
    declarator_function,
    declared_name,
    is_hook_name,
    namespace_member_name,
)
from .composition import enhancer

USE_MEMO = 'useMemo'
USE_CALLBACK = 'useCallback'
MEMO_HOOKS = {USE_MEMO, USE_CALLBACK}


@dataclass
class HookAnalysis:
    is_memo_only: bool = False
    calls_other_hooks: bool = False
    contains_jsx: bool = False
    uses_callback: bool = False
    uses_memo: bool = False


class MemoHookClassifier:
    """Analyzes candidate hook functions of one file, caching by node identity."""

    def __init__(self, source_code: bytes):
        self.source_code = source_code
        # Keyed by Node.id: tree-sitter hands out fresh Node wrappers for the
        # same syntax node, and equal-looking nodes are still different nodes.
        self._analyses: Dict[int, Optional[HookAnalysis]] = {}

    def analyze(self, node: Node) -> Optional[HookAnalysis]:
        """Analysis for a function node or a variable_declarator holding one.

        Returns None for a declarator with no initializer or with a
        non-function initializer.
        """
        if node.id in self._analyses:
            return self._analyses[node.id]

        body = self._body_of(node)
        analysis = None
        if body is not None:
            analysis = HookAnalysis()
            self._scan(body, analysis)
            analysis.is_memo_only = (
                (analysis.uses_callback or analysis.uses_memo)
                and not analysis.calls_other_hooks
                and not analysis.contains_jsx
            )

        self._analyses[node.id] = analysis
        return analysis

    def is_within_memo_only_custom_hook(self, node: Node) -> bool:
        containing = find_containing_function(node)
        if containing is None:
            return False
        analysis = self.analyze(containing)
        return analysis is not None and analysis.is_memo_only

    def prescan_function_declaration(self, node: Node) -> None:
        if is_hook_name(declared_name(node, self.source_code)):
            self.analyze(node)

    def prescan_variable_declarator(self, node: Node) -> None:
        if declarator_function(node) is not None and is_hook_name(declared_name(node, self.source_code)):
            self.analyze(node)

    def _body_of(self, node: Node) -> Optional[Node]:
        if node.type == 'variable_declarator':
            func = declarator_function(node)
            return func.child_by_field_name('body') if func is not None else None
        if node.type in FUNCTION_TYPES:
            return node.child_by_field_name('body')
        return None

    def _scan(self, body: Node, analysis: HookAnalysis) -> None:
        stack = [body]
        while stack:
            current = stack.pop()

            if current.type in JSX_TYPES:
                analysis.contains_jsx = True
            elif current.type == 'call_expression':
                name = (callee_name(current, self.source_code)
                        or namespace_member_name(current, self.source_code))
                if name == USE_CALLBACK:
                    analysis.uses_callback = True
                elif name == USE_MEMO:
                    analysis.uses_memo = True
                elif is_hook_name(name):
                    analysis.calls_other_hooks = True

            # Nested function literals are walked too: a hook called from a
            # memo callback still counts against the enclosing hook.
            stack.extend(reversed(current.named_children))


def find_containing_function(node: Node) -> Optional[Node]:
    """Nearest enclosing function, or declarator initialized with a function."""
    current = node.parent
    while current is not None:
        if current.type in FUNCTION_TYPES:
            return current
        if current.type == 'variable_declarator' and declarator_function(current) is not None:
            return current
        current = current.parent
    return None


@dataclass
class MemoHookHelpers:
    get_memo_only_hook_analysis: Callable[[Node], Optional[HookAnalysis]]
    is_within_memo_only_custom_hook: Callable[[Node], bool]


def _build(context):
    classifier = MemoHookClassifier(context.source_code.text)
    helpers = MemoHookHelpers(
        get_memo_only_hook_analysis=classifier.analyze,
        is_within_memo_only_custom_hook=classifier.is_within_memo_only_custom_hook,
    )
    visitors = {
        'function_declaration': classifier.prescan_function_declaration,
        'generator_function_declaration': classifier.prescan_function_declaration,
        'variable_declarator': classifier.prescan_variable_declarator,
    }
    return helpers, visitors


detect_memo_only_hooks = enhancer(_build)
