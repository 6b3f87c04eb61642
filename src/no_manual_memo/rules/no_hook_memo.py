"""no-hook-memo: disallow ``useMemo`` / ``useCallback`` inside components and hooks."""
from typing import Optional

from tree_sitter import Node

from ..analyzer.ast_utils import (
    callee_name,
    function_name_node,
    get_function_ancestor,
    is_component_or_hook_name,
    namespace_member_name,
)
from ..analyzer.memo_hooks import MEMO_HOOKS, USE_MEMO, MemoHookHelpers, detect_memo_only_hooks
from ..analyzer.react_imports import ReactImportHelpers, detect_react_imports
from ..engine.rule import Rule, RuleContext, RuleMeta
from ..reaper.unwrap import CallSite, hook_memo_fix

name = 'no-hook-memo'


def memo_hook_name(node: Node, source: bytes, helpers: ReactImportHelpers) -> Optional[str]:
    """``useMemo`` / ``useCallback`` when ``node`` calls React's, else None."""
    member = namespace_member_name(node, source)
    if member in MEMO_HOOKS:
        return member

    direct = callee_name(node, source)
    if direct in MEMO_HOOKS and helpers.is_react_import(node.child_by_field_name('function')):
        return direct

    return None


@detect_react_imports
def create(context: RuleContext, options, react_helpers: ReactImportHelpers):

    @detect_memo_only_hooks
    def create_with_memo_helpers(context: RuleContext, options, memo_helpers: MemoHookHelpers):
        source = context.source_code.text

        def on_call(node: Node) -> None:
            hook_name = memo_hook_name(node, source, react_helpers)
            if hook_name is None:
                return

            fn_ancestor = get_function_ancestor(node)
            if fn_ancestor is None:
                return

            # An anonymous outermost function (callback, default export) still counts.
            name_node = function_name_node(fn_ancestor)
            fn_name = context.source_code.get_text(name_node) if name_node is not None else None
            if fn_name is not None and not is_component_or_hook_name(fn_name):
                return

            # Memo-only custom hooks are reported whole by no-custom-memo-hook
            if (fn_name is not None and fn_name.startswith('use')
                    and memo_helpers.is_within_memo_only_custom_hook(node)):
                return

            message_id = 'noUseMemo' if hook_name == USE_MEMO else 'noUseCallback'
            fix = hook_memo_fix(CallSite.classify(node, hook_name), source)
            context.report(node, message_id, fix=fix)

        return {'call_expression': on_call}

    return create_with_memo_helpers(context, options)


rule = Rule(
    meta=RuleMeta(
        name=name,
        description='Disallow manual memoization hooks (useMemo, useCallback) in favor of React Compiler',
        messages={
            'noUseMemo': (
                'Avoid using useMemo directly in components. '
                'Let React Compiler handle memoization inside components automatically.'
            ),
            'noUseCallback': (
                'Avoid using useCallback directly in components. '
                'Let React Compiler handle memoization inside components automatically.'
            ),
        },
        fixable='code',
    ),
    create=create,
)
