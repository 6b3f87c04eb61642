"""no-custom-memo-hook: disallow custom hooks that only wrap useMemo / useCallback."""
from tree_sitter import Node

from ..analyzer.ast_utils import declarator_function, declared_name, is_hook_name
from ..analyzer.memo_hooks import HookAnalysis, MemoHookHelpers, detect_memo_only_hooks
from ..analyzer.react_imports import ReactImportHelpers, detect_react_imports
from ..engine.rule import Rule, RuleContext, RuleMeta

name = 'no-custom-memo-hook'

RECOMMENDED_FIX = (
    "Consider either:\n"
    "- Inlining this hook's logic directly into the components that use it, "
    "allowing the React Compiler to optimize them fully\n"
    "- Removing memoization and renaming to a regular function (no \"use\" prefix) "
    "so the React Compiler can optimize calls to the function"
)

MEMO_ONLY_HOOK_BOTH = 'noMemoOnlyHookBoth'
MEMO_ONLY_HOOK_MEMO = 'noMemoOnlyHookMemo'
MEMO_ONLY_HOOK_CALLBACK = 'noMemoOnlyHookCallback'


def message_id_for(analysis: HookAnalysis) -> str:
    if analysis.uses_callback and analysis.uses_memo:
        return MEMO_ONLY_HOOK_BOTH
    if analysis.uses_callback:
        return MEMO_ONLY_HOOK_CALLBACK
    return MEMO_ONLY_HOOK_MEMO


@detect_react_imports
def create(context: RuleContext, options, _react_helpers: ReactImportHelpers):

    @detect_memo_only_hooks
    def create_with_memo_helpers(context: RuleContext, options, memo_helpers: MemoHookHelpers):
        source = context.source_code.text

        def report_if_memo_only(node: Node, hook_name: str) -> None:
            analysis = memo_helpers.get_memo_only_hook_analysis(node)
            if analysis is not None and analysis.is_memo_only:
                context.report(node, message_id_for(analysis), data={'hook_name': hook_name})

        def on_function_declaration(node: Node) -> None:
            hook_name = declared_name(node, source)
            if is_hook_name(hook_name):
                report_if_memo_only(node, hook_name)

        def on_variable_declarator(node: Node) -> None:
            # `let useThing;` and `const useThing = 42` are not hooks
            if declarator_function(node) is None:
                return
            hook_name = declared_name(node, source)
            if is_hook_name(hook_name):
                report_if_memo_only(node, hook_name)

        return {
            'function_declaration': on_function_declaration,
            'generator_function_declaration': on_function_declaration,
            'variable_declarator': on_variable_declarator,
        }

    return create_with_memo_helpers(context, options)


rule = Rule(
    meta=RuleMeta(
        name=name,
        description='Disallow custom hooks that only use useCallback and useMemo',
        messages={
            MEMO_ONLY_HOOK_BOTH: (
                'Custom hook "{hook_name}" is a memo-only custom hook. '
                'It only calls the hooks useCallback and useMemo. ' + RECOMMENDED_FIX
            ),
            MEMO_ONLY_HOOK_MEMO: (
                'Custom hook "{hook_name}" is a memo-only custom hook. '
                'It only calls the hook useMemo. ' + RECOMMENDED_FIX
            ),
            MEMO_ONLY_HOOK_CALLBACK: (
                'Custom hook "{hook_name}" is a memo-only custom hook. '
                'It only calls the hook useCallback. ' + RECOMMENDED_FIX
            ),
        },
    ),
    create=create,
)
