"""no-component-memo: disallow ``React.memo()`` / ``memo()``."""
import re
from typing import Optional

from tree_sitter import Node

from ..analyzer.ast_utils import callee_name, namespace_member_name
from ..analyzer.react_imports import ReactImportHelpers, detect_react_imports
from ..engine.rule import Rule, RuleContext, RuleMeta
from ..reaper.unwrap import CallSite, component_memo_fix

name = 'no-component-memo'

MEMO = 'memo'

# `@/components/Button`, `@components` (no slash), `~/x`, `#db/schema`, `$config/app`.
# `@components/Button` is indistinguishable from a scoped npm package.
INTERNAL_ALIAS_PATTERNS = [
    re.compile(r'^@(?:/|[^/]*$)'),
    re.compile(r'^[~#$]'),
]


def is_external_source(import_source: str) -> bool:
    """Whether an import specifier points outside the project."""
    if import_source.startswith('.') or import_source.startswith('/'):
        return False

    # 'react', 'lodash', ... or anything resolved through node_modules
    if '/' not in import_source or 'node_modules' in import_source:
        return True

    for pattern in INTERNAL_ALIAS_PATTERNS:
        if pattern.search(import_source):
            return False

    return True


def _memo_call_name(node: Node, context: RuleContext, helpers: ReactImportHelpers) -> Optional[str]:
    source = context.source_code.text
    if namespace_member_name(node, source) == MEMO:
        return MEMO
    callee = node.child_by_field_name('function')
    if callee_name(node, source) == MEMO and helpers.is_react_import(callee):
        return MEMO
    return None


@detect_react_imports
def create(context: RuleContext, options, helpers: ReactImportHelpers):
    source = context.source_code.text

    def wraps_external_component(call: CallSite) -> bool:
        if not call.arguments or call.arguments[0].type != 'identifier':
            return False
        import_source = helpers.tracker.source_of(context.source_code.get_text(call.arguments[0]))
        return import_source is not None and is_external_source(import_source)

    def on_call(node: Node) -> None:
        callee = _memo_call_name(node, context, helpers)
        if callee is None:
            return

        call = CallSite.classify(node, callee)
        if wraps_external_component(call):
            return

        context.report(node, 'noMemo', fix=component_memo_fix(call, source))

    return {'call_expression': on_call}


rule = Rule(
    meta=RuleMeta(
        name=name,
        description='Disallow React.memo() in favor of React Compiler automatic memoization',
        messages={
            'noMemo': 'Avoid React.memo(). Let React Compiler handle memoization automatically.',
        },
        fixable='code',
    ),
    create=create,
)
