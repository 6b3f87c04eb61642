"""Fix synthesis: rewriting a memoization call into its unwrapped form.

Each ``*_fix`` function returns a callback for ``RuleContext.report`` or
None when no safe rewrite exists.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from tree_sitter import Node

from ..analyzer.ast_utils import (
    FUNCTION_LITERAL_TYPES,
    LITERAL_TYPES,
    call_arguments,
    function_parameters,
    is_async_or_generator,
    named_children,
    node_text,
    unwrap_parentheses,
)
from ..analyzer.memo_hooks import USE_CALLBACK
from .fixer import Fix, RuleFixer

FixCallback = Callable[[RuleFixer], Fix]

# Expressions that bind at least as tightly as any operand position
PRIMARY_EXPRESSION_TYPES = LITERAL_TYPES | {
    'undefined',
    'identifier',
    'this',
    'call_expression',
    'member_expression',
    'subscript_expression',
    'parenthesized_expression',
    'array',
    'template_string',
}

# Parents where every child is an operand
OPERATOR_PARENTS = {
    'binary_expression',
    'unary_expression',
    'update_expression',
    'await_expression',
    'as_expression',
    'satisfies_expression',
    'non_null_expression',
}

# Parents where only one field is an operand
OPERAND_FIELDS = {
    'member_expression': 'object',
    'subscript_expression': 'object',
    'call_expression': 'function',
    'new_expression': 'constructor',
    'ternary_expression': 'condition',
}

# Expressions that change meaning at the start of a statement
STATEMENT_START_TYPES = {'object', 'function_expression', 'generator_function', 'class'}


@dataclass
class CallSite:
    node: Node
    callee: str
    arguments: List[Node]

    @property
    def has_second_argument(self) -> bool:
        return len(self.arguments) > 1

    @classmethod
    def classify(cls, node: Node, callee: str) -> 'CallSite':
        return cls(node, callee, call_arguments(node))


def component_memo_fix(call: CallSite, source: bytes) -> Optional[FixCallback]:
    """``memo(Component)`` -> ``Component``.

    A non-literal second argument is a custom props comparator; dropping it
    would change behavior, so no fix is offered.
    """
    if not call.arguments:
        return None
    component = call.arguments[0]
    if call.has_second_argument and call.arguments[1].type not in LITERAL_TYPES:
        return None

    replacement = fit_to_position(call.node, component.type, node_text(component, source))
    return lambda fixer: fixer.replace_text(call.node, replacement)


def hook_memo_fix(call: CallSite, source: bytes) -> Optional[FixCallback]:
    """Unwrap ``useCallback(fn, deps)`` / ``useMemo(fn, deps)``.

    useCallback keeps the function itself. useMemo is reduced to the
    computed expression when the factory is trivial, otherwise the factory
    is invoked in place.
    """
    if not call.arguments:
        return None
    factory = call.arguments[0]

    if call.callee == USE_CALLBACK:
        lifted = (factory.type, node_text(factory, source))
    else:
        lifted = _memo_replacement(unwrap_parentheses(factory), source)
        if lifted is None:
            return None

    replacement = fit_to_position(call.node, *lifted)
    return lambda fixer: fixer.replace_text(call.node, replacement)


def fit_to_position(call: Node, expression_type: str, text: str) -> str:
    """Parenthesize ``text`` where pasting it over ``call`` would regroup it.

    ``a + b`` standing in for a call operand of ``*`` becomes ``(a + b)``;
    an object literal in an arrow body or at statement start would parse
    as a block. Declarator values and call arguments stay bare.
    """
    if expression_type == 'sequence_expression':
        return f'({text})'

    parent = call.parent
    if parent is None:
        return text

    if parent.type == 'expression_statement' and expression_type in STATEMENT_START_TYPES:
        return f'({text})'
    if (parent.type == 'arrow_function' and expression_type == 'object'
            and _is_field(parent, 'body', call)):
        return f'({text})'

    if expression_type in PRIMARY_EXPRESSION_TYPES:
        return text
    if parent.type in OPERATOR_PARENTS or _is_field(parent, OPERAND_FIELDS.get(parent.type), call):
        return f'({text})'
    return text


def _is_field(parent: Node, field_name: Optional[str], child: Node) -> bool:
    if field_name is None:
        return False
    field = parent.child_by_field_name(field_name)
    return field is not None and field.id == child.id


def _memo_replacement(factory: Node, source: bytes) -> Optional[Tuple[str, str]]:
    """(node type, text) of what the useMemo call evaluates to."""
    if factory.type in FUNCTION_LITERAL_TYPES:
        expression = _trivial_result(factory)
        if expression is not None:
            return expression.type, node_text(expression, source)
        return 'call_expression', f'({node_text(factory, source)})()'

    if factory.type == 'identifier':
        return 'call_expression', f'{node_text(factory, source)}()'

    return None


def _trivial_result(func: Node) -> Optional[Node]:
    """Expression a zero-argument factory evaluates to, if it is that simple.

    Handles ``() => expr`` and ``() => { return expr }`` (also as a
    ``function`` expression). Async and generator factories never qualify.
    """
    if function_parameters(func) or is_async_or_generator(func):
        return None

    body = func.child_by_field_name('body')
    if body is None:
        return None

    if body.type != 'statement_block':
        return unwrap_parentheses(body)

    statements = named_children(body)
    if len(statements) != 1 or statements[0].type != 'return_statement':
        return None
    returned = named_children(statements[0])
    if not returned:
        return None
    return unwrap_parentheses(returned[0])
