"""Node helpers shared by the analyzers and rules.

Everything here works on raw tree-sitter nodes from the javascript,
typescript and tsx grammars, whose node type names are identical for the
constructs we care about.
"""
import re
from typing import List, Optional

from tree_sitter import Node

# Namespace identifier for `React.memo(...)`-style member calls. A renamed
# alias (`import * as R from 'react'`) is not recognized.
REACT_NAMESPACE = 'React'

FUNCTION_DECLARATION_TYPES = {
    'function_declaration',
    'generator_function_declaration',
}

FUNCTION_LITERAL_TYPES = {
    'function_expression',
    'generator_function',
    'arrow_function',
}

FUNCTION_TYPES = FUNCTION_DECLARATION_TYPES | FUNCTION_LITERAL_TYPES | {'method_definition'}

JSX_TYPES = {'jsx_element', 'jsx_self_closing_element'}

LITERAL_TYPES = {'string', 'number', 'true', 'false', 'null', 'regex'}

_HOOK_NAME = re.compile(r'^use[A-Z]')
_COMPONENT_OR_HOOK_NAME = re.compile(r'^((?:use)?[A-Z])')


def is_hook_name(name: Optional[str]) -> bool:
    return bool(name) and _HOOK_NAME.match(name) is not None


def is_component_or_hook_name(name: Optional[str]) -> bool:
    return bool(name) and _COMPONENT_OR_HOOK_NAME.match(name) is not None


def named_children(node: Node) -> List[Node]:
    """Named children without comment nodes."""
    return [child for child in node.named_children if child.type != 'comment']


def unwrap_parentheses(node: Optional[Node]) -> Optional[Node]:
    """Strip any number of wrapping ``( ... )`` around an expression."""
    while node is not None and node.type == 'parenthesized_expression':
        inner = named_children(node)
        if len(inner) != 1:
            break
        node = inner[0]
    return node


def call_arguments(call: Node) -> List[Node]:
    """Positional argument nodes of a call_expression.

    Tagged templates (``fn`tpl```) have no argument list and yield [].
    """
    args = call.child_by_field_name('arguments')
    if args is None or args.type != 'arguments':
        return []
    return named_children(args)


def callee_name(call: Node, source: bytes) -> Optional[str]:
    """Name of a direct-identifier callee, e.g. ``useMemo`` in ``useMemo(fn)``."""
    callee = call.child_by_field_name('function')
    if callee is not None and callee.type == 'identifier':
        return node_text(callee, source)
    return None


def namespace_member_name(call: Node, source: bytes) -> Optional[str]:
    """Property name of a ``React.<name>(...)`` callee, else None."""
    callee = call.child_by_field_name('function')
    if callee is None or callee.type != 'member_expression':
        return None
    obj = callee.child_by_field_name('object')
    prop = callee.child_by_field_name('property')
    if obj is None or prop is None:
        return None
    if obj.type != 'identifier' or node_text(obj, source) != REACT_NAMESPACE:
        return None
    if prop.type != 'property_identifier':
        return None
    return node_text(prop, source)


def node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte:node.end_byte].decode('utf-8')


def function_parameters(func: Node) -> List[Node]:
    """Parameters of a function literal, covering the paren-less ``x => x`` arrow."""
    single = func.child_by_field_name('parameter')
    if single is not None:
        return [single]
    params = func.child_by_field_name('parameters')
    if params is None:
        return []
    return named_children(params)


def is_async_or_generator(func: Node) -> bool:
    if func.type in ('generator_function', 'generator_function_declaration'):
        return True
    for child in func.children:
        if child.type == 'async':
            return True
        if child.type in ('formal_parameters', 'identifier', 'statement_block'):
            break
    return False


def function_name_node(func: Node) -> Optional[Node]:
    """Identifier naming a function: its own name, or the declarator it initializes.

    ``function Foo() {}`` and ``const Foo = function Bar() {}`` use the
    function's own name; ``const Foo = () => {}`` borrows ``Foo`` from the
    enclosing variable_declarator.
    """
    own = func.child_by_field_name('name')
    if own is not None and func.type != 'method_definition' and own.type == 'identifier':
        return own

    parent = func.parent
    while parent is not None and parent.type == 'parenthesized_expression':
        parent = parent.parent
    if parent is not None and parent.type == 'variable_declarator':
        declared = parent.child_by_field_name('name')
        if declared is not None and declared.type == 'identifier':
            return declared
    return None


def declarator_function(declarator: Node) -> Optional[Node]:
    """The function literal a variable_declarator is initialized with, if any."""
    value = unwrap_parentheses(declarator.child_by_field_name('value'))
    if value is not None and value.type in FUNCTION_LITERAL_TYPES:
        return value
    return None


def declared_name(node: Node, source: bytes) -> Optional[str]:
    """Name bound by a function declaration or an identifier declarator."""
    name = node.child_by_field_name('name')
    if name is None or name.type != 'identifier':
        return None
    return node_text(name, source)


def get_ancestors(node: Node) -> List[Node]:
    """Ancestors of ``node``, outermost (program) first."""
    ancestors = []
    current = node.parent
    while current is not None:
        ancestors.append(current)
        current = current.parent
    ancestors.reverse()
    return ancestors


def get_function_ancestor(node: Node) -> Optional[Node]:
    """Outermost function enclosing ``node``."""
    for ancestor in get_ancestors(node):
        if ancestor.type in FUNCTION_TYPES:
            return ancestor
    return None
