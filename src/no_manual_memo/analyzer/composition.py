"""Visitor table composition.

A visitor table maps tree-sitter node types (optionally suffixed with
``:exit``) to handlers taking the node. Cross-cutting analyzers keep their
own bookkeeping table and merge it in front of a rule's table so both see
every node they listen on.
"""
from typing import Any, Callable, Dict, Optional

from tree_sitter import Node

Handler = Callable[[Node], Any]
Visitors = Dict[str, Handler]

# (context, options, helpers) -> visitors
EnhancedCreate = Callable[[Any, Any, Any], Visitors]
# (context, options) -> visitors
Create = Callable[[Any, Any], Visitors]


def merge_visitors(bookkeeping: Visitors, rule: Visitors) -> Visitors:
    """Union of both tables; per key, bookkeeping runs before the rule handler.

    The rule handler's return value is propagated.
    """
    merged: Visitors = {}
    for key in list(bookkeeping) + [k for k in rule if k not in bookkeeping]:
        merged[key] = _chain(bookkeeping.get(key), rule.get(key))
    return merged


def _chain(first: Optional[Handler], second: Optional[Handler]) -> Handler:
    if first is None:
        return second
    if second is None:
        return first

    def handler(node: Node):
        first(node)
        return second(node)

    return handler


def enhancer(build_bookkeeping: Callable[[Any], tuple]) -> Callable[[EnhancedCreate], Create]:
    """Turn a bookkeeping factory into a decorator for rule ``create`` functions.

    ``build_bookkeeping(context)`` returns ``(helpers, visitors)`` for one
    file. The decorated ``create(context, options, helpers)`` becomes a
    plain ``create(context, options)`` whose table also carries the
    bookkeeping handlers. Decorators stack; the outermost one's bookkeeping
    runs first.
    """
    def decorate(create: EnhancedCreate) -> Create:
        def enhanced_create(context, options) -> Visitors:
            helpers, bookkeeping = build_bookkeeping(context)
            rule_visitors = create(context, options, helpers)
            return merge_visitors(bookkeeping, rule_visitors)

        enhanced_create.__name__ = getattr(create, '__name__', 'create')
        enhanced_create.__doc__ = create.__doc__
        return enhanced_create

    return decorate
