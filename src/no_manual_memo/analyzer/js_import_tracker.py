from dataclasses import dataclass
from typing import Dict, Optional

from tree_sitter import Node

from .ast_utils import named_children, node_text

REACT_MODULE = 'react'


@dataclass
class ImportInfo:
    source_module: str
    original_name: Optional[str] = None
    kind: str = 'named'  # 'default' | 'named' | 'namespace'


class JSImportTracker:
    """Per-file table mapping local names to the import that bound them.

    Fed one ``import_statement`` at a time during traversal. Type-only
    imports (``import type { X } from 'y'``) bind no runtime value and are
    ignored.
    """

    def __init__(self, source_code: bytes, target_module: str = REACT_MODULE):
        self.source_code = source_code
        self.target_module = target_module
        self.bindings: Dict[str, ImportInfo] = {}

    def record_import(self, node: Node) -> None:
        source_node = node.child_by_field_name('source')
        if source_node is None or _is_type_only(node):
            return

        module_name = self._get_text(source_node).strip('"\'`')

        for local_name, info in self._iter_specifiers(node, module_name):
            # Later imports of the same local name win.
            self.bindings[local_name] = info

    def is_bound_to_target_module(self, identifier: Node) -> bool:
        """True when ``identifier`` names a ``{ named }`` import from the target module.

        Default and namespace imports of the module are recorded but are
        reached through ``React.<member>`` instead.
        """
        info = self.bindings.get(self._get_text(identifier))
        return (
            info is not None
            and info.kind == 'named'
            and info.source_module == self.target_module
        )

    def source_of(self, local_name: str) -> Optional[str]:
        """Module a default or named import bound ``local_name`` to."""
        info = self.bindings.get(local_name)
        if info is None or info.kind == 'namespace':
            return None
        return info.source_module

    def _iter_specifiers(self, node: Node, module_name: str):
        for clause in named_children(node):
            if clause.type != 'import_clause':
                continue

            for child in named_children(clause):
                # import x from 'mod'
                if child.type == 'identifier':
                    yield self._get_text(child), ImportInfo(module_name, 'default', 'default')

                # import * as ns from 'mod'
                elif child.type == 'namespace_import':
                    for ns_child in named_children(child):
                        if ns_child.type == 'identifier':
                            yield self._get_text(ns_child), ImportInfo(module_name, None, 'namespace')

                # import { x, y as z } from 'mod'
                elif child.type == 'named_imports':
                    for specifier in named_children(child):
                        if specifier.type != 'import_specifier' or _is_type_only(specifier):
                            continue
                        name_node = specifier.child_by_field_name('name')
                        alias_node = specifier.child_by_field_name('alias')
                        if name_node is None:
                            continue
                        original = self._get_text(name_node).strip('"\'')
                        local = self._get_text(alias_node) if alias_node is not None else original
                        yield local, ImportInfo(module_name, original, 'named')

    def _get_text(self, node: Node) -> str:
        return node_text(node, self.source_code)


def _is_type_only(node: Node) -> bool:
    """``import type ...`` / ``import { type X }`` marker on a statement or specifier."""
    return any(child.type in ('type', 'typeof') for child in node.children if not child.is_named)
