"""Enhancer exposing React import-binding lookups to a rule."""
from dataclasses import dataclass
from typing import Callable

from tree_sitter import Node

from .composition import enhancer
from .js_import_tracker import JSImportTracker


@dataclass
class ReactImportHelpers:
    is_react_import: Callable[[Node], bool]
    tracker: JSImportTracker


def _build(context):
    tracker = JSImportTracker(context.source_code.text)
    helpers = ReactImportHelpers(
        is_react_import=tracker.is_bound_to_target_module,
        tracker=tracker,
    )
    return helpers, {'import_statement': tracker.record_import}


detect_react_imports = enhancer(_build)
