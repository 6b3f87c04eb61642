"""Rule metadata and the per-file context handed to rule ``create`` functions."""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from tree_sitter import Node, Tree

from ..analyzer.ast_utils import get_ancestors, node_text
from ..reaper.fixer import Fix, RuleFixer

DOCS_URL = 'https://github.com/BellCubeDev/eslint-plugin-react-no-manual-memo/blob/main/docs/{name}.md'

SEVERITY_OFF = 0
SEVERITY_WARN = 1
SEVERITY_ERROR = 2

SEVERITY_NAMES = {
    'off': SEVERITY_OFF,
    'warn': SEVERITY_WARN,
    'error': SEVERITY_ERROR,
}


def get_docs_url(rule_name: str) -> str:
    return DOCS_URL.format(name=rule_name)


def parse_severity(value) -> int:
    """Accept 'off' / 'warn' / 'error' or 0 / 1 / 2.

    Raises:
        ValueError: For anything else
    """
    if isinstance(value, (list, tuple)) and value:
        value = value[0]
    if isinstance(value, str) and value.lower() in SEVERITY_NAMES:
        return SEVERITY_NAMES[value.lower()]
    if isinstance(value, int) and not isinstance(value, bool) and value in SEVERITY_NAMES.values():
        return value
    raise ValueError(f"Invalid severity: {value!r}. Use 'off', 'warn', 'error' or 0-2.")


@dataclass
class RuleMeta:
    name: str
    description: str
    messages: Dict[str, str]
    type: str = 'suggestion'
    recommended: str = 'warn'
    fixable: Optional[str] = None

    @property
    def docs_url(self) -> str:
        return get_docs_url(self.name)


@dataclass
class Rule:
    meta: RuleMeta
    create: Callable[['RuleContext', Any], Dict[str, Callable[[Node], Any]]]
    default_options: List[Any] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.meta.name


class SourceCode:
    """Source bytes plus their tree, with text and ancestor lookups."""

    def __init__(self, text: bytes, tree: Tree):
        self.text = text
        self.tree = tree

    @property
    def ast(self) -> Node:
        return self.tree.root_node

    @property
    def lines(self) -> List[str]:
        return self.text.decode('utf-8', errors='replace').split('\n')

    def get_text(self, node: Node) -> str:
        return node_text(node, self.text)

    def get_ancestors(self, node: Node) -> List[Node]:
        return get_ancestors(node)


@dataclass
class Report:
    node: Node
    message_id: str
    data: Dict[str, Any]
    fix: Optional[Fix]


class RuleContext:
    """What a rule sees of the file being linted."""

    def __init__(self, rule: Rule, rule_id: str, filename: str,
                 source_code: SourceCode, options: Optional[List[Any]] = None):
        self.rule = rule
        self.id = rule_id
        self.filename = filename
        self.source_code = source_code
        self.options = options if options is not None else list(rule.default_options)
        self.reports: List[Report] = []

    def report(self, node: Node, message_id: str, data: Optional[Dict[str, Any]] = None,
               fix: Optional[Callable[[RuleFixer], Fix]] = None) -> None:
        """Record a violation.

        Raises:
            ValueError: If ``message_id`` is not declared in the rule's meta
        """
        if message_id not in self.rule.meta.messages:
            raise ValueError(f"Rule '{self.id}' has no message '{message_id}'")
        resolved_fix = fix(RuleFixer()) if fix is not None else None
        self.reports.append(Report(node, message_id, dict(data or {}), resolved_fix))
