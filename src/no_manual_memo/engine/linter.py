"""Lint driver: parse, walk once, dispatch rule visitors, collect and fix."""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from tree_sitter import Node

from ..analyzer.parser import LanguageParser
from ..reaper.fixer import Fix, apply_fixes
from .rule import SEVERITY_ERROR, SEVERITY_OFF, Rule, RuleContext, SourceCode, parse_severity

DEFAULT_MAX_FIX_PASSES = 10


@dataclass
class Diagnostic:
    rule_id: str
    message_id: str
    message: str
    severity: int
    line: int
    column: int
    end_line: int
    end_column: int
    fix: Optional[Fix] = None

    @property
    def is_error(self) -> bool:
        return self.severity == SEVERITY_ERROR

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'ruleId': self.rule_id,
            'messageId': self.message_id,
            'message': self.message,
            'severity': self.severity,
            'line': self.line,
            'column': self.column,
            'endLine': self.end_line,
            'endColumn': self.end_column,
        }
        if self.fix is not None:
            result['fix'] = {'range': list(self.fix.range), 'text': self.fix.text}
        return result


@dataclass
class LintResult:
    filename: str
    diagnostics: List[Diagnostic] = field(default_factory=list)
    has_syntax_error: bool = False
    output: Optional[str] = None

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if not d.is_error)

    @property
    def fixable_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.fix is not None)


class Linter:
    """Runs a set of rules over JavaScript / TypeScript sources.

    Args:
        rules: Rule name to Rule, e.g. ``plugin.RULES``
        settings: Rule name to severity ('off' / 'warn' / 'error' or 0-2),
                  optionally as ``[severity, *options]``. Rules missing from
                  settings do not run.
        rule_prefix: Prefix for reported rule ids (``<prefix>/<rule>``)
    """

    def __init__(self, rules: Mapping[str, Rule], settings: Mapping[str, Any],
                 rule_prefix: Optional[str] = None,
                 max_fix_passes: int = DEFAULT_MAX_FIX_PASSES):
        self.rules = dict(rules)
        self.rule_prefix = rule_prefix
        self.max_fix_passes = max_fix_passes
        self.active: List[Tuple[Rule, int, List[Any]]] = []
        self._parsers: Dict[str, LanguageParser] = {}

        for name, setting in settings.items():
            if name not in self.rules:
                raise ValueError(f"Unknown rule: {name}")
            severity = parse_severity(setting)
            if severity == SEVERITY_OFF:
                continue
            options = list(setting[1:]) if isinstance(setting, (list, tuple)) else None
            self.active.append((self.rules[name], severity, options))

    def verify(self, text: Union[str, bytes], filename: str = '<input>.jsx') -> LintResult:
        """Lint one file's contents without modifying them."""
        source = text.encode('utf-8') if isinstance(text, str) else text
        tree = self._parser_for(filename).parse_source(source)
        source_code = SourceCode(source, tree)

        contexts = []
        tables = []
        for rule, severity, options in self.active:
            context = RuleContext(rule, self._rule_id(rule), filename, source_code, options)
            contexts.append((context, severity))
            tables.append(rule.create(context, context.options))

        self._traverse(tree.root_node, tables)

        lines = source.split(b'\n')
        diagnostics = []
        for context, severity in contexts:
            for report in context.reports:
                diagnostics.append(self._to_diagnostic(context, severity, report, lines))
        diagnostics.sort(key=lambda d: (d.line, d.column, d.rule_id))

        return LintResult(filename, diagnostics, tree.root_node.has_error)

    def verify_and_fix(self, text: Union[str, bytes], filename: str = '<input>.jsx') -> LintResult:
        """Lint, apply fixes, and re-lint until stable or out of passes.

        The returned result carries the diagnostics left in the final output
        and ``output`` set to the rewritten source.
        """
        source = text.encode('utf-8') if isinstance(text, str) else text
        result = self.verify(source, filename)

        for _ in range(self.max_fix_passes):
            fixes = [d.fix for d in result.diagnostics if d.fix is not None]
            if not fixes:
                break
            source, _skipped = apply_fixes(source, fixes)
            result = self.verify(source, filename)

        result.output = source.decode('utf-8')
        return result

    def _traverse(self, root: Node, tables: List[Dict[str, Any]]) -> None:
        """Depth-first walk firing ``type`` on enter and ``type:exit`` on leave."""
        stack = [(root, False)]
        while stack:
            node, exiting = stack.pop()
            key = f'{node.type}:exit' if exiting else node.type
            for table in tables:
                handler = table.get(key)
                if handler is not None:
                    handler(node)
            if exiting:
                continue
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(node.named_children))

    def _parser_for(self, filename: str) -> LanguageParser:
        parser = LanguageParser.from_file_extension(filename)
        return self._parsers.setdefault(parser.language, parser)

    def _rule_id(self, rule: Rule) -> str:
        return f'{self.rule_prefix}/{rule.name}' if self.rule_prefix else rule.name

    def _to_diagnostic(self, context: RuleContext, severity: int, report, lines) -> Diagnostic:
        template = context.rule.meta.messages[report.message_id]
        start = report.node.start_point
        end = report.node.end_point
        return Diagnostic(
            rule_id=context.id,
            message_id=report.message_id,
            message=template.format(**report.data),
            severity=severity,
            line=start[0] + 1,
            column=_char_column(lines, start) + 1,
            end_line=end[0] + 1,
            end_column=_char_column(lines, end) + 1,
            fix=report.fix,
        )


def _char_column(lines: List[bytes], point) -> int:
    """tree-sitter columns count bytes; diagnostics count characters."""
    row, byte_column = point[0], point[1]
    if row >= len(lines):
        return byte_column
    return len(lines[row][:byte_column].decode('utf-8', errors='replace'))


def lint_file(linter: Linter, path: Path, fix: bool = False) -> LintResult:
    """Read and lint a file; with ``fix`` the result's ``output`` holds the fixed text."""
    source = Path(path).read_bytes()
    if fix:
        return linter.verify_and_fix(source, str(path))
    return linter.verify(source, str(path))
