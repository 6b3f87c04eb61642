"""Command line and configuration tests."""
import json

import pytest
from typer.testing import CliRunner

from no_manual_memo import config as config_module
from no_manual_memo.config import Config
from no_manual_memo.main import app, discover_files
from no_manual_memo.plugin import RULES

runner = CliRunner()

ENV_VARS = ('NO_MANUAL_MEMO_PRESET', 'NO_MANUAL_MEMO_FORMAT', 'NO_MANUAL_MEMO_MAX_FIX_PASSES')

MEMOIZED_COMPONENT = """import { useMemo } from 'react'

export function Total({ items }) {
    const total = useMemo(() => items.reduce((a, b) => a + b, 0), [items])
    return <span>{total}</span>
}
"""

CLEAN_COMPONENT = """export function Total({ items }) {
    return <span>{items.length}</span>
}
"""


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Fresh config singleton, no stray .env, no inherited env vars."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_module, '_config', None)
    for name in ENV_VARS:
        # setenv first so monkeypatch restores whatever load_dotenv may write
        monkeypatch.setenv(name, '')
        monkeypatch.delenv(name)


@pytest.fixture
def project(tmp_path):
    src = tmp_path / 'src'
    src.mkdir()
    (src / 'Total.jsx').write_text(MEMOIZED_COMPONENT, encoding='utf-8')
    (src / 'Clean.tsx').write_text(CLEAN_COMPONENT, encoding='utf-8')
    vendored = tmp_path / 'node_modules' / 'lib'
    vendored.mkdir(parents=True)
    (vendored / 'index.js').write_text(MEMOIZED_COMPONENT, encoding='utf-8')
    (tmp_path / 'README.md').write_text('# docs\n', encoding='utf-8')
    return tmp_path


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.preset == 'recommended'
        assert config.output_format == 'text'
        assert config.max_fix_passes == 10

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv('NO_MANUAL_MEMO_PRESET', 'all')
        monkeypatch.setenv('NO_MANUAL_MEMO_MAX_FIX_PASSES', '3')
        config = Config()
        assert config.preset == 'all'
        assert config.max_fix_passes == 3

    def test_dotenv_file(self, tmp_path):
        (tmp_path / '.env').write_text('NO_MANUAL_MEMO_FORMAT=json\n', encoding='utf-8')
        assert Config().output_format == 'json'

    @pytest.mark.parametrize('raw', ['zero', '0', '-2'])
    def test_invalid_fix_passes(self, monkeypatch, raw):
        monkeypatch.setenv('NO_MANUAL_MEMO_MAX_FIX_PASSES', raw)
        with pytest.raises(ValueError, match='NO_MANUAL_MEMO_MAX_FIX_PASSES'):
            Config().max_fix_passes


class TestDiscoverFiles:

    def test_skips_vendored_and_unsupported(self, project):
        found = discover_files([project])
        assert sorted(p.name for p in found) == ['Clean.tsx', 'Total.jsx']

    def test_include_vendored(self, project):
        found = discover_files([project], include_vendored=True)
        assert 'index.js' in {p.name for p in found}

    def test_explicit_file_is_kept(self, project):
        readme = project / 'README.md'
        assert discover_files([readme]) == [readme]


class TestLintCommand:

    def test_errors_exit_nonzero(self, project):
        result = runner.invoke(app, ['lint', str(project / 'src')])
        assert result.exit_code == 1
        assert '1 problem (1 error, 0 warnings)' in result.output

    def test_clean_file_exits_zero(self, project):
        result = runner.invoke(app, ['lint', str(project / 'src' / 'Clean.tsx')])
        assert result.exit_code == 0

    def test_fix_rewrites_file(self, project):
        target = project / 'src' / 'Total.jsx'
        result = runner.invoke(app, ['lint', '--fix', str(target)])

        assert result.exit_code == 0
        fixed = target.read_text(encoding='utf-8')
        assert 'const total = items.reduce((a, b) => a + b, 0)\n' in fixed
        # The import is left for the user or another tool to clean up
        assert fixed.startswith("import { useMemo } from 'react'")

    def test_crlf_file_without_fixes_is_untouched(self, project):
        target = project / 'src' / 'answer.js'
        target.write_bytes(b"export const answer = 42\r\n")
        result = runner.invoke(app, ['lint', '--fix', str(target)])

        assert result.exit_code == 0
        assert target.read_bytes() == b"export const answer = 42\r\n"
        assert 'Fixed' not in result.output

    def test_fix_keeps_crlf_line_endings(self, project):
        target = project / 'src' / 'Total.jsx'
        target.write_bytes(MEMOIZED_COMPONENT.replace('\n', '\r\n').encode('utf-8'))
        result = runner.invoke(app, ['lint', '--fix', str(target)])

        assert 'Fixed 1 file(s).' in result.output
        fixed = target.read_bytes()
        assert b'const total = items.reduce((a, b) => a + b, 0)\r\n' in fixed
        assert b'\n' not in fixed.replace(b'\r\n', b'')

    def test_json_format(self, project):
        result = runner.invoke(app, ['lint', '--format', 'json', str(project / 'src' / 'Total.jsx')])

        assert result.exit_code == 1
        (report,) = json.loads(result.output)
        assert report['errorCount'] == 1
        (message,) = report['messages']
        assert message['ruleId'] == 'react-no-manual-memo/no-hook-memo'
        assert message['messageId'] == 'noUseMemo'
        assert (message['line'], message['column']) == (4, 19)

    def test_format_from_environment(self, project, monkeypatch):
        monkeypatch.setenv('NO_MANUAL_MEMO_FORMAT', 'json')
        result = runner.invoke(app, ['lint', str(project / 'src' / 'Clean.tsx')])
        assert json.loads(result.output)[0]['messages'] == []

    def test_all_preset_turns_warnings_into_errors(self, project):
        hook = project / 'src' / 'useTotal.js'
        hook.write_text(
            "import { useMemo } from 'react'\n"
            "export const useTotal = (items) => useMemo(() => items.length, [items])\n",
            encoding='utf-8',
        )
        assert runner.invoke(app, ['lint', str(hook)]).exit_code == 0
        assert runner.invoke(app, ['lint', '--preset', 'all', str(hook)]).exit_code == 1

    def test_missing_path(self, project):
        result = runner.invoke(app, ['lint', str(project / 'missing')])
        assert result.exit_code == 2

    def test_unknown_preset_option(self, project):
        result = runner.invoke(app, ['lint', '--preset', 'strict', str(project)])
        assert result.exit_code == 2

    def test_unknown_preset_from_environment(self, project, monkeypatch):
        monkeypatch.setenv('NO_MANUAL_MEMO_PRESET', 'strict')
        result = runner.invoke(app, ['lint', str(project)])
        assert result.exit_code == 2
        assert 'Unknown preset' in result.output


class TestOtherCommands:

    def test_rules(self):
        result = runner.invoke(app, ['rules'])
        assert result.exit_code == 0
        for name in ('no-hook-memo', 'no-component-memo', 'no-custom-memo-hook'):
            assert name in result.output

    def test_version(self):
        result = runner.invoke(app, ['version'])
        assert result.exit_code == 0
        assert result.output.strip() == 'react-no-manual-memo 1.0.0'

    def test_rules_show_default_severity_and_docs(self):
        result = runner.invoke(app, ['rules'])
        assert 'Default' in result.output
        for name, rule in RULES.items():
            assert rule.meta.docs_url in result.output
            assert rule.meta.docs_url.endswith(f'/docs/{name}.md')
