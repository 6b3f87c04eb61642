"""Rule registry and shareable presets.

Each preset comes in two shapes, matching the two configuration styles a
host may use:

- legacy:  ``{"plugins": ["react-no-manual-memo"], "rules": {...}}``
- flat:    ``[{"name": ..., "plugins": {"react-no-manual-memo": plugin}, "rules": {...}}]``
"""
from typing import Any, Dict, List, Mapping, Union

from .config import PACKAGE_NAME, __version__
from .engine.rule import Rule, parse_severity
from .rules import no_component_memo, no_custom_memo_hook, no_hook_memo


def strip_eslint_plugin_prefix(package_name: str) -> str:
    prefix = 'eslint-plugin-'
    return package_name[len(prefix):] if package_name.startswith(prefix) else package_name


NAMESPACE = strip_eslint_plugin_prefix(PACKAGE_NAME)

RULES: Dict[str, Rule] = {
    no_component_memo.name: no_component_memo.rule,
    no_custom_memo_hook.name: no_custom_memo_hook.rule,
    no_hook_memo.name: no_hook_memo.rule,
}

_PRESET_SEVERITIES = {
    'recommended': {
        no_hook_memo.name: 'error',
        no_component_memo.name: 'error',
        no_custom_memo_hook.name: 'warn',
    },
    'all': {
        no_hook_memo.name: 'error',
        no_component_memo.name: 'error',
        no_custom_memo_hook.name: 'error',
    },
}

PRESET_NAMES = tuple(_PRESET_SEVERITIES)


def _namespaced(severities: Mapping[str, str]) -> Dict[str, str]:
    return {f'{NAMESPACE}/{rule}': severity for rule, severity in severities.items()}


plugin: Dict[str, Any] = {
    'meta': {
        'name': PACKAGE_NAME,
        'version': __version__,
        'namespace': NAMESPACE,
    },
    'rules': RULES,
    'configs': {},
}

for _preset, _severities in _PRESET_SEVERITIES.items():
    plugin['configs'][_preset] = {
        'plugins': [NAMESPACE],
        'rules': _namespaced(_severities),
    }
    # The flat shape refers back to the plugin object itself.
    plugin['configs'][f'flat/{_preset}'] = [
        {
            'name': f'{NAMESPACE}/flat/{_preset}',
            'plugins': {NAMESPACE: plugin},
            'rules': _namespaced(_severities),
        }
    ]


def get_preset(preset: str, flat: bool = False) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    """Look up a preset by name in either shape.

    Raises:
        ValueError: If the preset does not exist
    """
    if preset not in _PRESET_SEVERITIES:
        raise ValueError(f"Unknown preset '{preset}'. Use one of: {', '.join(PRESET_NAMES)}")
    return plugin['configs'][f'flat/{preset}' if flat else preset]


def resolve_rule_settings(config: Union[Mapping[str, Any], List[Mapping[str, Any]]]) -> Dict[str, Any]:
    """Normalize a legacy or flat config into ``{rule_name: setting}``.

    Later flat entries override earlier ones. Rules from other namespaces
    are ignored; unknown rules in this namespace raise ValueError.
    """
    entries = [config] if isinstance(config, Mapping) else list(config)
    settings: Dict[str, Any] = {}

    for entry in entries:
        for rule_id, setting in entry.get('rules', {}).items():
            namespace, _, rule_name = rule_id.rpartition('/')
            if namespace != NAMESPACE:
                continue
            if rule_name not in RULES:
                raise ValueError(f"Unknown rule: {rule_id}")
            parse_severity(setting)
            settings[rule_name] = setting

    return settings
