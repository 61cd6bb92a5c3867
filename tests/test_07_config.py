"""
Configuration Tests

Defaults, YAML loading and validation.
"""

from pathlib import Path

import pytest

from codegen_gate import DEFAULT_CONFIG, ConfigError, GateConfig, load_config
from codegen_gate.config import DEDUCTIONS, config_from_dict


def write_yaml(tmp_path: Path, content: str) -> Path:
    path = tmp_path / 'gate.yaml'
    path.write_text(content, encoding='utf-8')
    return path


class TestDefaults:
    """Built-in thresholds."""

    def test_default_thresholds(self):
        assert DEFAULT_CONFIG.max_function_lines == 15
        assert DEFAULT_CONFIG.max_complexity == 10
        assert DEFAULT_CONFIG.max_params == 4
        assert DEFAULT_CONFIG.max_file_lines == 300
        assert DEFAULT_CONFIG.soft_file_lines == 250
        assert DEFAULT_CONFIG.strict_mode is True

    def test_deductions_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_CONFIG.deductions['any-type'] = 0

    def test_unknown_rule_deducts_nothing(self):
        assert DEFAULT_CONFIG.deduction('no-such-rule') == 0
        assert DEFAULT_CONFIG.deduction('eslint-disable') == DEDUCTIONS['eslint-disable']


class TestLoading:
    """YAML files over the defaults."""

    def test_dashed_keys_and_deductions(self, tmp_path):
        path = write_yaml(tmp_path, "max-params: 6\ndeductions:\n  any-type: 20\n")
        config = load_config(path)
        assert config.max_params == 6
        assert config.deduction('any-type') == 20
        assert config.deduction('jsdoc') == DEDUCTIONS['jsdoc']

    def test_empty_file_gives_defaults(self, tmp_path):
        assert load_config(write_yaml(tmp_path, '')) == DEFAULT_CONFIG

    def test_loading_over_a_base(self, tmp_path):
        base = GateConfig(strict_mode=False)
        config = load_config(write_yaml(tmp_path, "max-complexity: 12\n"), base)
        assert config.strict_mode is False
        assert config.max_complexity == 12

    @pytest.mark.parametrize('content', [
        "max-parms: 6\n",
        "soft-file-lines: 400\n",
        "max-params: [1, 2\n",
        "- a\n- b\n",
        "deductions:\n  any-type: -1\n",
        "deductions: 5\n",
        "logging-severity: loud\n",
        "max-params: yes\n",
    ])
    def test_invalid_config(self, tmp_path, content):
        with pytest.raises(ConfigError):
            load_config(write_yaml(tmp_path, content))

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_config(tmp_path / 'missing.yaml')


class TestOverrides:
    """Programmatic copies."""

    def test_with_overrides(self):
        config = DEFAULT_CONFIG.with_overrides(max_params=5, deductions={'jsdoc': 1})
        assert config.max_params == 5
        assert config.deduction('jsdoc') == 1
        assert config.deduction('any-type') == 10
        assert DEFAULT_CONFIG.max_params == 4

    def test_unknown_override(self):
        with pytest.raises(ConfigError):
            DEFAULT_CONFIG.with_overrides(max_parms=5)

    def test_from_dict(self):
        config = config_from_dict({'strict_mode': False, 'record-fix-skips': True})
        assert config.strict_mode is False
        assert config.record_fix_skips is True
