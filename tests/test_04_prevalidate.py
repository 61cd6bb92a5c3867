"""
Pre-validation Tests

Hard failures stop generation; soft failures only warn.
"""

import pytest

from codegen_gate import GateConfig, GenerationRequest, RequestError, ensure_valid, pre_validate, validate
from codegen_gate.prevalidate import estimate_size, parse_param_spec


def request(**kwargs) -> GenerationRequest:
    kwargs.setdefault('template_name', 'function')
    return GenerationRequest(**kwargs)


class TestHardFailures:
    """The first hard failure wins."""

    def test_six_parameters_rejected(self):
        """The message names the count."""
        params = ','.join(f"arg{i}:string" for i in range(6))
        outcome = pre_validate(request(params=params))
        assert outcome.ok is False
        assert '(6)' in outcome.reason
        assert outcome.field == 'params'

    def test_four_parameters_accepted(self):
        outcome = pre_validate(request(params="first:string,second:number,third:boolean,fourth:Date"))
        assert outcome.ok is True
        assert outcome.reason is None

    @pytest.mark.parametrize('params', ['data:any', 'items:any[]', 'items:Array<any>'])
    def test_any_parameter_type(self, params):
        outcome = pre_validate(request(params=params))
        assert outcome.ok is False
        assert 'any' in outcome.reason

    def test_short_parameter_name(self):
        outcome = pre_validate(request(params='x:number'))
        assert outcome.ok is False
        assert 'too short' in outcome.reason

    def test_loop_counters_allowed(self):
        assert pre_validate(request(params='i:number,j:number,k:number')).ok is True

    def test_duplicate_parameter_names(self):
        outcome = pre_validate(request(params='name:string,name:number'))
        assert outcome.ok is False
        assert "Duplicate parameter name 'name'" in outcome.reason

    def test_count_checked_first(self):
        """Six parameters with an 'any' type fail on the count."""
        params = 'data:any,' + ','.join(f"arg{i}:string" for i in range(5))
        assert 'Too many parameters' in pre_validate(request(params=params)).reason

    def test_ensure_valid_raises(self):
        """RequestError carries field and reason verbatim."""
        with pytest.raises(RequestError) as excinfo:
            ensure_valid(request(params='x:number'))
        assert excinfo.value.field == 'params'
        assert str(excinfo.value) == excinfo.value.reason

    def test_max_params_configurable(self):
        config = GateConfig(max_params=6)
        params = ','.join(f"arg{i}:string" for i in range(6))
        assert validate(request(params=params), config).ok is True


class TestSoftFailures:
    """Warnings are collected and logged, never blocking."""

    def test_missing_description(self):
        messages = []
        outcome = validate(request(name='loadUser'), log=messages.append)
        assert outcome.ok is True
        assert any('lacks description' in w for w in outcome.warnings)
        assert messages and messages[0].startswith('⚠️')

    def test_large_estimate(self):
        """50 + 4*10 + 20 + 15 + 10 = 135 lines."""
        req = request(name='sync', description='Sync things',
                      params='first:string,second:string,third:string,fourth:string',
                      returns='Promise<void>', is_async=True, throws='SyncError')
        config = GateConfig(max_file_lines=100, soft_file_lines=80)
        outcome = validate(req, config)
        assert outcome.ok is True
        assert any('~135 lines' in w for w in outcome.warnings)

    def test_builtin_name_collision(self):
        outcome = validate(request(name='Promise', description='Wraps things'))
        assert any('conflicts with built-in' in w for w in outcome.warnings)

    def test_loose_parameter_types(self):
        outcome = validate(request(params='opts:Object,loader:Promise<string>,value:string|undefined'))
        assert outcome.ok is True
        text = ' '.join(outcome.warnings)
        assert "uses 'Object' type" in text
        assert 'Promise without Result' in text
        assert 'includes undefined' in text

    def test_ai_function_without_return_type(self):
        outcome = validate(request(template_name='ai-function', name='summarize', description='Summarize'))
        assert any('specify return type' in w for w in outcome.warnings)

    def test_result_properties_in_description(self):
        outcome = validate(request(name='check', description='Returns result.isOk when done'))
        assert any('.isOk' in w for w in outcome.warnings)

    def test_clean_request_has_no_warnings(self):
        outcome = validate(request(name='loadUser', description='Load a user', params='userId:string',
                                   returns='User'))
        assert outcome.warnings == ()


class TestParsing:
    """Parameter list parsing and the size estimate."""

    def test_generic_types_keep_their_commas(self):
        params = parse_param_spec('lookup:Map<string, number>,key:string')
        assert [(p.name, p.type) for p in params] == [('lookup', 'Map<string, number>'), ('key', 'string')]

    def test_empty_params(self):
        assert parse_param_spec('') == []
        assert parse_param_spec(None) == []

    def test_estimate_size(self):
        req = request(returns='Promise<User>', is_async=True)
        assert estimate_size(req, parse_param_spec('userId:string')) == 50 + 10 + 20 + 15
