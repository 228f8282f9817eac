"""
Tests for Configuration, Logging and Errors
===========================================
Dot-notation access, environment and file overrides, the structured
logger, the error hierarchy and the shared LRU cache.
"""

import json
import logging

import pytest

from prosecheck import config as prosecheck_config
from prosecheck.cache import LRUCache, text_digest
from prosecheck.config import LoggingConfig, ProseCheckConfig
from prosecheck.config_logging import (
    DictionaryError,
    ProcessingError,
    ProseCheckError,
    StructuredLogger,
    ValidationError,
    get_logger,
    handle_errors,
    reset_loggers,
)


class TestConfigAccess:
    """Tests for get/set and component toggles."""

    def test_defaults(self):
        assert prosecheck_config.get('spelling.max_suggestions') == 3
        assert prosecheck_config.get('validation.cache_size') == 200
        assert prosecheck_config.get('style.enhanced_processing') is True

    def test_get_unknown_returns_default(self):
        assert prosecheck_config.get('spelling.nope', 'fallback') == 'fallback'
        assert prosecheck_config.get('nope.enabled') is None

    def test_set(self):
        prosecheck_config.set('style.enhanced_processing', False)
        assert prosecheck_config.get_config().style.enhanced_processing is False

    @pytest.mark.parametrize('key', ['spelling', 'spelling.nope', 'nope.enabled'])
    def test_set_rejects_bad_keys(self, key):
        with pytest.raises(ValueError):
            prosecheck_config.set(key, 1)

    def test_disable_and_enable_all(self):
        prosecheck_config.disable_all()
        assert not any(prosecheck_config.is_enabled(n)
                       for n in ('dictionary', 'grammar', 'spelling', 'style'))

        prosecheck_config.enable_all()
        assert prosecheck_config.is_enabled('spelling')

    def test_is_enabled_unknown_section(self):
        assert not prosecheck_config.is_enabled('tone')

    def test_reset(self):
        prosecheck_config.set('spelling.max_suggestions', 9)
        prosecheck_config.reset_config()
        assert prosecheck_config.get('spelling.max_suggestions') == 3


class TestConfigLoading:
    """Config file and environment overrides."""

    def test_environment(self, monkeypatch, tmp_path):
        monkeypatch.setattr(prosecheck_config, 'CONFIG_FILE', tmp_path / 'missing.json')
        monkeypatch.setenv('PROSECHECK_SPELLING_ENABLED', 'false')
        monkeypatch.setenv('PROSECHECK_SPELLING_MAX_SUGGESTIONS', '5')
        monkeypatch.setenv('PROSECHECK_STYLE_ENHANCED', 'no')

        config = prosecheck_config._load_config()

        assert config.spelling.enabled is False
        assert config.spelling.max_suggestions == 5
        assert config.style.enhanced_processing is False

    def test_invalid_environment_value_is_ignored(self, monkeypatch, tmp_path):
        monkeypatch.setattr(prosecheck_config, 'CONFIG_FILE', tmp_path / 'missing.json')
        monkeypatch.setenv('PROSECHECK_VALIDATION_CACHE_SIZE', 'lots')

        assert prosecheck_config._load_config().validation.cache_size == 200

    def test_config_file(self, monkeypatch, tmp_path):
        path = tmp_path / 'prosecheck_config.json'
        path.write_text(json.dumps({
            'grammar': {'skip_rules': ['could-of'], 'unknown': 1},
            'validation': {'risky_confidence_floor': 0.5},
        }), encoding='utf-8')
        monkeypatch.setattr(prosecheck_config, 'CONFIG_FILE', path)

        config = prosecheck_config._load_config()

        assert config.grammar.skip_rules == ['could-of']
        assert config.validation.risky_confidence_floor == 0.5
        assert not hasattr(config.grammar, 'unknown')

    def test_broken_config_file_keeps_defaults(self, monkeypatch, tmp_path):
        path = tmp_path / 'prosecheck_config.json'
        path.write_text("{not json", encoding='utf-8')
        monkeypatch.setattr(prosecheck_config, 'CONFIG_FILE', path)

        assert prosecheck_config._load_config() == ProseCheckConfig()

    def test_save_round_trip(self, monkeypatch, tmp_path):
        path = tmp_path / 'saved.json'
        prosecheck_config.set('spelling.max_suggestions', 7)
        prosecheck_config.save_config(path)

        monkeypatch.setattr(prosecheck_config, 'CONFIG_FILE', path)
        assert prosecheck_config._load_config().spelling.max_suggestions == 7


class TestStructuredLogger:
    """Tests for the JSON logger."""

    def test_json_record(self, capsys):
        logger = StructuredLogger('prosecheck.test.json', LoggingConfig(level='DEBUG'))
        logger.info("Checked text", length=12)

        record = json.loads(capsys.readouterr().err.strip())
        assert record['message'] == "Checked text"
        assert record['level'] == 'INFO'
        assert record['logger'] == 'prosecheck.test.json'
        assert record['length'] == 12
        assert record['correlation_id']

    def test_level_filtering(self, capsys):
        logger = StructuredLogger('prosecheck.test.level', LoggingConfig(level='WARNING'))
        logger.debug("hidden")
        assert capsys.readouterr().err == ''

    def test_text_format(self, capsys):
        logger = StructuredLogger('prosecheck.test.text',
                                  LoggingConfig(level='DEBUG', format='text'))
        logger.warning("Slow rule", rule_id='x')
        assert 'Slow rule rule_id=x' in capsys.readouterr().err

    def test_log_operation_reraises(self, capsys):
        logger = StructuredLogger('prosecheck.test.op', LoggingConfig(level='DEBUG'))

        with pytest.raises(RuntimeError):
            with logger.log_operation('check_text', length=3):
                raise RuntimeError("boom")

        lines = [json.loads(l) for l in capsys.readouterr().err.strip().splitlines()]
        assert [l['status'] for l in lines] == ['started', 'failed']
        assert 'traceback' in lines[-1]

    def test_correlation_id(self):
        StructuredLogger.set_correlation_id('abc123')
        assert StructuredLogger.get_correlation_id() == 'abc123'
        assert StructuredLogger.new_correlation_id() != 'abc123'

    def test_get_logger_caches(self):
        reset_loggers()
        first = get_logger('prosecheck.test.cached')
        assert get_logger('prosecheck.test.cached') is first
        assert not first.logger.propagate
        assert first.logger.level == logging.WARNING


class TestErrors:
    """Tests for the error hierarchy and handle_errors."""

    def test_to_dict(self):
        error = ValidationError("text must be a string", field='text')
        assert error.to_dict() == {
            'success': False,
            'error': {
                'code': 'VALIDATION_ERROR',
                'message': "text must be a string",
                'details': {'field': 'text'},
            },
        }

    def test_hierarchy(self):
        for error in (ValidationError("x"), DictionaryError("x", path='/w'), ProcessingError("x")):
            assert isinstance(error, ProseCheckError)
        assert DictionaryError("x", path='/w').details['path'] == '/w'

    def test_handle_errors_wraps_unexpected(self):
        @handle_errors()
        def broken():
            raise KeyError('k')

        with pytest.raises(ProcessingError) as excinfo:
            broken()
        assert excinfo.value.details['stage'] == 'broken'

    def test_handle_errors_passes_own_errors(self):
        @handle_errors(default=list)
        def invalid():
            raise ValidationError("bad", field='text')

        with pytest.raises(ValidationError):
            invalid()

    def test_handle_errors_default(self):
        @handle_errors(default=list)
        def broken():
            raise KeyError('k')

        assert broken() == []


class TestLRUCache:
    """Tests for the shared bounded cache."""

    def test_eviction_order(self):
        cache = LRUCache(2)
        cache.put('a', 1)
        cache.put('b', 2)
        cache.get('a')
        cache.put('c', 3)

        assert cache.keys() == ['a', 'c']
        assert 'b' not in cache

    def test_get_or_compute(self):
        cache = LRUCache(4)
        calls = []

        def compute():
            calls.append(1)
            return 'value'

        assert cache.get_or_compute('k', compute) == 'value'
        assert cache.get_or_compute('k', compute) == 'value'
        assert len(calls) == 1

        stats = cache.stats()
        assert stats['hits'] == 1
        assert stats['misses'] == 1
        assert stats['hit_rate'] == 0.5

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            LRUCache(0)

    def test_digest(self):
        assert text_digest("abc") == text_digest("abc")
        assert text_digest(None) == text_digest("")
        assert text_digest("abc") != text_digest("abd")
