"""
ProseCheck Configuration Module
===============================
Centralized configuration for the analysis engine.

Configuration can be set via:
1. Environment variables (PROSECHECK_SPELLING_ENABLED=true)
2. Config file (prosecheck_config.json)
3. Direct API calls (config.set('style.enhanced_processing', False))

All settings have sensible defaults; no setting requires network access.
"""

import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field, asdict

__version__ = "1.0.0"

# Default configuration path
CONFIG_FILE = Path(__file__).parent.parent / "prosecheck_config.json"

_log = logging.getLogger(__name__)


@dataclass
class DictionaryConfig:
    """Word list configuration."""
    enabled: bool = True
    path: Optional[str] = None  # None = symspellpy's bundled frequency list


@dataclass
class GrammarConfig:
    """Grammar rule configuration."""
    enabled: bool = True
    skip_rules: list = field(default_factory=list)


@dataclass
class SpellingConfig:
    """Spelling stage configuration."""
    enabled: bool = True
    max_suggestions: int = 3
    min_confidence: float = 0.3
    include_phonetic: bool = True
    min_word_length: int = 3
    max_word_length: int = 45  # Longer tokens are skipped
    context_window: int = 2


@dataclass
class StyleConfig:
    """Style rule configuration."""
    enabled: bool = True
    enhanced_processing: bool = True
    skip_rules: list = field(default_factory=list)
    cache_size: int = 64


@dataclass
class ValidationConfig:
    """Suggestion validator configuration."""
    cache_size: int = 200
    risky_confidence_floor: float = 0.6


@dataclass
class LoggingConfig:
    """Structured logging configuration."""
    level: str = "WARNING"
    format: str = "json"  # Options: json, text
    log_to_console: bool = True
    log_to_file: bool = False
    log_dir: Optional[str] = None


@dataclass
class ProseCheckConfig:
    """Master configuration."""
    dictionary: DictionaryConfig = field(default_factory=DictionaryConfig)
    grammar: GrammarConfig = field(default_factory=GrammarConfig)
    spelling: SpellingConfig = field(default_factory=SpellingConfig)
    style: StyleConfig = field(default_factory=StyleConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
_config: Optional[ProseCheckConfig] = None

_TOGGLEABLE = ('dictionary', 'grammar', 'spelling', 'style')


def get_config() -> ProseCheckConfig:
    """Get the global configuration."""
    global _config
    if _config is None:
        _config = _load_config()
    return _config


def _load_config() -> ProseCheckConfig:
    """Load configuration from file and environment."""
    config = ProseCheckConfig()

    if CONFIG_FILE.exists():
        try:
            with open(CONFIG_FILE, 'r', encoding='utf-8') as f:
                file_config = json.load(f)
            _apply_dict_to_config(config, file_config)
        except (json.JSONDecodeError, IOError) as e:
            _log.warning("Could not load config file %s: %s", CONFIG_FILE, e)

    _apply_env_to_config(config)

    return config


def _apply_dict_to_config(config: ProseCheckConfig, data: Dict[str, Any]):
    """Apply dictionary values to config object."""
    for section_name, section_data in data.items():
        if hasattr(config, section_name) and isinstance(section_data, dict):
            section = getattr(config, section_name)
            for key, value in section_data.items():
                if hasattr(section, key):
                    setattr(section, key, value)


def _apply_env_to_config(config: ProseCheckConfig):
    """Apply environment variables to config."""
    env_mappings = {
        'PROSECHECK_DICTIONARY_ENABLED': ('dictionary', 'enabled', _parse_bool),
        'PROSECHECK_DICTIONARY_PATH': ('dictionary', 'path', str),
        'PROSECHECK_GRAMMAR_ENABLED': ('grammar', 'enabled', _parse_bool),
        'PROSECHECK_SPELLING_ENABLED': ('spelling', 'enabled', _parse_bool),
        'PROSECHECK_SPELLING_MAX_SUGGESTIONS': ('spelling', 'max_suggestions', int),
        'PROSECHECK_SPELLING_MIN_CONFIDENCE': ('spelling', 'min_confidence', float),
        'PROSECHECK_SPELLING_MAX_WORD_LENGTH': ('spelling', 'max_word_length', int),
        'PROSECHECK_STYLE_ENABLED': ('style', 'enabled', _parse_bool),
        'PROSECHECK_STYLE_ENHANCED': ('style', 'enhanced_processing', _parse_bool),
        'PROSECHECK_VALIDATION_CACHE_SIZE': ('validation', 'cache_size', int),
        'PROSECHECK_LOG_LEVEL': ('logging', 'level', str),
        'PROSECHECK_LOG_FORMAT': ('logging', 'format', str),
        'PROSECHECK_LOG_TO_FILE': ('logging', 'log_to_file', _parse_bool),
        'PROSECHECK_LOG_DIR': ('logging', 'log_dir', str),
    }

    for env_var, (section, key, converter) in env_mappings.items():
        value = os.environ.get(env_var)
        if value is not None:
            try:
                section_obj = getattr(config, section)
                setattr(section_obj, key, converter(value))
            except (ValueError, AttributeError) as e:
                _log.warning("Invalid env var %s=%s: %s", env_var, value, e)


def _parse_bool(value: str) -> bool:
    """Parse boolean from string."""
    return value.lower() in ('true', '1', 'yes', 'on')


def is_enabled(section_name: str) -> bool:
    """Check if a component is enabled."""
    config = get_config()
    if hasattr(config, section_name):
        section = getattr(config, section_name)
        return getattr(section, 'enabled', False)
    return False


def get(key: str, default: Any = None) -> Any:
    """
    Get a configuration value by dot-notation key.

    Example: get('spelling.max_suggestions') -> 3
    """
    config = get_config()
    parts = key.split('.')

    obj = config
    for part in parts:
        if hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            return default

    return obj


def set(key: str, value: Any):
    """
    Set a configuration value by dot-notation key.

    Example: set('style.enhanced_processing', False)
    """
    config = get_config()
    parts = key.split('.')

    if len(parts) < 2:
        raise ValueError(f"Key must be in format 'section.key': {key}")

    section_name = parts[0]
    attr_name = parts[1]

    if hasattr(config, section_name):
        section = getattr(config, section_name)
        if hasattr(section, attr_name):
            setattr(section, attr_name, value)
        else:
            raise ValueError(f"Unknown config key: {attr_name}")
    else:
        raise ValueError(f"Unknown config section: {section_name}")


def save_config(path: Optional[Path] = None):
    """Save current configuration to file."""
    config = get_config()
    path = path or CONFIG_FILE

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(asdict(config), f, indent=2)


def reset_config():
    """Reset configuration to defaults."""
    global _config
    _config = ProseCheckConfig()


def disable_all():
    """Disable every toggleable component (useful for testing)."""
    config = get_config()
    for name in _TOGGLEABLE:
        getattr(config, name).enabled = False


def enable_all():
    """Enable every toggleable component."""
    config = get_config()
    for name in _TOGGLEABLE:
        getattr(config, name).enabled = True
