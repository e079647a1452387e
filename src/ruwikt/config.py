"""
Configuration for the Wiktionary lookup core.

Two layers:
- Settings: runtime knobs (API endpoint, timeout, client identity) read from
  the environment.
- Bindings: declarative section labels and template names loaded from
  schema/ru-wikt.sections.yaml. These describe Russian Wiktionary
  conventions and change when the wiki changes, not when the code does.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml


DEFAULT_API_URL = "https://ru.wiktionary.org/w/api.php"
DEFAULT_TIMEOUT = 8.0
DEFAULT_LANGUAGE = "Russian"

# Wikimedia APIs require a descriptive user agent
USER_AGENT = "RuWiktLookup/0.1 (word lookup service; contact@example.com)"

PLACEHOLDER = "-"


# =============================================================================
# Schema file paths
# =============================================================================

def _get_schema_path() -> Path:
    """Get path to the packaged schema directory."""
    return Path(__file__).parent / "schema"


BINDINGS_FILE = _get_schema_path() / "ru-wikt.sections.yaml"


# =============================================================================
# Config loading with error handling
# =============================================================================

class ConfigError(Exception):
    """Raised when the bindings file is missing or invalid."""
    pass


def _load_yaml(path: Path) -> dict:
    """Load YAML file with clear error message if missing."""
    if not path.exists():
        raise ConfigError(
            f"Required bindings file not found: {path}\n"
            f"This file defines section labels and template names."
        )
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigError(f"Bindings file {path} must contain a mapping")
    return data


@dataclass(frozen=True)
class Bindings:
    """Wiki-specific labels used by the section locator and extractors."""

    language: str
    language_headings: tuple[str, ...]
    meta_labels: frozenset[str]
    meaning_titles: tuple[str, ...]
    synonym_titles: tuple[str, ...]
    antonym_titles: tuple[str, ...]
    usage_example_titles: tuple[str, ...]
    example_titles: tuple[str, ...]
    # (template name prefix, part of speech) pairs
    pos_templates: tuple[tuple[str, str], ...] = ()
    example_templates: tuple[str, ...] = ()

    def part_of_speech_for(self, template_head: str) -> Optional[str]:
        """Part of speech named by an inflection template, if any."""
        for prefix, part_of_speech in self.pos_templates:
            if prefix == template_head:
                return part_of_speech
        return None


def _string_list(config: dict, *keys: str) -> tuple[str, ...]:
    """Walk nested keys and return a tuple of non-empty strings."""
    node = config
    for key in keys:
        node = node.get(key) if isinstance(node, dict) else None
        if node is None:
            raise ConfigError(f"Missing bindings key: {'.'.join(keys)}")
    if not isinstance(node, list):
        raise ConfigError(f"Bindings key {'.'.join(keys)} must be a list")
    return tuple(str(item).strip() for item in node if str(item).strip())


def bindings_from_dict(config: dict) -> Bindings:
    """Build Bindings from a parsed YAML mapping."""
    pos_templates = config.get("pos_templates") or {}
    if not isinstance(pos_templates, dict):
        raise ConfigError("Bindings key pos_templates must be a mapping")

    return Bindings(
        language=str(config.get("language", {}).get("name", DEFAULT_LANGUAGE)),
        language_headings=_string_list(config, "language", "headings"),
        meta_labels=frozenset(
            label.casefold() for label in _string_list(config, "meta_labels")
        ),
        meaning_titles=_string_list(config, "subsections", "meaning"),
        synonym_titles=_string_list(config, "subsections", "synonyms"),
        antonym_titles=_string_list(config, "subsections", "antonyms"),
        usage_example_titles=_string_list(config, "subsections", "usage_examples"),
        example_titles=_string_list(config, "subsections", "examples"),
        pos_templates=tuple((str(k).lower(), str(v)) for k, v in pos_templates.items()),
        example_templates=tuple(
            name.lower() for name in _string_list(config, "example_templates")
        ),
    )


@lru_cache(maxsize=None)
def load_bindings(path: Optional[Path] = None) -> Bindings:
    """Load and cache bindings from YAML (defaults to the packaged file)."""
    return bindings_from_dict(_load_yaml(path or BINDINGS_FILE))


# =============================================================================
# Runtime settings
# =============================================================================

@dataclass(frozen=True)
class Settings:
    """Runtime settings for one lookup process."""

    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = USER_AGENT
    language: str = DEFAULT_LANGUAGE
    debug: bool = False


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}")


def load_settings() -> Settings:
    """Read settings from the environment."""
    return Settings(
        api_url=os.environ.get("RUWIKT_API_URL") or DEFAULT_API_URL,
        timeout=_env_float("RUWIKT_TIMEOUT", DEFAULT_TIMEOUT),
        user_agent=os.environ.get("RUWIKT_USER_AGENT") or USER_AGENT,
        language=os.environ.get("RUWIKT_LANGUAGE") or DEFAULT_LANGUAGE,
        debug=bool(os.environ.get("DEBUG")),
    )
