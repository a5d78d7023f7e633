"""
Config loader for Fingerspell.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional
import yaml

from .gestures import DEFAULT_RULES, SENTINEL, GestureClassifier, GestureRuleTable
from .pipeline import GesturePipeline
from .smoothing import SymbolDebouncer


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.7
    min_tracking_confidence: float = 0.5


@dataclass
class ClassifierConfig:
    sentinel: str = SENTINEL
    # Signature key ("01000") -> symbol
    rules: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_RULES))


@dataclass
class SmoothingConfig:
    enabled: bool = False
    window: int = 5       # Frames considered for the majority vote
    min_count: int = 3    # Votes needed before the shown symbol changes


@dataclass
class Config:
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def _classifier_config(data: Optional[dict]) -> ClassifierConfig:
    config = _dict_to_dataclass(ClassifierConfig, data)
    # Unquoted YAML keys like 01000 load as (octal) ints; they must be quoted
    for key in (config.rules or {}):
        if not isinstance(key, str):
            raise ValueError(f"Rule key {key!r} must be a quoted string such as '01000'")
    rules = {}
    for key, symbol in (config.rules or {}).items():
        # Plain ints are allowed for digit symbols such as 5; null and lists are not
        if isinstance(symbol, bool) or not isinstance(symbol, (str, int)):
            raise ValueError(f"Symbol for rule {key!r} must be a string, got {symbol!r}")
        rules[key] = str(symbol)
    config.rules = rules
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        classifier=_classifier_config(data.get('classifier')),
        smoothing=_dict_to_dataclass(SmoothingConfig, data.get('smoothing')),
    )


def build_classifier(config: Config) -> GestureClassifier:
    """Build a classifier from the configured rule table. Raises ValueError on bad rules."""
    table = GestureRuleTable(config.classifier.rules, sentinel=config.classifier.sentinel)
    return GestureClassifier(table, sentinel=config.classifier.sentinel)


def build_pipeline(config: Config) -> GesturePipeline:
    return GesturePipeline(build_classifier(config))


def build_debouncer(config: Config) -> Optional[SymbolDebouncer]:
    """Return a SymbolDebouncer when smoothing is enabled, else None."""
    if not config.smoothing.enabled:
        return None
    return SymbolDebouncer(
        window=config.smoothing.window,
        min_count=config.smoothing.min_count,
        sentinel=config.classifier.sentinel,
    )
