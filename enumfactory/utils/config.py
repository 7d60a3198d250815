"""
Configuration management for enumfactory.
Supports YAML configuration files with generation and codegen settings.
"""

import yaml
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from pathlib import Path

from ..synthesizer import DUPLICATE_VALUE_POLICIES, LABEL_FORMATS


LANGUAGES = ("c", "python")


@dataclass
class GenerationConfig:
    """Configuration for enumeration and table generation."""
    duplicate_values: str = "reject"  # reject | last_wins
    label_format: str = "identity"    # identity | lower | title | capitalize
    warn_negative_values: bool = True


@dataclass
class CodegenConfig:
    """Configuration for source code emitters."""
    language: str = "c"               # c | python
    header_prefix: str = ""
    output_dir: str = "generated"


@dataclass
class Config:
    """Main configuration class for enumfactory."""

    generation: GenerationConfig = field(default_factory=GenerationConfig)
    codegen: CodegenConfig = field(default_factory=CodegenConfig)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def validate(self) -> None:
        """Reject unknown policy, format and language names."""
        if self.generation.duplicate_values not in DUPLICATE_VALUE_POLICIES:
            raise ValueError(
                f"Unknown duplicate_values policy: {self.generation.duplicate_values}. "
                f"Valid policies: {list(DUPLICATE_VALUE_POLICIES)}"
            )
        label_format = self.generation.label_format
        if not isinstance(label_format, str) or label_format not in LABEL_FORMATS:
            raise ValueError(
                f"Unknown label_format: {self.generation.label_format}. "
                f"Valid formats: {list(LABEL_FORMATS)}"
            )
        if self.codegen.language not in LANGUAGES:
            raise ValueError(
                f"Unknown language: {self.codegen.language}. Valid languages: {list(LANGUAGES)}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "generation": {
                "duplicate_values": self.generation.duplicate_values,
                "label_format": self.generation.label_format,
                "warn_negative_values": self.generation.warn_negative_values,
            },
            "codegen": {
                "language": self.codegen.language,
                "header_prefix": self.codegen.header_prefix,
                "output_dir": self.codegen.output_dir,
            },
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Config":
        """Create config from dictionary."""
        config = cls()
        data = data or {}

        # Top-level settings
        config.log_level = data.get("log_level", config.log_level)
        config.log_file = data.get("log_file", config.log_file)

        # Sub-configurations
        if "generation" in data:
            gen_data = data["generation"] or {}
            config.generation = GenerationConfig(
                duplicate_values=gen_data.get("duplicate_values", "reject"),
                label_format=gen_data.get("label_format", "identity"),
                warn_negative_values=gen_data.get("warn_negative_values", True),
            )

        if "codegen" in data:
            code_data = data["codegen"] or {}
            config.codegen = CodegenConfig(
                language=code_data.get("language", "c"),
                header_prefix=code_data.get("header_prefix", ""),
                output_dir=code_data.get("output_dir", "generated"),
            )

        config.validate()
        return config


def load_config(config_path: str) -> Config:
    """Load configuration from YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r') as f:
        data = yaml.safe_load(f)

    return Config.from_dict(data)


def save_config(config: Config, config_path: str) -> None:
    """Save configuration to YAML file."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
