"""
Configuration module for the form builder.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


@dataclass
class FormBuilderConfig:
    """Configuration settings for the form builder."""

    # Storage settings
    data_dir: str = ".form_builder"
    schema_file: str = "form_schema.json"
    submissions_file: str = "form_submissions.json"

    # Export settings
    csv_delimiter: str = ","
    indent_json_output: int = 2

    # Field definition guard
    enforce_unique_names: bool = True

    # MCP Server settings
    mcp_transport: str = "stdio"  # stdio or sse
    mcp_port: int = 8080

    # Output settings
    log_level: str = "INFO"
    verbose_output: bool = False

    @classmethod
    def from_env(cls) -> "FormBuilderConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            data_dir=os.getenv("FORM_BUILDER_DATA_DIR", _defaults.data_dir),
            schema_file=os.getenv("FORM_BUILDER_SCHEMA_FILE", _defaults.schema_file),
            submissions_file=os.getenv("FORM_BUILDER_SUBMISSIONS_FILE", _defaults.submissions_file),
            csv_delimiter=os.getenv("FORM_BUILDER_CSV_DELIMITER", _defaults.csv_delimiter),
            indent_json_output=int(os.getenv("FORM_BUILDER_JSON_INDENT", str(_defaults.indent_json_output))),
            enforce_unique_names=_env_flag("FORM_BUILDER_ENFORCE_UNIQUE_NAMES", _defaults.enforce_unique_names),
            mcp_transport=os.getenv("MCP_TRANSPORT", _defaults.mcp_transport),
            mcp_port=int(os.getenv("MCP_PORT", str(_defaults.mcp_port))),
            log_level=os.getenv("FORM_BUILDER_LOG_LEVEL", _defaults.log_level).upper(),
            verbose_output=_env_flag("FORM_BUILDER_VERBOSE_OUTPUT", _defaults.verbose_output),
        )


config = FormBuilderConfig.from_env()


def get_config() -> FormBuilderConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormBuilderConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
