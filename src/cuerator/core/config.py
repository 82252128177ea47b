"""
Configuration management for the Cue-rator CLI
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class EDLConfig:
    """Configuration for EDL parsing and duration merging."""

    frame_rate: int = 25
    # Gap (in frames) that still counts as one continuous region
    merge_tolerance_frames: int = 1
    encoding: str = "utf-8"

    def validate(self) -> None:
        """Validate EDL configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {self.frame_rate}")
        if self.merge_tolerance_frames < 0:
            raise ValueError(
                "merge_tolerance_frames must not be negative, "
                f"got {self.merge_tolerance_frames}"
            )


@dataclass
class ReferenceConfig:
    """Configuration for the commissioned music reference database."""

    database_path: str = "Commissioned_Databases/MKR Composed_Database.txt"
    commissioned_prefix: str = "MKR"


@dataclass
class AIConfig:
    """Configuration for metadata enrichment."""

    openai_api_key: Optional[str] = None
    model: str = "gpt-4o-mini"
    enabled: bool = True


@dataclass
class ExportConfig:
    """Configuration for cue sheet export."""

    output_path: str = "music_cue_sheet.csv"
    music_usage: str = "Background"


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/cuerator/cuerator.log)
    )
    console_output: bool = False  # Also output to console (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    edl: EDLConfig = field(default_factory=EDLConfig)
    reference: ReferenceConfig = field(default_factory=ReferenceConfig)
    ai: AIConfig = field(default_factory=AIConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "cuerator"
    return Path.home() / ".config" / "cuerator"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            if config_path.exists():
                return config_path
            # Found project root but no config.toml there
            return None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/cuerator (or ~/.config/cuerator)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "cuerator"
    return Path.home() / ".local" / "share" / "cuerator"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Cue-rator Configuration

[edl]
# Timeline frame rate of the EDL exports
frame_rate = 25

# Clips separated by at most this many frames count as one region
merge_tolerance_frames = 1

# Text encoding of EDL files
encoding = "utf-8"

[reference]
# Commissioned music database (relative to the working directory)
database_path = "Commissioned_Databases/MKR Composed_Database.txt"

# Filename prefix of commissioned cues
commissioned_prefix = "MKR"

[ai]
# Enrich cues with title/composer/publisher metadata
enabled = true

# Model used for lookups
model = "gpt-4o-mini"

# OpenAI API key (OPENAI_API_KEY environment variable takes precedence)
# openai_api_key = "your-api-key-here"

[export]
# Default CSV output path
output_path = "music_cue_sheet.csv"

# Value of the Music Usage column
music_usage = "Background"

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/cuerator/cuerator.log)
# log_file = "/path/to/custom/cuerator.log"

# Also output logs to console (useful for debugging)
console_output = false
""".strip()


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Args:
        config_path: Explicit config file (skips the lookup order)

    Environment variables override TOML values:
    - OPENAI_API_KEY
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    explicit = config_path is not None
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        if explicit:
            print(f"Configuration file not found: {config_path}")
            print("Using default configuration.")
            return _apply_env_overrides(Config())
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        print(f"Created default configuration at: {config_path}")
        return _apply_env_overrides(Config())

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        print(f"Error loading configuration from {config_path}: {e}")
        print("Using default configuration.")
        return _apply_env_overrides(Config())

    config = Config()

    if "edl" in toml_data:
        edl_data = toml_data["edl"]
        config.edl = EDLConfig(
            frame_rate=edl_data.get("frame_rate", config.edl.frame_rate),
            merge_tolerance_frames=edl_data.get(
                "merge_tolerance_frames", config.edl.merge_tolerance_frames
            ),
            encoding=edl_data.get("encoding", config.edl.encoding),
        )
        try:
            config.edl.validate()
        except ValueError as e:
            print(f"Warning: Invalid EDL configuration: {e}")
            print("Using default EDL configuration.")
            config.edl = EDLConfig()

    if "reference" in toml_data:
        reference_data = toml_data["reference"]
        config.reference = ReferenceConfig(
            database_path=reference_data.get(
                "database_path", config.reference.database_path
            ),
            commissioned_prefix=reference_data.get(
                "commissioned_prefix", config.reference.commissioned_prefix
            ),
        )

    if "ai" in toml_data:
        ai_data = toml_data["ai"]
        config.ai = AIConfig(
            openai_api_key=ai_data.get("openai_api_key"),
            model=ai_data.get("model", config.ai.model),
            enabled=ai_data.get("enabled", config.ai.enabled),
        )

    if "export" in toml_data:
        export_data = toml_data["export"]
        config.export = ExportConfig(
            output_path=export_data.get("output_path", config.export.output_path),
            music_usage=export_data.get("music_usage", config.export.music_usage),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    return _apply_env_overrides(config)


def _apply_env_overrides(config: Config) -> Config:
    """Override secrets with environment variables if present."""
    openai_api_key = os.environ.get("OPENAI_API_KEY")
    if openai_api_key:
        config.ai.openai_api_key = openai_api_key
    return config

