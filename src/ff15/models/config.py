"""
Configuration data models for the ff15 file finder.

This module defines the settings that shape the interactive session: the
optional starting directory, the progress spinner, terminal display options,
the file manager command and logging.
"""

from typing import Dict, List, Optional, Any
from pathlib import Path
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


DEFAULT_SPINNER_FRAMES = ["Searching |", "Searching /", "Searching -", "Searching \\"]


class LogLevel(Enum):
    """Supported logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class SearchConfig(BaseModel):
    """
    Configuration for search behavior.

    Attributes:
        default_root: Directory offered at startup before prompting
    """

    model_config = ConfigDict(extra='forbid')

    default_root: Optional[str] = Field(None, description="Directory offered at startup")

    @field_validator('default_root')
    @classmethod
    def validate_default_root(cls, v: Optional[str]) -> Optional[str]:
        """Expand user path; blank values disable the default."""
        if v is None or not v.strip():
            return None
        return str(Path(v.strip()).expanduser())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class SpinnerConfig(BaseModel):
    """
    Configuration for the progress spinner shown while walking.

    Attributes:
        enabled: Whether to animate the spinner at all
        interval_seconds: Delay between two frames
        frames: Frames drawn in rotation on a single line
    """

    model_config = ConfigDict(extra='forbid')

    enabled: bool = Field(True, description="Whether to show the spinner")
    interval_seconds: float = Field(0.5, gt=0, le=10, description="Delay between frames")
    frames: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SPINNER_FRAMES),
        description="Frames drawn in rotation"
    )

    @field_validator('frames')
    @classmethod
    def validate_frames(cls, v: List[str]) -> List[str]:
        """Require at least one single-line frame."""
        if not v:
            raise ValueError("Spinner needs at least one frame")
        for frame in v:
            if '\n' in frame or '\r' in frame:
                raise ValueError(f"Spinner frame must fit on one line: {frame!r}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class DisplayConfig(BaseModel):
    """
    Configuration for terminal output.

    Attributes:
        clear_screen: Whether to clear the screen before status messages
        use_color: Whether to color prompts and errors with ANSI codes
        show_raw_results: Whether to print the raw result list after each search
        exit_delay_seconds: Pause after the farewell message
    """

    model_config = ConfigDict(extra='forbid')

    clear_screen: bool = Field(True, description="Clear the screen before status messages")
    use_color: bool = Field(True, description="Color prompts and errors")
    show_raw_results: bool = Field(True, description="Print the raw result list")
    exit_delay_seconds: float = Field(1.0, ge=0, description="Pause after the farewell message")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class FileManagerConfig(BaseModel):
    """
    Configuration for revealing files in the host file manager.

    Attributes:
        command: Argument list overriding the platform default. ``{path}`` is
            replaced by the file path and ``{folder}`` by its directory.
    """

    model_config = ConfigDict(extra='forbid')

    command: Optional[List[str]] = Field(None, description="Custom file manager command")

    @field_validator('command')
    @classmethod
    def validate_command(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        """Require a program name and at least one placeholder."""
        if v is None:
            return v
        if not v or not v[0].strip():
            raise ValueError("File manager command cannot be empty")
        if not any('{path}' in arg or '{folder}' in arg for arg in v):
            raise ValueError("File manager command must contain {path} or {folder}")
        return v

    def has_custom_command(self) -> bool:
        """Check if a custom command overrides the platform default."""
        return self.command is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class LoggingConfig(BaseModel):
    """
    Configuration for diagnostic logging.

    Attributes:
        level: Minimum level of records to emit
        file: Log file path; records go to stderr when unset
        format: Format string for log records
    """

    model_config = ConfigDict(extra='forbid')

    level: LogLevel = Field(LogLevel.WARNING, description="Minimum log level")
    file: Optional[str] = Field(None, description="Log file path")
    format: str = Field("%(asctime)s - %(name)s - %(levelname)s - %(message)s", description="Log record format")

    @field_validator('level', mode='before')
    @classmethod
    def validate_level(cls, v) -> LogLevel:
        """Validate and convert level to enum."""
        if isinstance(v, str):
            try:
                return LogLevel(v.upper())
            except ValueError:
                raise ValueError(f"Invalid log level: {v}")
        return v

    @field_validator('file')
    @classmethod
    def validate_file(cls, v: Optional[str]) -> Optional[str]:
        """Expand user path."""
        if v is None or not v.strip():
            return None
        return str(Path(v).expanduser())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        data = self.model_dump()
        data['level'] = self.level.value
        return data


class FinderConfig(BaseModel):
    """
    Main configuration class for the ff15 file finder.

    Every section has defaults, so an empty configuration reproduces the
    plain interactive behavior.

    Attributes:
        search: Search behavior
        spinner: Progress spinner settings
        display: Terminal output settings
        file_manager: File manager integration
        logging: Diagnostic logging
    """

    model_config = ConfigDict(extra='forbid')

    search: SearchConfig = Field(default_factory=SearchConfig, description="Search behavior")
    spinner: SpinnerConfig = Field(default_factory=SpinnerConfig, description="Progress spinner settings")
    display: DisplayConfig = Field(default_factory=DisplayConfig, description="Terminal output settings")
    file_manager: FileManagerConfig = Field(default_factory=FileManagerConfig, description="File manager integration")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Diagnostic logging")

    def validate_configuration(self) -> List[str]:
        """Validate the complete configuration and return any warnings."""
        warnings = []

        if self.search.default_root and not Path(self.search.default_root).exists():
            warnings.append(f"Default root does not exist: {self.search.default_root}")

        if self.logging.file:
            log_dir = Path(self.logging.file).parent
            if not log_dir.exists():
                warnings.append(f"Log directory does not exist: {log_dir}")

        if self.spinner.enabled and self.spinner.interval_seconds < 0.05:
            warnings.append("Very short spinner interval may slow down the search")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'search': self.search.to_dict(),
            'spinner': self.spinner.to_dict(),
            'display': self.display.to_dict(),
            'file_manager': self.file_manager.to_dict(),
            'logging': self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FinderConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Default root: {self.search.default_root or 'none'}"]
        parts.append(f"Spinner: {'on' if self.spinner.enabled else 'off'}")
        parts.append(f"Color: {'on' if self.display.use_color else 'off'}")
        parts.append(f"File manager: {'custom' if self.file_manager.has_custom_command() else 'platform default'}")
        parts.append(f"Log level: {self.logging.level.value}")

        return " | ".join(parts)


def validate_config_dict(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate a configuration dictionary using Pydantic.

    Args:
        config_data: Dictionary containing configuration data

    Returns:
        Validated and normalized configuration dictionary

    Raises:
        ValueError: If configuration is invalid
    """
    try:
        return FinderConfig.model_validate(config_data).to_dict()
    except ValidationError as e:
        raise ValueError(f"Configuration validation failed: {e}") from e
