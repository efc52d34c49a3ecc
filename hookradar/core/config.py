# hookradar/core/config.py
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from hookradar.core.constants import (
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    ENV_PREFIX,
    LOG_LEVELS,
    SEVERITY_LEVELS,
    LogFormat,
)
from hookradar.core.exceptions import ConfigurationError


def get_default_config_dir() -> Path:
    """Return ~/.hook-radar, or a relative directory when HOME is unknown"""
    try:
        return Path.home() / CONFIG_DIR_NAME
    except RuntimeError:
        return Path(CONFIG_DIR_NAME)


def get_default_config_path() -> Path:
    return get_default_config_dir() / CONFIG_FILE_NAME


def find_config_file() -> Optional[Path]:
    """First existing config file: ~/.hook-radar/config.yaml, then ./config.yaml"""
    for candidate in (get_default_config_path(), Path(CONFIG_FILE_NAME)):
        if candidate.is_file():
            return candidate
    return None


def _env_files() -> Tuple[Path, ...]:
    # Later files win, so .env.local overrides .env
    config_dir = get_default_config_dir()
    return (
        config_dir / ".env",
        Path(".env"),
        config_dir / ".env.local",
        Path(".env.local"),
    )


def _check_severity(value: Optional[str]) -> Optional[str]:
    if value is None or value == "":
        return None
    value = value.lower()
    if value not in SEVERITY_LEVELS:
        raise ValueError(
            f"unknown severity {value!r}; expected one of {sorted(SEVERITY_LEVELS)}"
        )
    return value


class VaultRadarSettings(BaseModel):
    command: str = "vault-radar"
    scan_command: str = "scan file"
    timeout_seconds: int = 30
    extra_args: List[str] = Field(default_factory=lambda: ["--disable-ui"])


class LoggingSettings(BaseModel):
    level: str = "info"
    format: LogFormat = LogFormat.JSON
    log_file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.lower()
        if v not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return v


class DecisionSettings(BaseModel):
    block_on_findings: bool = True
    severity_threshold: str = "high"
    # Scanner infrastructure failures allow the action unless this is off
    fail_open: bool = True

    @field_validator("severity_threshold")
    @classmethod
    def validate_threshold(cls, v: str) -> str:
        checked = _check_severity(v)
        if checked is None:
            raise ValueError("severity_threshold cannot be empty")
        return checked


class TriggerSettings(BaseModel):
    on_block: bool = False
    on_findings: bool = False
    severity_threshold: Optional[str] = None
    finding_types: List[str] = Field(default_factory=list)

    @field_validator("severity_threshold")
    @classmethod
    def validate_threshold(cls, v: Optional[str]) -> Optional[str]:
        return _check_severity(v)


class StrategySettings(BaseModel):
    type: str
    config: Dict[str, Any] = Field(default_factory=dict)


class ProtocolSettings(BaseModel):
    name: str
    triggers: TriggerSettings = Field(default_factory=TriggerSettings)
    strategies: List[StrategySettings] = Field(default_factory=list)


class RemediationSettings(BaseModel):
    enabled: bool = False
    timeout_seconds: float = 10
    protocols: List[ProtocolSettings] = Field(default_factory=list)


class Settings(BaseSettings):
    """
    hook-radar configuration.

    Precedence, highest first: constructor overrides (CLI flags),
    HOOK_RADAR_* environment variables, .env files, the YAML config file,
    then the defaults below. Nested keys use a double underscore in the
    environment, e.g. HOOK_RADAR_DECISION__SEVERITY_THRESHOLD=critical.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
        env_file=_env_files(),
        extra="ignore",
    )

    framework: str = "claude"
    vault_radar: VaultRadarSettings = Field(default_factory=VaultRadarSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    decision: DecisionSettings = Field(default_factory=DecisionSettings)
    remediation: RemediationSettings = Field(default_factory=RemediationSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
        )


def load_settings(config_file: Optional[str] = None, **overrides: Any) -> Settings:
    """
    Build Settings from the YAML file, .env files, environment and overrides.

    An explicitly requested config file must exist. Without one, the default
    locations are searched and a missing file just means defaults apply.
    """
    if config_file:
        path: Optional[Path] = Path(config_file).expanduser()
        if not path.is_file():
            raise ConfigurationError(f"config file not found: {path}")
    else:
        path = find_config_file()

    class FileSettings(Settings):
        model_config = SettingsConfigDict(yaml_file=path)

    try:
        return FileSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(f"invalid configuration; {e}") from e
