"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file:
    ApplicationSchema   → config/settings/application.yaml
    LoggingSchema       → config/settings/logging.yaml
    EditorSchema        → config/settings/editor.yaml
    SummaryAgentSchema  → config/agents/summary_agent.yaml
"""

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ServerSchema(_StrictBase):
    host: str
    port: int


class CorsSchema(_StrictBase):
    origins: list[str]


class TimeoutsSchema(_StrictBase):
    external_api: int


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    api_prefix: str
    server: ServerSchema
    cors: CorsSchema
    timeouts: TimeoutsSchema


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema


# =============================================================================
# editor.yaml
# =============================================================================


class StoreSchema(_StrictBase):
    path: str


class TrashSchema(_StrictBase):
    retention_days: float = Field(gt=0)
    purge_interval_seconds: float = Field(gt=0)


class SessionSchema(_StrictBase):
    save_ack_seconds: float = Field(ge=0)


class ExportSchema(_StrictBase):
    directory: str
    summary_timeout_seconds: float = Field(gt=0)
    fallback_summary: str


class SummaryServiceSchema(_StrictBase):
    base_url: str
    path: str


class EditorSchema(_StrictBase):
    store: StoreSchema
    trash: TrashSchema
    session: SessionSchema
    export: ExportSchema
    summary_service: SummaryServiceSchema


# =============================================================================
# config/agents/summary_agent.yaml
# =============================================================================


class SummaryAgentSchema(_StrictBase):
    agent_name: str
    description: str
    enabled: bool
    model: str
    max_tokens: int = Field(gt=0)
    temperature: float = Field(ge=0, le=2)
    max_summary_chars: int = Field(gt=0)
