"""Configuration models for todo-cli."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DRIVE_FILE_SCOPE = "https://www.googleapis.com/auth/drive.file"


class StorageConfig(BaseModel):
    """Local task file configuration."""

    path: str = Field(default="todos.json")
    backup_corrupt: bool = Field(default=True)


class NetworkConfig(BaseModel):
    """Generic HTTP remote store configuration."""

    server_url: str = Field(default="http://localhost:8080")
    endpoint: str = Field(default="/api/todos")
    timeout: float = Field(default=30.0, gt=0)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if not v.startswith("/"):
            return f"/{v}"
        return v


class DriveConfig(BaseModel):
    """Google Drive backup configuration."""

    credentials_file: str = Field(default="credentials.json")
    token_file: str = Field(default="token.json")
    file_name: str = Field(default="todos-backup.json")
    scopes: list[str] = Field(default_factory=lambda: [DRIVE_FILE_SCOPE])


class UIConfig(BaseModel):
    """Display configuration."""

    date_format: str = Field(default="%Y-%m-%d %H:%M")
    due_soon_hours: int = Field(default=24, ge=0)


class AppConfig(BaseModel):
    """Main configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    drive: DriveConfig = Field(default_factory=DriveConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
