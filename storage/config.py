"""
Settings
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from dotenv import load_dotenv

load_dotenv()


class StorageConfig(BaseSettings):
    """Local file store settings"""

    data_dir: str = Field(default="data/store", description="Directory holding the key files")
    catalog_key: str = Field(default="handball-files-index", description="Key of the file catalog")
    payload_prefix: str = Field(default="handball-file-", description="Prefix of per-file payload keys")

    class Config:
        env_prefix = "HANDBALL_"
        case_sensitive = False


class AutoSaveConfig(BaseSettings):
    """Debounced save settings"""

    delay_seconds: float = Field(default=0.5, description="Quiet window before a save (s)")

    class Config:
        env_prefix = "HANDBALL_AUTOSAVE_"
        case_sensitive = False


class LoggingConfig(BaseSettings):
    """Log output settings"""

    level: str = Field(default="INFO", description="Console log level")
    log_dir: str = Field(default="logs", description="Directory for daily log files")
    file_logging: bool = Field(default=False, description="Also write daily log files")

    class Config:
        env_prefix = "HANDBALL_LOG_"
        case_sensitive = False


# Global settings instances
storage_config = StorageConfig()
autosave_config = AutoSaveConfig()
logging_config = LoggingConfig()
