# src/config/settings.py
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings
from pathlib import Path

# Get project root (2 levels up from this file)
PROJECT_ROOT = Path(__file__).parent.parent.parent

class Settings(BaseSettings):
    # SQL Server
    sql_server_host: str
    sql_server_port: int = 1433
    sql_server_database: str
    sql_server_username: str
    sql_server_password: str

    # Analytics defaults
    analytics_smoothing_factor: float = Field(0.6, gt=0.0, le=1.0)
    analytics_n_clusters: int = Field(3, ge=1)
    analytics_top_n: int = Field(10, ge=0)
    analytics_kmeans_max_iter: int = Field(300, ge=1)
    analytics_random_state: Optional[int] = None
    analytics_keep_timestamp_collisions: bool = False

    class Config:
        env_file = str(PROJECT_ROOT / ".env")
        case_sensitive = False
