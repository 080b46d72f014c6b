"""
FraudGraph configuration management using pydantic-settings.
"""

import warnings
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SUPPORTED_BACKENDS = ("networkx", "neo4j")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production",
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Graph store
    graph_backend: str = Field(
        default="networkx",
        description="Graph backend: networkx (in-memory) or neo4j",
    )
    neo4j_uri: str = Field(
        default="neo4j://localhost:7687",
        description="Neo4j connection URI",
    )
    neo4j_user: str = Field(default="neo4j", description="Neo4j user")
    neo4j_password: str = Field(default="password", description="Neo4j password")
    neo4j_database: str = Field(default="neo4j", description="Neo4j database name")
    neo4j_max_connection_pool_size: int = Field(
        default=50, description="Maximum pooled connections to Neo4j"
    )
    neo4j_connection_timeout: float = Field(
        default=30.0, description="Connection timeout in seconds"
    )

    # Startup schema setup
    schema_setup_max_attempts: int = Field(
        default=5, ge=1, description="Attempts to install uniqueness constraints"
    )
    schema_setup_backoff_base: float = Field(
        default=1.0, ge=0, description="Base delay in seconds for exponential backoff"
    )

    # Analytics
    default_max_depth: int = Field(
        default=5, ge=1, description="Default hop bound for shortest path queries"
    )
    assembly_concurrency: Optional[int] = Field(
        default=None,
        description="Concurrent relationship fetches during graph assembly "
        "(defaults to the connection pool size)",
    )

    # Export
    export_dir: Path = Field(
        default=Path("./exports"),
        description="Directory for saved graph exports",
    )

    # Security - CORS
    cors_origins: list[str] = Field(
        default=["http://localhost:5173"],
        description="Allowed CORS origins",
    )

    # Security - Rate Limiting
    rate_limit_requests: int = Field(
        default=100, description="Rate limit requests per window"
    )
    rate_limit_window_seconds: int = Field(
        default=60, description="Rate limit window in seconds"
    )

    @field_validator("graph_backend")
    @classmethod
    def validate_graph_backend(cls, v: str) -> str:
        """Only known backends may be configured."""
        v = v.lower()
        if v not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"GRAPH_BACKEND must be one of {', '.join(SUPPORTED_BACKENDS)}"
            )
        return v

    @field_validator("neo4j_max_connection_pool_size")
    @classmethod
    def validate_pool_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("NEO4J_MAX_CONNECTION_POOL_SIZE must be positive")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Ensure critical settings are configured in production."""
        if self.environment == "production":
            if self.debug:
                raise ValueError("DEBUG must be False in production")
            if self.graph_backend == "networkx":
                warnings.warn(
                    "GRAPH_BACKEND is the in-memory networkx store in production",
                    UserWarning,
                    stacklevel=2,
                )
            if self.neo4j_password == "password":
                warnings.warn(
                    "NEO4J_PASSWORD is the default value in production",
                    UserWarning,
                    stacklevel=2,
                )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def effective_assembly_concurrency(self) -> int:
        """Fan-out width for graph assembly, bounded by the pool size."""
        if self.assembly_concurrency and self.assembly_concurrency > 0:
            return min(self.assembly_concurrency, self.neo4j_max_connection_pool_size)
        return self.neo4j_max_connection_pool_size


# Global settings instance
settings = Settings()
