"""
Configuration for the Stack Parking Garage

Values come from defaults, then STACKPARK_* environment variables, then
explicit overrides (command-line flags).
"""

from typing import Any, Dict, Mapping, Optional
import logging
import os

from pydantic import BaseModel, Field, field_validator


ENV_PREFIX = "STACKPARK_"


class GarageConfig(BaseModel):
    """Runtime settings for a garage instance"""
    capacity: int = Field(default=10, gt=0, description="Maximum number of parked vehicles")
    log_level: str = Field(default="INFO", description="Logging level name")
    log_dir: Optional[str] = Field(default=None, description="Directory for the log file")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelName(self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> 'GarageConfig':
        """Build a config from STACKPARK_* variables; non-None overrides win"""
        environ = os.environ if environ is None else environ
        values: Dict[str, Any] = {}
        for field_name in cls.model_fields:
            key = f"{ENV_PREFIX}{field_name.upper()}"
            if key in environ:
                values[field_name] = environ[key]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
