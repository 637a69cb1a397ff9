"""
Configuration settings for the Logs Demo generator.
Loads environment variables and provides centralized configuration.
"""

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == '':
        return None
    return int(value)


@dataclass
class GeneratorConfig:
    """Timer and randomness configuration."""
    interval_seconds: float = 5.0
    seed: Optional[int] = None
    max_ticks: Optional[int] = None
    service_name: str = "datadog-logs-demo"

    def __post_init__(self):
        if self.interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {self.interval_seconds}")
        if self.max_ticks is not None and self.max_ticks < 0:
            raise ValueError(f"max_ticks must not be negative, got {self.max_ticks}")


@dataclass
class LoggingConfig:
    """Log output configuration."""
    level: str = "INFO"
    format: str = "json"
    log_to_file: bool = False
    logs_path: Path = Path("logs")

    def __post_init__(self):
        self.level = self.level.upper()
        self.format = self.format.lower()
        if self.format not in ('json', 'text'):
            raise ValueError(f"Unsupported log format: {self.format}")

    @property
    def json_output(self) -> bool:
        """Whether records are rendered as flat JSON lines."""
        return self.format == 'json'


@dataclass
class KafkaConfig:
    """Kafka configuration."""
    bootstrap_servers: str
    topic: str = "logs-demo.events"
    enabled: bool = False

    @property
    def bootstrap_servers_list(self):
        """Return bootstrap servers as list."""
        return self.bootstrap_servers.split(',')


class Settings:
    """Central settings class that loads all configurations."""

    def __init__(self):
        self.generator = GeneratorConfig(
            interval_seconds=float(os.getenv('LOGS_DEMO_INTERVAL_SECONDS', 5)),
            seed=_env_optional_int('LOGS_DEMO_SEED'),
            max_ticks=_env_optional_int('LOGS_DEMO_MAX_TICKS'),
            service_name=os.getenv('LOGS_DEMO_SERVICE', 'datadog-logs-demo')
        )

        self.logging = LoggingConfig(
            level=os.getenv('LOG_LEVEL', 'INFO'),
            format=os.getenv('LOG_FORMAT', 'json'),
            log_to_file=_env_bool('LOG_TO_FILE'),
            logs_path=Path(os.getenv('LOGS_PATH', 'logs'))
        )

        self.kafka = KafkaConfig(
            bootstrap_servers=os.getenv('KAFKA_BOOTSTRAP_SERVERS', 'localhost:29092'),
            topic=os.getenv('KAFKA_TOPIC', 'logs-demo.events'),
            enabled=_env_bool('KAFKA_ENABLED')
        )


# Global settings instance
settings = Settings()
