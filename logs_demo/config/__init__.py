"""Configuration module for the Logs Demo generator."""

from .settings import settings, Settings, GeneratorConfig, LoggingConfig, KafkaConfig

__all__ = ['settings', 'Settings', 'GeneratorConfig', 'LoggingConfig', 'KafkaConfig']
