"""Utility modules for the Logs Demo generator."""

from .logging_utils import logger, setup_logging, json_formatter, log_execution_time

__all__ = ['logger', 'setup_logging', 'json_formatter', 'log_execution_time']
