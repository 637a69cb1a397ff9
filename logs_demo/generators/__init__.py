"""Randomizers, scenario generators and the round-robin driver."""

from .randomizers import FieldRandomizer, fraud_status, security_result, error_message, error_code
from .scenarios import (
    Scenario,
    SCENARIOS,
    get_scenario,
    generate_business_kpi_logs,
    generate_transaction_logs,
    generate_error_logs,
    generate_performance_logs,
    generate_user_activity_logs,
    generate_api_request_logs,
    generate_payment_processing_logs,
    generate_security_event_logs
)
from .driver import ScenarioDriver

__all__ = [
    # Randomizers
    'FieldRandomizer',
    'fraud_status',
    'security_result',
    'error_message',
    'error_code',

    # Scenarios
    'Scenario',
    'SCENARIOS',
    'get_scenario',
    'generate_business_kpi_logs',
    'generate_transaction_logs',
    'generate_error_logs',
    'generate_performance_logs',
    'generate_user_activity_logs',
    'generate_api_request_logs',
    'generate_payment_processing_logs',
    'generate_security_event_logs',

    # Driver
    'ScenarioDriver'
]
