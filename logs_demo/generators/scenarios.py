"""
Scenario generators.

Each generator builds one or more records for a single business area and
hands them to a sink. Generators are stateless; everything random comes from
the FieldRandomizer passed in. The set of keys for a given ``event_type`` is
fixed, only the values vary between calls.
"""

import time
from dataclasses import dataclass
from typing import Callable, Tuple

from logs_demo.generators.randomizers import (
    FieldRandomizer,
    STACK_TRACE,
    error_code,
    error_message,
    fraud_status,
    security_result,
)
from logs_demo.sinks import LogSink

FRAUD_ALERT_THRESHOLD = 80
CRITICAL_ERROR_THRESHOLD = 0.85
RATE_LIMIT_THRESHOLD = 0.70
FAILED_LOGIN_ALERT_THRESHOLD = 0.7
RATE_LIMIT = 1000


def generate_business_kpi_logs(sink: LogSink, rnd: FieldRandomizer) -> None:
    """Revenue and order metrics for KPI dashboards."""
    revenue = rnd.real(1000)
    order_count = rnd.integer(50, offset=1)
    avg_order_value = revenue / order_count

    sink.info("Business KPI metrics generated", {
        'event_type': 'business_kpi',
        'metric_name': 'revenue',
        'revenue': revenue,
        'order_count': order_count,
        'avg_order_value': avg_order_value,
        'currency': 'USD',
        'region': rnd.region(),
        'business_unit': 'ecommerce',
        'payment_method': rnd.payment_method(),
        'conversion_rate': rnd.real(10),
        'customer_segment': rnd.customer_segment(),
    })

    # Per-order record for count/sum/avg log-based metrics
    sink.info("Order completed successfully", {
        'event_type': 'order_completed',
        'order_value': avg_order_value,
        'order_id': rnd.order_id(),
        'customer_type': rnd.customer_segment(),
        'product_count': rnd.integer(10, offset=1),
        'discount': rnd.real(50),
    })


def generate_transaction_logs(sink: LogSink, rnd: FieldRandomizer) -> None:
    """One transaction; failed transactions are logged as warnings."""
    transaction_value = rnd.real(500)
    status = rnd.transaction_status()
    duration = rnd.integer(3000, offset=100)

    fields = {
        'event_type': 'transaction',
        'transaction_id': rnd.transaction_id(),
        'transaction_value': transaction_value,
        'transaction_status': status,
        'duration_ms': duration,
        'payment_gateway': rnd.payment_gateway(),
        'currency': 'USD',
        'country': rnd.country(),
        'risk_score': rnd.real(100),
        'merchant_id': rnd.merchant_id(),
    }

    if status == 'failed':
        sink.warning("Transaction failed", fields)
    elif status == 'pending':
        sink.info("Transaction pending", fields)
    else:
        sink.info("Transaction completed successfully", fields)


def generate_error_logs(sink: LogSink, rnd: FieldRandomizer) -> None:
    """
    Error-rate traffic for alert rules.

    A single uniform draw picks the branch: above 0.85 a critical error,
    above 0.70 a rate-limit warning, otherwise a normal-operation record.
    """
    error_type = rnd.error_type()
    draw = rnd.real()

    if draw > CRITICAL_ERROR_THRESHOLD:
        sink.error("Critical error occurred", {
            'event_type': 'error',
            'error_type': error_type,
            'error_message': error_message(error_type),
            'error_code': error_code(error_type),
            'service': 'checkout-service',
            'endpoint': rnd.endpoint(),
            'user_id': rnd.user_id(),
            'session_id': rnd.session_id(),
            'stack_trace': STACK_TRACE,
            'severity': 'high',
            'retry_count': rnd.integer(3),
        })
    elif draw > RATE_LIMIT_THRESHOLD:
        sink.warning("Rate limit threshold approaching", {
            'event_type': 'warning',
            'warning_type': 'rate_limit_approaching',
            'current_rate': rnd.integer(900, offset=100),
            'limit': RATE_LIMIT,
            'service': 'api-gateway',
            'endpoint': rnd.endpoint(),
        })
    else:
        sink.info("Service operating normally", {
            'event_type': 'info',
            'message': 'Normal operation',
            'service': 'checkout-service',
        })


def generate_performance_logs(sink: LogSink, rnd: FieldRandomizer) -> None:
    """Latency, throughput and resource usage, plus an API timing measure."""
    latency = rnd.integer(1000, offset=50)
    throughput = rnd.integer(1000, offset=100)

    sink.info("Performance metrics collected", {
        'event_type': 'performance',
        'metric_type': 'latency',
        'latency_ms': latency,
        'throughput_rps': throughput,
        'cpu_usage': rnd.real(100),
        'memory_usage_mb': rnd.integer(2048),
        'db_query_time': rnd.integer(500),
        'cache_hit_rate': rnd.real(100),
        'service': 'api-service',
        'endpoint': rnd.endpoint(),
        'method': rnd.http_method(),
    })

    sink.info("API response time measured", {
        'event_type': 'measure',
        'measure_name': 'api_response_time',
        'measure_value': float(latency),
        'measure_unit': 'milliseconds',
        'endpoint': rnd.endpoint(),
        'status_code': rnd.status_code(),
    })


def generate_user_activity_logs(sink: LogSink, rnd: FieldRandomizer) -> None:
    sink.info("User activity recorded", {
        'event_type': 'user_activity',
        'activity_type': rnd.user_activity(),
        'user_id': rnd.user_id(),
        'session_id': rnd.session_id(),
        'page': rnd.page(),
        'duration_sec': rnd.integer(300),
        'device_type': rnd.device_type(),
        'browser': rnd.browser(),
        'country': rnd.country(),
        'referrer': rnd.referrer(),
        'ab_test_variant': rnd.ab_test_variant(),
    })


def generate_api_request_logs(sink: LogSink, rnd: FieldRandomizer) -> None:
    """One API request; 5xx is logged as error and 4xx as warning."""
    status_code = rnd.status_code()
    duration = rnd.integer(2000, offset=50)

    fields = {
        'event_type': 'api_request',
        'method': rnd.http_method(),
        'endpoint': rnd.endpoint(),
        'status_code': status_code,
        'duration_ms': duration,
        'request_size': rnd.integer(10000),
        'response_size': rnd.integer(50000),
        'user_agent': rnd.user_agent(),
        'ip_address': rnd.ip_address(),
        'api_key': rnd.api_key(),
        'rate_limit_remaining': rnd.integer(1000),
    }

    if status_code >= 500:
        sink.error("API request failed with server error", fields)
    elif status_code >= 400:
        sink.warning("API request failed with client error", fields)
    else:
        sink.info("API request completed successfully", fields)


def generate_payment_processing_logs(sink: LogSink, rnd: FieldRandomizer) -> None:
    """A processed payment, followed by a fraud alert when the score is above 80."""
    amount = rnd.real(1000)
    fraud_score = rnd.fraud_score()

    sink.info("Payment processed", {
        'event_type': 'payment_processing',
        'payment_id': rnd.payment_id(),
        'amount': amount,
        'currency': 'USD',
        'payment_method': rnd.payment_method(),
        'card_type': rnd.card_type(),
        'fraud_score': fraud_score,
        'fraud_status': fraud_status(fraud_score),
        '3ds_verified': rnd.chance(),
        'country': rnd.country(),
        'merchant_id': rnd.merchant_id(),
        'processor': rnd.payment_gateway(),
        'retry_attempt': rnd.integer(3),
    })

    if fraud_score > FRAUD_ALERT_THRESHOLD:
        sink.warning("High fraud score detected - payment blocked", {
            'event_type': 'fraud_alert',
            'payment_id': rnd.payment_id(),
            'fraud_score': fraud_score,
            'alert_level': 'high',
            'action_taken': 'blocked',
        })


def generate_security_event_logs(sink: LogSink, rnd: FieldRandomizer) -> None:
    """Audit-trail record; some login failures also raise a brute-force alert."""
    event_type = rnd.security_event()

    sink.info("Security event logged", {
        'event_type': 'security_event',
        'security_event': event_type,
        'user_id': rnd.user_id(),
        'ip_address': rnd.ip_address(),
        'user_agent': rnd.user_agent(),
        'country': rnd.country(),
        'timestamp': int(time.time()),
        'session_id': rnd.session_id(),
        'result': security_result(event_type),
    })

    if event_type == 'login_failure' and rnd.real() > FAILED_LOGIN_ALERT_THRESHOLD:
        sink.warning("Multiple failed login attempts detected", {
            'event_type': 'security_alert',
            'alert_type': 'multiple_failed_logins',
            'user_id': rnd.user_id(),
            'attempt_count': rnd.integer(10, offset=5),
            'ip_address': rnd.ip_address(),
            'time_window_min': 5,
        })


@dataclass(frozen=True)
class Scenario:
    """A named scenario generator."""
    name: str
    generate: Callable[[LogSink, FieldRandomizer], None]

    def __call__(self, sink: LogSink, rnd: FieldRandomizer) -> None:
        self.generate(sink, rnd)


# Round-robin order used by the driver
SCENARIOS: Tuple[Scenario, ...] = (
    Scenario('business_kpi', generate_business_kpi_logs),
    Scenario('transaction', generate_transaction_logs),
    Scenario('error', generate_error_logs),
    Scenario('performance', generate_performance_logs),
    Scenario('user_activity', generate_user_activity_logs),
    Scenario('api_request', generate_api_request_logs),
    Scenario('payment_processing', generate_payment_processing_logs),
    Scenario('security_event', generate_security_event_logs),
)


def get_scenario(name: str) -> Scenario:
    for scenario in SCENARIOS:
        if scenario.name == name:
            return scenario
    raise ValueError(f"Scenario with name '{name}' not found.")
