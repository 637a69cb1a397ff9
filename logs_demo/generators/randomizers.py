"""
Field randomizers for synthetic log records.

Every value a scenario puts on a record comes from here: uniform picks from
small literal tables, weighted picks from cumulative-weight tables, numeric
draws and prefixed identifiers. All draws go through one ``random.Random``
owned by the ``FieldRandomizer`` so a seeded instance replays exactly.
"""

import random
import string
from typing import Any, Dict, Optional, Sequence, Tuple

REGIONS = ('us-east-1', 'us-west-2', 'eu-west-1', 'ap-southeast-1')
PAYMENT_METHODS = ('credit_card', 'debit_card', 'paypal', 'apple_pay', 'google_pay', 'bank_transfer')
CUSTOMER_SEGMENTS = ('new', 'returning', 'vip', 'enterprise', 'small_business')
PAYMENT_GATEWAYS = ('stripe', 'paypal', 'square', 'braintree', 'adyen')
COUNTRIES = ('US', 'UK', 'DE', 'FR', 'JP', 'AU', 'CA', 'SG')
ENDPOINTS = ('/api/v1/users', '/api/v1/orders', '/api/v1/products', '/api/v1/checkout', '/api/v1/payments')
HTTP_METHODS = ('GET', 'POST', 'PUT', 'DELETE', 'PATCH')
PAGES = ('home', 'products', 'cart', 'checkout', 'account', 'search')
DEVICE_TYPES = ('desktop', 'mobile', 'tablet')
BROWSERS = ('Chrome', 'Firefox', 'Safari', 'Edge')
REFERRERS = ('google', 'facebook', 'twitter', 'direct', 'email')
AB_TEST_VARIANTS = ('control', 'variant_a', 'variant_b')
USER_AGENTS = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/91.0',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) Safari/14.1',
    'Mozilla/5.0 (X11; Linux x86_64) Firefox/89.0',
)
CARD_TYPES = ('visa', 'mastercard', 'amex', 'discover')
ERROR_TYPES = ('validation_error', 'database_error', 'api_error', 'timeout_error', 'authentication_error')
USER_ACTIVITIES = ('page_view', 'button_click', 'search', 'add_to_cart', 'checkout', 'signup', 'login')
SECURITY_EVENTS = ('login_success', 'login_failure', 'password_change', 'permission_change', 'access_denied')
IP_SEGMENTS = ('192', '10', '172', '203', '8')

# (value, weight) pairs; weights sum to 100
TRANSACTION_STATUS_WEIGHTS = (('success', 80), ('failed', 10), ('pending', 10))
STATUS_CODE_WEIGHTS = (
    (200, 70), (201, 10), (204, 5),
    (400, 5), (401, 2), (403, 2), (404, 2),
    (500, 2), (502, 1), (503, 1),
)

ID_CHARSET = string.ascii_uppercase + string.digits

# kind -> (prefix, length)
IDENTIFIER_FORMATS: Dict[str, Tuple[str, int]] = {
    'order': ('ORD', 10),
    'transaction': ('TXN', 12),
    'merchant': ('MER', 8),
    'user': ('USR', 8),
    'session': ('SES', 16),
    'payment': ('PAY', 12),
    'api_key': ('API', 20),
}

ERROR_MESSAGES = {
    'validation_error': 'Invalid input parameters',
    'database_error': 'Database connection timeout',
    'api_error': 'External API request failed',
    'timeout_error': 'Request timeout exceeded',
    'authentication_error': 'Invalid credentials',
}

ERROR_CODES = {
    'validation_error': 'ERR_VALIDATION_001',
    'database_error': 'ERR_DATABASE_002',
    'api_error': 'ERR_API_003',
    'timeout_error': 'ERR_TIMEOUT_004',
    'authentication_error': 'ERR_AUTH_005',
}

STACK_TRACE = (
    "at checkout.process_payment(checkout.py:123)\n"
    "at checkout.handle_request(checkout.py:89)\n"
    "at server.main(server.py:45)"
)


def fraud_status(score: float) -> str:
    """Band a fraud score into a risk label."""
    if score > 70:
        return 'high_risk'
    elif score > 40:
        return 'medium_risk'
    return 'low_risk'


def security_result(event_type: str) -> str:
    if event_type in ('login_failure', 'access_denied'):
        return 'denied'
    return 'allowed'


def error_message(error_type: str) -> str:
    return ERROR_MESSAGES.get(error_type, 'Unknown error')


def error_code(error_type: str) -> str:
    return ERROR_CODES.get(error_type, 'ERR_UNKNOWN_000')


class FieldRandomizer:
    """Source of random field values for scenario generators."""

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.seed = seed
        self._random = rng or random.Random(seed)

    # ------------------------------------------------------------------
    # Primitive draws
    # ------------------------------------------------------------------

    def real(self, upper: float = 1.0) -> float:
        """Uniform float in [0, upper)."""
        return self._random.random() * upper

    def integer(self, upper: int, offset: int = 0) -> int:
        """Uniform int in [offset, offset + upper)."""
        return self._random.randrange(upper) + offset

    def chance(self) -> bool:
        return self._random.random() > 0.5

    def pick(self, values: Sequence[Any]) -> Any:
        """Uniformly pick one value from a literal table."""
        return values[self._random.randrange(len(values))]

    def pick_weighted(self, table: Sequence[Tuple[Any, int]]) -> Any:
        """
        Pick from a (value, weight) table with one integer draw.

        The draw is compared against running cumulative weights; a draw past
        the end of the table falls back to the first value.

        Args:
            table: Ordered (value, weight) pairs

        Returns:
            The selected value
        """
        total = sum(weight for _, weight in table)
        draw = self._random.randrange(total)
        cumulative = 0
        for value, weight in table:
            cumulative += weight
            if draw < cumulative:
                return value
        return table[0][0]

    # ------------------------------------------------------------------
    # Enumerations
    # ------------------------------------------------------------------

    def region(self) -> str:
        return self.pick(REGIONS)

    def payment_method(self) -> str:
        return self.pick(PAYMENT_METHODS)

    def customer_segment(self) -> str:
        return self.pick(CUSTOMER_SEGMENTS)

    def payment_gateway(self) -> str:
        return self.pick(PAYMENT_GATEWAYS)

    def country(self) -> str:
        return self.pick(COUNTRIES)

    def endpoint(self) -> str:
        return self.pick(ENDPOINTS)

    def http_method(self) -> str:
        return self.pick(HTTP_METHODS)

    def page(self) -> str:
        return self.pick(PAGES)

    def device_type(self) -> str:
        return self.pick(DEVICE_TYPES)

    def browser(self) -> str:
        return self.pick(BROWSERS)

    def referrer(self) -> str:
        return self.pick(REFERRERS)

    def ab_test_variant(self) -> str:
        return self.pick(AB_TEST_VARIANTS)

    def user_agent(self) -> str:
        return self.pick(USER_AGENTS)

    def card_type(self) -> str:
        return self.pick(CARD_TYPES)

    def error_type(self) -> str:
        return self.pick(ERROR_TYPES)

    def user_activity(self) -> str:
        return self.pick(USER_ACTIVITIES)

    def security_event(self) -> str:
        return self.pick(SECURITY_EVENTS)

    def transaction_status(self) -> str:
        """80% success, 10% failed, 10% pending."""
        return self.pick_weighted(TRANSACTION_STATUS_WEIGHTS)

    def status_code(self) -> int:
        return self.pick_weighted(STATUS_CODE_WEIGHTS)

    def fraud_score(self) -> float:
        return self.real(100)

    def ip_address(self) -> str:
        """Dotted quad built from a small fixed set of recognisable octets."""
        return '.'.join(self.pick(IP_SEGMENTS) for _ in range(4))

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------

    def random_string(self, prefix: str, length: int) -> str:
        chars = ''.join(self.pick(ID_CHARSET) for _ in range(length))
        return f"{prefix}_{chars}"

    def identifier(self, kind: str) -> str:
        """
        Generate a prefixed identifier such as ``ORD_7K2P0QZ1AB``.

        Args:
            kind: One of the keys of IDENTIFIER_FORMATS

        Returns:
            Prefix, underscore and a fixed number of A-Z0-9 characters
        """
        try:
            prefix, length = IDENTIFIER_FORMATS[kind]
        except KeyError:
            raise ValueError(f"Unknown identifier kind: {kind}") from None
        return self.random_string(prefix, length)

    def order_id(self) -> str:
        return self.identifier('order')

    def transaction_id(self) -> str:
        return self.identifier('transaction')

    def merchant_id(self) -> str:
        return self.identifier('merchant')

    def user_id(self) -> str:
        return self.identifier('user')

    def session_id(self) -> str:
        return self.identifier('session')

    def payment_id(self) -> str:
        return self.identifier('payment')

    def api_key(self) -> str:
        return self.identifier('api_key')
