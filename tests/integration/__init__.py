"""
Integration Tests Package
=========================

End-to-end runs of the generator through its real sinks.

Usage:
    # Run all integration tests
    pytest tests/integration/ -v

    # Skip tests that need a broker
    pytest tests/integration/ -v -m "not kafka"

Requirements:
    - Kafka tests need a broker at KAFKA_BOOTSTRAP_SERVERS (default localhost:29092)
"""

import os
import sys

# Add project root to path for imports
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
