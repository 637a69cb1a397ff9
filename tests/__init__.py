"""
Test Suite for the Logs Demo generator
======================================

This package contains all tests for the generator:

- Unit Tests: randomizers, scenarios, driver, sinks and settings
- Integration Tests: end-to-end runs through loguru and Kafka

Running Tests:
    # Run all tests
    pytest tests/ -v

    # Run unit tests only
    pytest tests/ -v --ignore=tests/integration

    # Run with coverage
    pytest tests/ -v --cov=logs_demo --cov-report=html
"""

import os
import sys

# Add project root to path
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
