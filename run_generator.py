#!/usr/bin/env python3
"""
Logs Demo Runner - emits synthetic e-commerce log records every few seconds.

Configure with environment variables or a .env file (see .env.example).
"""

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from logs_demo.main import main


if __name__ == '__main__':
    sys.exit(main())
