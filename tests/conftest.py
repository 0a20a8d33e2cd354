"""
Pytest configuration file for tests.

Puts the project root on sys.path so the songlink package imports
without being installed.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

