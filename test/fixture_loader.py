"""
Service Fixtures Import Module

Consolidates all service-specific test fixtures.
This module is imported by conftest.py to make service fixtures available to all tests.
"""

from test.service.cinema.fixtures import *  # noqa: E402, F403
