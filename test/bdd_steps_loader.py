"""
BDD Steps Import Module

Consolidates all Gherkin step definitions (Given/When/Then).
This module is imported by conftest.py to register all BDD steps with pytest-bdd.
"""

# =============================================================================
# Shared API Steps
# =============================================================================
from test.bdd_conftest.given_step_conftest import *  # noqa: E402, F403
from test.bdd_conftest.then_step_conftest import *  # noqa: E402, F403
from test.bdd_conftest.when_step_conftest import *  # noqa: E402, F403

# =============================================================================
# Cinema Service Steps
# =============================================================================
from test.service.cinema.integration.steps.then import *  # noqa: E402, F403
