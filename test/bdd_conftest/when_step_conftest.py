"""Common BDD Step Definitions for pytest-bdd.

This file contains reusable "When" step definitions that can be shared across all BDD tests.

Available When steps:
    - I call POST "{endpoint}" with
    - I call POST "{endpoint}"
    - I call GET "{endpoint}"
    - I call DELETE "{endpoint}"

Endpoint variable substitution:
    Endpoints can contain variables like {movie_id} or {movie.title} which will be resolved
    from the context fixture.
    Example: "/showtimes/{showtime_id}" -> "/showtimes/3"
"""

from typing import Any

from fastapi.testclient import TestClient
from pytest_bdd import parsers, when
from pytest_bdd.model import Step

from test.bdd_conftest.shared_step_utils import (
    post_and_store,
    read_table_payload,
    resolve_endpoint_vars,
)


# ============ When Steps ============


@when(parsers.parse('I call POST "{endpoint}" with'))
def when_call_post_with_data(
    step: Step,
    endpoint: str,
    client: TestClient,
    context: dict[str, Any],
) -> None:
    """Call POST API with table data.

    Example:
        When I call POST "/bookings" with
            | showtimeId    | seatNumber | userId |
            | {showtime_id} | 15         | alice  |
    """
    post_and_store(client, endpoint, read_table_payload(step, context), context)


@when(parsers.parse('I call POST "{endpoint}"'))
def when_call_post_no_data(
    endpoint: str,
    client: TestClient,
    context: dict[str, Any],
) -> None:
    post_and_store(client, endpoint, {}, context)


@when(parsers.parse('I call GET "{endpoint}"'))
def when_call_get(
    endpoint: str,
    client: TestClient,
    context: dict[str, Any],
) -> None:
    """Call GET API.

    Example:
        When I call GET "/showtimes/{showtime_id}"
    """
    response = client.get(resolve_endpoint_vars(endpoint, context))
    context['response'] = response
    context['response_data'] = response.json() if response.content else None


@when(parsers.parse('I call DELETE "{endpoint}"'))
def when_call_delete(
    endpoint: str,
    client: TestClient,
    context: dict[str, Any],
) -> None:
    """Call DELETE API.

    Example:
        When I call DELETE "/movies/{movie.title}"
    """
    response = client.delete(resolve_endpoint_vars(endpoint, context))
    context['response'] = response
    context['response_data'] = response.json() if response.content else None
