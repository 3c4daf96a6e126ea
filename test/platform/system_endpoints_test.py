from typing import Any

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import BOOKING_CREATE, MOVIE_CREATE, SHOWTIME_CREATE


def test_health_reports_service_name(client: TestClient) -> None:
    response = client.get('/health')

    assert response.status_code == 200
    assert response.json() == {'status': 'healthy', 'service': 'Popcorn Palace'}


def test_metrics_exposes_cinema_collectors(client: TestClient) -> None:
    response = client.get('/metrics')

    assert response.status_code == 200
    assert response.headers['content-type'].startswith('text/plain')
    for name in (
        'cinema_booking_requests_total',
        'cinema_booking_duration_seconds',
        'cinema_showtime_schedule_requests_total',
        'cinema_storage_conflicts_total',
    ):
        assert f'# HELP {name}' in response.text


def test_booking_outcomes_are_counted(client: TestClient) -> None:
    # Arrange
    movie: dict[str, Any] = client.post(
        MOVIE_CREATE,
        json={'title': 'Heat', 'genre': 'Crime', 'duration': 170, 'rating': 8.3, 'releaseYear': 1995},
    ).json()
    showtime = client.post(
        SHOWTIME_CREATE,
        json={
            'movieId': movie['id'],
            'theater': 'Hall C',
            'startTime': '2025-03-01T18:00:00',
            'endTime': '2025-03-01T21:00:00',
            'price': 11.0,
        },
    ).json()
    booking = {'showtimeId': showtime['id'], 'seatNumber': 3, 'userId': 'user-1'}

    # Act
    assert client.post(BOOKING_CREATE, json=booking).status_code == 200
    assert client.post(BOOKING_CREATE, json=booking).status_code == 409

    # Assert
    metrics_text = client.get('/metrics').text
    assert 'cinema_booking_requests_total{result="booked"}' in metrics_text
    assert 'cinema_booking_requests_total{result="seat_already_booked"}' in metrics_text
