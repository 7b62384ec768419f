"""
HTTP integration tests for the reservation and movie routes

Covers:
- GET  /api/reservation/availability
- POST /api/reservation
- GET  /api/movie/{movie_id}/reservation/new
- GET  /api/movie/{movie_id}/schedule/{schedule_id}/sheets
- GET  /health
"""

from typing import Any, Callable
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import (
    HEALTH,
    MOVIE_RESERVATION_NEW,
    MOVIE_SCHEDULE_SHEETS,
    RESERVATION_AVAILABILITY,
    RESERVATION_BASE,
)
from src.platform.exception.exceptions import StoreUnavailableError
from src.service.cinema.driven_adapter.repo.reservation_command_repo_impl import (
    ReservationCommandRepoImpl,
)
from src.service.cinema.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)


SHOW_DATE = '2024-06-01'
NEXT_SHOW_DATE = '2024-06-02'


def _availability(client: TestClient, seed, *, sheet_id=None, on: str = SHOW_DATE) -> str:
    response = client.get(
        RESERVATION_AVAILABILITY,
        params={'schedule_id': seed.schedule_id, 'sheet_id': sheet_id or seed.sheet_id, 'date': on},
    )
    assert response.status_code == 200, response.text
    return response.json()['status']


def _reserve(client: TestClient, seed, *, sheet_id=None, on: str = SHOW_DATE):
    return client.post(
        RESERVATION_BASE,
        json={'schedule_id': seed.schedule_id, 'sheet_id': sheet_id or seed.sheet_id, 'date': on},
    )


@pytest.mark.integration
class TestHealth:
    def test_health_check(self, client: TestClient) -> None:
        response = client.get(HEALTH)

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'


@pytest.mark.integration
class TestCreateReservationApi:
    def test_free_seat_is_reserved_for_logged_in_user(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])

        # Act
        response = _reserve(client, cinema_seed)

        # Assert
        assert response.status_code == 201, response.text
        body = response.json()
        assert body['schedule_id'] == cinema_seed.schedule_id
        assert body['sheet_id'] == cinema_seed.sheet_id
        assert body['date'] == SHOW_DATE
        assert body['name'] == test_user['name']
        assert body['email'] == test_user['email']
        assert body['user_id'] == test_user['id']
        assert _availability(client, cinema_seed) == 'taken'

    def test_second_user_is_rejected_and_first_keeps_seat(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        another_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        """
        Given: Alice reserved sheet a-1 for the show date
        When: Bob requests the same sheet for the same schedule and date
        Then: Bob gets 409 and the seat stays taken by Alice
        """
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])
        assert _reserve(client, cinema_seed).status_code == 201

        # Act
        login_as(
            user_id=another_user['id'], name=another_user['name'], email=another_user['email']
        )
        response = _reserve(client, cinema_seed)

        # Assert
        assert response.status_code == 409
        assert response.json() == {
            'detail': 'seat already booked',
            'reason': 'seat_already_booked',
            'errors': [],
        }
        assert _availability(client, cinema_seed) == 'taken'

    def test_lost_race_is_rejected_with_conflict(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        another_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        """
        Given: Alice holds the seat
        When: Bob's request passes a stale availability check
        Then: the store refuses the insert and Bob gets 409
        """
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])
        assert _reserve(client, cinema_seed).status_code == 201
        login_as(
            user_id=another_user['id'], name=another_user['name'], email=another_user['email']
        )

        # Act
        with patch.object(ReservationQueryRepoImpl, 'exists', AsyncMock(return_value=False)):
            response = _reserve(client, cinema_seed)

        # Assert
        assert response.status_code == 409
        assert response.json()['reason'] == 'seat_already_booked'

    def test_same_seat_on_another_date_is_reserved(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        another_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])
        assert _reserve(client, cinema_seed).status_code == 201

        # Act
        login_as(
            user_id=another_user['id'], name=another_user['name'], email=another_user['email']
        )
        response = _reserve(client, cinema_seed, on=NEXT_SHOW_DATE)

        # Assert
        assert response.status_code == 201
        assert _availability(client, cinema_seed, on=NEXT_SHOW_DATE) == 'taken'

    def test_sheet_of_another_screen_is_bad_request(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])

        # Act
        response = _reserve(client, cinema_seed, sheet_id=cinema_seed.other_screen_sheet_id)

        # Assert
        assert response.status_code == 400
        assert response.json()['reason'] == 'seat_not_in_screen'

    def test_user_with_invalid_email_is_rejected_and_seat_stays_free(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=5, name='Carol', email='carol')

        # Act
        response = _reserve(client, cinema_seed)

        # Assert
        assert response.status_code == 400
        body = response.json()
        assert body['reason'] == 'validation_failed'
        assert body['errors'] == [{'field': 'email', 'message': 'email is invalid'}]
        assert _availability(client, cinema_seed) == 'available'

    def test_user_name_longer_than_holder_column_is_bad_request(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=6, name='D' * 51, email='dave@example.com')

        # Act
        response = _reserve(client, cinema_seed)

        # Assert
        assert response.status_code == 400
        body = response.json()
        assert body['reason'] == 'validation_failed'
        assert [error['field'] for error in body['errors']] == ['name']
        assert _availability(client, cinema_seed) == 'available'

    def test_store_failure_is_service_unavailable(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])

        # Act
        with patch.object(
            ReservationCommandRepoImpl,
            'create',
            AsyncMock(side_effect=StoreUnavailableError()),
        ):
            response = _reserve(client, cinema_seed)

        # Assert
        assert response.status_code == 503
        assert response.json()['reason'] == 'store_failure'
        assert _availability(client, cinema_seed) == 'available'

    def test_unknown_schedule_is_not_found(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])

        # Act
        response = client.post(
            RESERVATION_BASE,
            json={'schedule_id': 9999, 'sheet_id': cinema_seed.sheet_id, 'date': SHOW_DATE},
        )

        # Assert
        assert response.status_code == 404
        assert response.json()['detail'] == 'Schedule not found'

    def test_anonymous_request_is_unauthorized(self, client: TestClient, cinema_seed) -> None:
        response = _reserve(client, cinema_seed)

        assert response.status_code == 401
        assert response.json()['detail'] == 'Not authenticated'
        assert _availability(client, cinema_seed) == 'available'

    def test_missing_date_is_bad_request(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])

        # Act
        response = client.post(
            RESERVATION_BASE,
            json={'schedule_id': cinema_seed.schedule_id, 'sheet_id': cinema_seed.sheet_id},
        )

        # Assert
        assert response.status_code == 400


@pytest.mark.integration
class TestCheckAvailabilityApi:
    def test_free_seat_is_available(self, client: TestClient, cinema_seed) -> None:
        response = client.get(
            RESERVATION_AVAILABILITY,
            params={
                'schedule_id': cinema_seed.schedule_id,
                'sheet_id': cinema_seed.sheet_id,
                'date': SHOW_DATE,
            },
        )

        assert response.status_code == 200
        assert response.json() == {
            'schedule_id': cinema_seed.schedule_id,
            'sheet_id': cinema_seed.sheet_id,
            'date': SHOW_DATE,
            'status': 'available',
        }

    def test_missing_date_is_bad_request(self, client: TestClient, cinema_seed) -> None:
        response = client.get(
            RESERVATION_AVAILABILITY,
            params={'schedule_id': cinema_seed.schedule_id, 'sheet_id': cinema_seed.sheet_id},
        )

        assert response.status_code == 400

    def test_store_failure_is_service_unavailable(self, client: TestClient, cinema_seed) -> None:
        with patch.object(
            ReservationQueryRepoImpl, 'exists', AsyncMock(side_effect=StoreUnavailableError())
        ):
            response = client.get(
                RESERVATION_AVAILABILITY,
                params={
                    'schedule_id': cinema_seed.schedule_id,
                    'sheet_id': cinema_seed.sheet_id,
                    'date': SHOW_DATE,
                },
            )

        assert response.status_code == 503
        assert response.json()['detail'] == 'reservation store unavailable'


@pytest.mark.integration
class TestPrepareReservationApi:
    @staticmethod
    def _new_url(seed, *, movie_id=None) -> str:
        return MOVIE_RESERVATION_NEW.format(movie_id=movie_id or seed.movie_id)

    def test_free_seat_draft(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])

        # Act
        response = client.get(
            self._new_url(cinema_seed),
            params={
                'schedule_id': cinema_seed.schedule_id,
                'sheet_id': cinema_seed.sheet_id,
                'date': SHOW_DATE,
            },
        )

        # Assert
        assert response.status_code == 200, response.text
        body = response.json()
        assert body['movie']['name'] == 'Spirited Away'
        assert body['schedule']['id'] == cinema_seed.schedule_id
        assert body['sheet']['label'] == 'a-1'
        assert body['status'] == 'available'

    def test_taken_seat_is_conflict(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])
        assert _reserve(client, cinema_seed).status_code == 201

        # Act
        response = client.get(
            self._new_url(cinema_seed),
            params={
                'schedule_id': cinema_seed.schedule_id,
                'sheet_id': cinema_seed.sheet_id,
                'date': SHOW_DATE,
            },
        )

        # Assert
        assert response.status_code == 409
        assert response.json()['detail'] == 'seat already booked'

    def test_no_seat_selected_is_bad_request(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])

        # Act
        response = client.get(
            self._new_url(cinema_seed),
            params={'schedule_id': cinema_seed.schedule_id, 'date': SHOW_DATE},
        )

        # Assert
        assert response.status_code == 400
        assert response.json()['detail'] == 'Please select a seat.'

    def test_schedule_of_another_movie_is_not_found(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])

        # Act
        response = client.get(
            self._new_url(cinema_seed, movie_id=cinema_seed.other_movie_id),
            params={
                'schedule_id': cinema_seed.schedule_id,
                'sheet_id': cinema_seed.sheet_id,
                'date': SHOW_DATE,
            },
        )

        # Assert
        assert response.status_code == 404
        assert response.json()['detail'] == 'Schedule not found'

    def test_anonymous_request_is_unauthorized(self, client: TestClient, cinema_seed) -> None:
        response = client.get(
            self._new_url(cinema_seed),
            params={
                'schedule_id': cinema_seed.schedule_id,
                'sheet_id': cinema_seed.sheet_id,
                'date': SHOW_DATE,
            },
        )

        assert response.status_code == 401


@pytest.mark.integration
class TestListScheduleSheetsApi:
    def test_seat_map_marks_reserved_sheets(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])
        second_sheet_id = cinema_seed.sheet_ids[1]
        assert _reserve(client, cinema_seed, sheet_id=second_sheet_id).status_code == 201
        client.cookies.clear()

        # Act
        response = client.get(
            MOVIE_SCHEDULE_SHEETS.format(
                movie_id=cinema_seed.movie_id, schedule_id=cinema_seed.schedule_id
            ),
            params={'date': SHOW_DATE},
        )

        # Assert
        assert response.status_code == 200, response.text
        assert [(s['label'], s['reserved']) for s in response.json()] == [
            ('a-1', False),
            ('a-2', True),
            ('b-1', False),
        ]

    def test_other_date_shows_all_free(
        self,
        client: TestClient,
        login_as: Callable[..., dict[str, Any]],
        test_user: dict[str, Any],
        cinema_seed,
    ) -> None:
        # Arrange
        login_as(user_id=test_user['id'], name=test_user['name'], email=test_user['email'])
        assert _reserve(client, cinema_seed).status_code == 201

        # Act
        response = client.get(
            MOVIE_SCHEDULE_SHEETS.format(
                movie_id=cinema_seed.movie_id, schedule_id=cinema_seed.schedule_id
            ),
            params={'date': NEXT_SHOW_DATE},
        )

        # Assert
        assert not any(s['reserved'] for s in response.json())

    def test_unknown_schedule_is_not_found(self, client: TestClient, cinema_seed) -> None:
        response = client.get(
            MOVIE_SCHEDULE_SHEETS.format(movie_id=cinema_seed.movie_id, schedule_id=9999),
            params={'date': SHOW_DATE},
        )

        assert response.status_code == 404
