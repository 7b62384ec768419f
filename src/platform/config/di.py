"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.cinema.driven_adapter.repo.cinema_query_repo_impl import CinemaQueryRepoImpl
from src.service.cinema.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (event-loop-aware engine manager)
    database = providers.Singleton(Database)

    # Repositories (stateless - open a session per call through session_factory)
    reservation_query_repo = providers.Singleton(
        ReservationQueryRepoImpl, session_factory=database.provided.session
    )
    cinema_query_repo = providers.Singleton(
        CinemaQueryRepoImpl, session_factory=database.provided.session
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
