# backend/tests/conftest.py
"""
Shared fixtures for the availability backend tests.

Every test that touches storage gets a transactional session on an
in-memory SQLite engine; nothing is ever committed. Route tests get a
TestClient whose ``get_db`` and regional clock are overridden.
"""

import os

# Set test mode BEFORE any kalasetu imports so settings pick it up.
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("CI", "true")

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from kalasetu.core.clock import FixedClock, get_regional_clock
from kalasetu.database import Base, get_db

# Import models so Base.metadata is populated for create_all.
import kalasetu.models  # noqa: F401
from kalasetu.models import Provider, ProviderSchedule, Reservation, ScheduleException
from tests.utils.availability_builders import DEFAULT_NOW, IST_OFFSET_MINUTES


@pytest.fixture(scope="session")
def _unit_engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture(scope="function")
def unit_db(_unit_engine) -> Session:
    """
    Provide a transactional session bound to the shared in-memory engine.
    """
    connection = _unit_engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(bind=connection, expire_on_commit=False, future=True)
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess, trans):
        if trans.nested and not trans._parent.nested:
            sess.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock(DEFAULT_NOW, IST_OFFSET_MINUTES)


@pytest.fixture
def create_provider(unit_db):
    """Factory for provider profiles."""

    def _create(
        public_id: str = "meera-pottery",
        working_hours: Optional[Dict[str, Any]] = None,
        minimum_booking_notice_hours: int = 0,
        buffer_time_minutes: int = 0,
        max_bookings_per_day: int = 0,
    ) -> Provider:
        provider = Provider(
            public_id=public_id,
            display_name=public_id.replace("-", " ").title(),
            working_hours=working_hours or {},
            minimum_booking_notice_hours=minimum_booking_notice_hours,
            buffer_time_minutes=buffer_time_minutes,
            max_bookings_per_day=max_bookings_per_day,
        )
        unit_db.add(provider)
        unit_db.flush()
        return provider

    return _create


@pytest.fixture
def create_schedule(unit_db):
    """Factory for a provider schedule with optional exceptions."""

    def _create(
        provider: Provider,
        recurring: Optional[List[Dict[str, Any]]] = None,
        exceptions: Optional[List[Dict[str, Any]]] = None,
        buffer_time_minutes: Optional[int] = None,
        advance_booking_days: Optional[int] = None,
        min_notice_hours: Optional[int] = None,
    ) -> ProviderSchedule:
        schedule = ProviderSchedule(
            provider_id=provider.id,
            recurring_schedule=recurring or [],
            buffer_time_minutes=buffer_time_minutes,
            advance_booking_days=advance_booking_days,
            min_notice_hours=min_notice_hours,
        )
        unit_db.add(schedule)
        unit_db.flush()
        for entry in exceptions or []:
            unit_db.add(
                ScheduleException(
                    schedule_id=schedule.id,
                    exception_date=entry["date"],
                    is_available=entry.get("is_available", False),
                    slots=entry.get("slots", []),
                    reason=entry.get("reason"),
                )
            )
        unit_db.flush()
        unit_db.refresh(schedule)
        return schedule

    return _create


@pytest.fixture
def create_reservation(unit_db):
    """Factory for reservations; instants may be given in any offset."""

    def _create(
        provider: Provider,
        start_at: datetime,
        end_at: datetime,
        status: str = "confirmed",
    ) -> Reservation:
        reservation = Reservation(
            provider_id=provider.id,
            start_at=start_at,
            end_at=end_at,
            status=status,
        )
        unit_db.add(reservation)
        unit_db.flush()
        return reservation

    return _create


@pytest.fixture
def client(unit_db, fixed_clock) -> TestClient:
    """TestClient bound to the transactional session and the fixed clock."""
    from kalasetu.main import app

    def _override_get_db():
        yield unit_db

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_regional_clock] = lambda: fixed_clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

