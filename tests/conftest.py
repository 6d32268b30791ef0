"""
Shared fixtures: an in-memory SQLite database, the FastAPI test client and a
small business with one service and one employee.
"""
import os

# Settings are read once at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["DEFAULT_TIMEZONE"] = "UTC"

from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from booking.api.dependencies import create_access_token
from booking.config.database import get_db
from booking.main import app
from booking.models import (
    Base,
    Business,
    Employee,
    EmployeeAvailability,
    EmployeeServiceLink,
    Service,
    User,
)
from booking.services.availability.request_sequencer import slot_request_sequencer

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def upcoming(weekday: int) -> date:
    """Next date strictly after today with the given weekday (Monday=0)"""
    today = date.today()
    days_ahead = (weekday - today.weekday()) % 7 or 7
    return today + timedelta(days=days_ahead)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    slot_request_sequencer._latest.clear()


@pytest.fixture
def business(db):
    business = Business(
        bus_name="Downtown Barbers",
        bus_email="owner@barbers.example.com",
        bus_phone="+15550001111",
        timezone="UTC",
    )
    db.add(business)
    db.commit()
    db.refresh(business)
    return business


@pytest.fixture
def haircut(db, business):
    service = Service(
        bus_id=business.bus_id,
        serv_name="Haircut",
        serv_min_duration=30,
        serv_price=25,
    )
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def barber(db, business, haircut):
    """Available Mondays 09:00-11:00, performs haircuts"""
    employee = Employee(bus_id=business.bus_id, emp_fname="Ana", emp_lname="Silva")
    db.add(employee)
    db.flush()

    db.add(EmployeeAvailability(
        emp_id=employee.emp_id,
        avail_day="1",
        start_time="09:00:00",
        end_time="11:00:00",
    ))
    db.add(EmployeeServiceLink(emp_id=employee.emp_id, serv_id=haircut.serv_id))
    db.commit()
    db.refresh(employee)
    return employee


@pytest.fixture
def owner(db, business):
    user = User(
        email="owner@barbers.example.com",
        hashed_password=User.hash_password("SecurePass123!"),
        full_name="Owner",
        business_id=business.bus_id,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def auth_headers(owner):
    token = create_access_token({"sub": str(owner.id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def next_monday():
    return upcoming(0)
