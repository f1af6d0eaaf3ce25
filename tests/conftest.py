"""
Pytest Configuration and Fixtures
Shared fixtures for the hostel ledger test suite
"""
import os
from contextlib import contextmanager

# Environment must be set before the application modules are imported
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-for-testing-only"
os.environ["PASSWORD_BCRYPT_ROUNDS"] = "4"
os.environ["ALLOCATION_CAPACITY_POLICY"] = "reject"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ.pop("SMTP_HOST", None)

from decimal import Decimal
from typing import Callable, Dict, Generator

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_session_factory
from app.core.security import create_access_token, hash_password
from app.db.base import Base
from app.db.session import configure_sqlite_transactions, get_db
from app.main import app
from app.models import Block, FeeStructure, Floor, Room, Student, User
from app.models.base.enums import UserRole

fake = Faker()

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
configure_sqlite_transactions(test_engine)

TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


# ============== Database Fixtures ==============

@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Test client bound to the test session."""

    def override_get_db():
        yield db_session

    @contextmanager
    def shared_session():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: shared_session
    # Not entered as a context manager: the schema is managed by db_session
    test_client = TestClient(app)
    yield test_client
    app.dependency_overrides.clear()


# ============== User Fixtures ==============

def _make_user(db: Session, role: UserRole, password: str = "Password123") -> User:
    user = User(
        email=fake.unique.email(domain="example.com").lower(),
        password_hash=hash_password(password),
        first_name=fake.first_name(),
        last_name=fake.last_name(),
        role=role,
        is_active=True,
    )
    db.add(user)
    db.flush()
    return user


@pytest.fixture
def admin_user(db_session: Session) -> User:
    user = _make_user(db_session, UserRole.ADMIN)
    db_session.commit()
    return user


@pytest.fixture
def warden_user(db_session: Session) -> User:
    user = _make_user(db_session, UserRole.WARDEN)
    db_session.commit()
    return user


@pytest.fixture
def student_factory(db_session: Session) -> Callable[..., Student]:
    """Create a Student row together with its User."""

    def make_student() -> Student:
        user = _make_user(db_session, UserRole.STUDENT)
        student = Student(user_id=user.id, guardian_name=fake.name())
        db_session.add(student)
        db_session.commit()
        return student

    return make_student


@pytest.fixture
def student(student_factory) -> Student:
    return student_factory()


def auth_headers_for(user: User) -> Dict[str, str]:
    token = create_access_token(user.id, user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(admin_user: User) -> Dict[str, str]:
    return auth_headers_for(admin_user)


@pytest.fixture
def warden_headers(warden_user: User) -> Dict[str, str]:
    return auth_headers_for(warden_user)


@pytest.fixture
def student_headers(student: Student) -> Dict[str, str]:
    return auth_headers_for(student.user)


# ============== Hostel Fixtures ==============

@pytest.fixture
def floor(db_session: Session) -> Floor:
    block = Block(name=f"Block {fake.unique.bothify('??##')}")
    db_session.add(block)
    db_session.flush()
    floor = Floor(block_id=block.id, name="Ground")
    db_session.add(floor)
    db_session.commit()
    return floor


@pytest.fixture
def room_factory(db_session: Session, floor: Floor) -> Callable[..., Room]:
    counter = {"next": 100}

    def make_room(capacity: int = 2, room_number: str = None) -> Room:
        counter["next"] += 1
        room = Room(
            floor_id=floor.id,
            room_number=room_number or str(counter["next"]),
            capacity=capacity,
        )
        db_session.add(room)
        db_session.commit()
        return room

    return make_room


@pytest.fixture
def fee_structure(db_session: Session) -> FeeStructure:
    structure = FeeStructure(
        name="Standard double",
        room_type="double",
        monthly_amount=Decimal("1000.00"),
        is_active=True,
    )
    db_session.add(structure)
    db_session.commit()
    return structure
