"""
Test configuration and shared fixtures for the torm test suite.
Provides an in-memory database, sample entities and registries.
"""

import pytest
from typing import List
from unittest.mock import Mock, AsyncMock
from pydantic import BaseModel, ConfigDict
from sqlalchemy import Column, Integer, String, Float, create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from torm.common.base_dao import BaseModelHandle, ModelDAO
from torm.core.database import Base, init_db
from torm.resources.models import Entity
from torm.resources.registry import ModelRegistry


# ===== SAMPLE ENTITIES =====

class Widget(Entity, Base):
    __tablename__ = "widget"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    price = Column(Float)
    status = Column(String)
    description = Column(String, nullable=True)


class Gadget(Entity, Base):
    __tablename__ = "gadget"
    __entity_name__ = "Gizmo"

    id = Column(Integer, primary_key=True, index=True)
    label = Column(String)


class WidgetRead(BaseModel):
    id: int
    name: str
    price: float
    status: str

    model_config = ConfigDict(from_attributes=True)


# ===== DATABASE SETUP =====

@pytest.fixture(scope="session")
def engine():
    """Create in-memory SQLite engine"""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    return engine


@pytest.fixture(scope="function")
def db_session(engine):
    """Create a database session, wiping all data afterwards"""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)


# ===== ENTITY FIXTURES =====

@pytest.fixture
def widget_model():
    return Widget


@pytest.fixture
def gadget_model():
    return Gadget


@pytest.fixture
def widget_read_model():
    return WidgetRead


@pytest.fixture
def sample_widgets(db_session) -> List[Widget]:
    """Create sample widgets for testing"""
    widgets = [
        Widget(id=1, name="Sprocket", price=2.5, status="active", description="Small sprocket"),
        Widget(id=2, name="Flange", price=10.0, status="active", description="Steel flange"),
        Widget(id=3, name="Gear", price=7.25, status="pending", description=None),
        Widget(id=4, name="Bolt", price=0.5, status="retired", description="M6 bolt"),
    ]

    for widget in widgets:
        db_session.add(widget)
    db_session.commit()

    return widgets


# ===== REGISTRY FIXTURES =====

@pytest.fixture
def mock_handle():
    """Mock backend handle with an async find_all"""
    handle = Mock(spec=BaseModelHandle)
    handle.find_all = AsyncMock(return_value=[])
    return handle


@pytest.fixture
def mock_registry(mock_handle):
    """Registry with the mock handle registered for Widget"""
    registry = ModelRegistry()
    registry.register(Widget, mock_handle)
    return registry


@pytest.fixture
def registry(db_session):
    """Registry backed by SQLAlchemy DAOs"""
    registry = ModelRegistry()
    registry.register(Widget, ModelDAO(db_session, Widget))
    registry.register(Gadget, ModelDAO(db_session, Gadget))
    return registry
