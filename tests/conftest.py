"""Shared fixtures: in-memory database, fee type builders and an API client."""

from decimal import Decimal
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from notary_fees.db.init_db import init_db
from notary_fees.db.session import get_db
from notary_fees.main import create_app
from notary_fees.models import FeeType as FeeTypeModel
from notary_fees.repositories import FeeCalculationRepository, FeeTypeRepository
from notary_fees.schemas.fee_type import FeeTypeCreate
from notary_fees.services.fee_calculation import FeeCalculationService
from notary_fees.services.fee_type import FeeTypeService


@pytest.fixture
def fee_type():
    """Build an unsaved fee type; FIXED 500000 unless overridden."""

    def _build(**overrides):
        values = {
            "document_group_id": uuid4(),
            "name": "Contract notarization",
            "calculation_method": "FIXED",
            "base_fee": Decimal("500000"),
        }
        values.update(overrides)
        return FeeTypeCreate(**values)

    return _build


@pytest.fixture
def tiers():
    # 0-100: 1%, 100-500: 2%, 500+: 3%
    return [
        {"from": 0, "to": 100, "rate": "0.01"},
        {"from": 100, "to": 500, "rate": "0.02"},
        {"from": 500, "to": None, "rate": "0.03"},
    ]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def stored_fee_type(db_session):
    """Insert a fee type row directly; FIXED 500000 unless overridden."""

    def _create(**overrides):
        values = {
            "document_group_id": str(uuid4()),
            "name": "Contract notarization",
            "calculation_method": "FIXED",
            "base_fee": Decimal("500000"),
            "status": True,
        }
        values.update(overrides)
        model = FeeTypeModel(**values)
        db_session.add(model)
        db_session.commit()
        return model

    return _create


@pytest.fixture
def calculation_service(db_session):
    return FeeCalculationService(
        FeeCalculationRepository(db_session),
        FeeTypeRepository(db_session),
        db_session,
    )


@pytest.fixture
def fee_type_service(db_session):
    return FeeTypeService(FeeTypeRepository(db_session), db_session)


@pytest.fixture
def client(db_session):
    app = create_app()

    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    return TestClient(app)
