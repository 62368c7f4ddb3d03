# tests/conftest.py
from datetime import date

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from core.domain import Client, Contract, Payment, PaymentType, Project, TimeEntry
from core.services.reconciliation import DEFAULT_POLICY
from infra.db.base import Base
from infra.services import build_services


@pytest.fixture
def session():
    # separate in-memory DB for tests
    engine = create_engine("sqlite:///:memory:", future=True)
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def services(session):
    return build_services(session, policy=DEFAULT_POLICY)


@pytest.fixture
def seeded_client(services):
    """One client with a contract, a project on it and a year of mixed activity."""
    session = services["session"]
    client = Client.create("Acme Ltda", email="billing@acme.test", annual_hours=100.0)
    services["client_repo"].add(client)
    session.flush()

    contract = Contract.create(
        client.id,
        "CT-001",
        total_hours=200.0,
        hourly_rate=100_000.0,
        start_date=date(2024, 1, 1),
    )
    services["contract_repo"].add(contract)
    session.flush()

    project = Project.create("Portal", client_id=client.id, contract_id=contract.id, hourly_rate=100_000.0)
    services["project_repo"].add(project)
    session.flush()

    for hours, on in ((2.0, date(2024, 3, 10)), (3.0, date(2024, 4, 2)), (1.0, date(2024, 6, 20))):
        services["time_entry_repo"].add(TimeEntry.create(project.id, hours, on))
    services["payment_repo"].add(
        Payment.create(500_000.0, date(2024, 4, 15), payment_type=PaymentType.FIXED, project_id=project.id)
    )
    session.commit()
    return {"client": client, "contract": contract, "project": project}
