"""
Shared fixtures for the lineage tests.

Every test gets its own SQLite file so the concurrent search queries can open
independent connections.
"""
import os
import tempfile

# Must be set before backoffice.models builds its engine
os.environ.setdefault(
    "BACKOFFICE_DATABASE_URL",
    "sqlite:///" + os.path.join(tempfile.gettempdir(), "backoffice_test.db"),
)

from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from backoffice.models import (
    Base, User, Client, CommercialChannel, Quote, Order, WorkOrder,
    ExpenseOrder, ExpenseOrderItem,
)

BASE_TIME = datetime(2026, 3, 2, 9, 0, 0)


# =============================================================================
# Database
# =============================================================================

@pytest.fixture(scope="function")
def session_factory(tmp_path):
    """Session factory bound to a fresh database."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'lineage.db'}",
        connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def test_db(session_factory):
    """Session for arranging data and running services."""
    session = session_factory()
    yield session
    session.close()


# =============================================================================
# Document factory
# =============================================================================

class DocumentFactory:
    """Creates lineage documents with predictable numbers and timestamps."""

    def __init__(self, session):
        self.session = session
        self._seq = 0

    def _next(self) -> int:
        self._seq += 1
        return self._seq

    def _save(self, entity):
        self.session.add(entity)
        self.session.commit()
        return entity

    def user(self, first_name="Laura", last_name="Gomez"):
        return self._save(User(first_name=first_name, last_name=last_name))

    def client(self, name="Imprenta Central"):
        return self._save(Client(name=name))

    def channel(self, name="Instagram"):
        return self._save(CommercialChannel(name=name))

    def order(self, client, created_by=None, number=None, status="CONFIRMED",
              total=Decimal("1500.00"), balance=Decimal("500.00"), minutes=0):
        return self._save(Order(
            order_number=number or f"OP-{self._next():04d}",
            status=status,
            total=total,
            balance=balance,
            client_id=client.id,
            created_by_id=(created_by or self.user()).id,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        ))

    def quote(self, client, order=None, created_by=None, channel=None, number=None,
              status="DRAFT", total=Decimal("1500.00"), minutes=0):
        return self._save(Quote(
            quote_number=number or f"COT-{self._next():04d}",
            status=status,
            total=total,
            client_id=client.id,
            created_by_id=(created_by or self.user()).id,
            commercial_channel_id=channel.id if channel else None,
            order_id=order.id if order else None,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        ))

    def work_order(self, order, advisor=None, designer=None, number=None,
                   status="IN_PRODUCTION", minutes=0, updated_minutes=None):
        created_at = BASE_TIME + timedelta(minutes=minutes)
        updated_at = created_at + timedelta(minutes=updated_minutes or 0)
        return self._save(WorkOrder(
            work_order_number=number or f"OT-{self._next():04d}",
            status=status,
            order_id=order.id,
            advisor_id=(advisor or self.user("Carlos", "Ruiz")).id,
            designer_id=designer.id if designer else None,
            created_at=created_at,
            updated_at=updated_at,
        ))

    def expense_order(self, work_order=None, item_totals=(), number=None,
                      status="CREATED", minutes=0, authorized_to=None, responsible=None):
        expense_order = ExpenseOrder(
            og_number=number or f"OG-{self._next():04d}",
            status=status,
            work_order_id=work_order.id if work_order else None,
            authorized_to_id=authorized_to.id if authorized_to else None,
            responsible_id=responsible.id if responsible else None,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )
        expense_order.items = [
            ExpenseOrderItem(description=f"Item {i + 1}", total=Decimal(str(total)))
            for i, total in enumerate(item_totals)
        ]
        return self._save(expense_order)


@pytest.fixture
def factory(test_db):
    return DocumentFactory(test_db)


@pytest.fixture
def lineage(factory):
    """
    Quote -> Order with two work orders; the first has one expense order.

    Five documents, four parent -> child links.
    """
    client = factory.client("Grafica Andina")
    creator = factory.user("Maria", "Lopez")
    order = factory.order(client, created_by=creator, number="OP-0100", minutes=10)
    quote = factory.quote(
        client, order=order, created_by=creator, channel=factory.channel("Referido"),
        number="COT-0100", status="CONVERTED",
    )
    designer = factory.user("Diego", "Perez")
    first_work_order = factory.work_order(order, designer=designer, number="OT-0100", minutes=20)
    second_work_order = factory.work_order(order, number="OT-0101", minutes=30)
    expense_order = factory.expense_order(
        first_work_order, item_totals=["100.50", "20.00"], number="OG-0100", minutes=40,
    )
    return SimpleNamespace(
        client=client,
        quote=quote,
        order=order,
        first_work_order=first_work_order,
        second_work_order=second_work_order,
        expense_order=expense_order,
    )
