"""
Database models and SQLAlchemy setup for the print backoffice.

Only the projections the document lineage reads are modelled here; the full
entities are owned by the CRUD modules. Monetary values are Numeric(12, 2).
"""
import enum
import uuid
from datetime import datetime

from sqlalchemy import (
    create_engine, Column, String, DateTime, Numeric, ForeignKey, Text
)
from sqlalchemy.orm import declarative_base, sessionmaker, relationship

from backoffice.config import get_config

DATABASE_URL = get_config().database_url
engine = create_engine(
    DATABASE_URL,
    echo=get_config().database_echo,
    connect_args={"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {},
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class QuoteStatus(enum.Enum):
    """Status of a quote (COT)."""
    DRAFT = "DRAFT"
    SENT = "SENT"
    ACCEPTED = "ACCEPTED"
    NO_RESPONSE = "NO_RESPONSE"
    CONVERTED = "CONVERTED"


class OrderStatus(enum.Enum):
    """Status of an order (OP)."""
    DRAFT = "DRAFT"
    CONFIRMED = "CONFIRMED"
    IN_PRODUCTION = "IN_PRODUCTION"
    READY = "READY"
    PAID = "PAID"
    DELIVERED = "DELIVERED"
    DELIVERED_ON_CREDIT = "DELIVERED_ON_CREDIT"
    WARRANTY = "WARRANTY"


class WorkOrderStatus(enum.Enum):
    """Status of a work order (OT)."""
    DRAFT = "DRAFT"
    CONFIRMED = "CONFIRMED"
    IN_PRODUCTION = "IN_PRODUCTION"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ExpenseOrderStatus(enum.Enum):
    """Status of an expense order (OG)."""
    DRAFT = "DRAFT"
    CREATED = "CREATED"
    AUTHORIZED = "AUTHORIZED"
    PAID = "PAID"


# =============================================================================
# Reference entities
# =============================================================================

class User(Base):
    """Backoffice user (creator, advisor, designer, expense responsible)."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    email = Column(String(255), unique=True, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class Client(Base):
    __tablename__ = "clients"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class CommercialChannel(Base):
    __tablename__ = "commercial_channels"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(100), nullable=False)


# =============================================================================
# Quote (COT) - optional root of the lineage
# =============================================================================

class Quote(Base):
    """
    Priced proposal sent to a client.
    A quote may never become an order; order_id stays NULL until conversion.
    """
    __tablename__ = "quotes"

    id = Column(String(36), primary_key=True, default=_new_id)
    quote_number = Column(String(50), unique=True, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=QuoteStatus.DRAFT.value)
    total = Column(Numeric(12, 2), nullable=True)
    client_id = Column(String(36), ForeignKey('clients.id'), nullable=False, index=True)
    created_by_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    commercial_channel_id = Column(String(36), ForeignKey('commercial_channels.id'), nullable=True)
    order_id = Column(String(36), ForeignKey('orders.id'), nullable=True, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    client = relationship("Client")
    created_by = relationship("User")
    commercial_channel = relationship("CommercialChannel")
    order = relationship("Order", back_populates="quote")


# =============================================================================
# Order (OP) - anchor of the lineage
# =============================================================================

class Order(Base):
    """Confirmed commercial order, optionally converted from a quote."""
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=_new_id)
    order_number = Column(String(50), unique=True, nullable=False, index=True)
    status = Column(String(30), nullable=False, default=OrderStatus.DRAFT.value)
    total = Column(Numeric(12, 2), nullable=True)
    balance = Column(Numeric(12, 2), nullable=True)  # total - paid amount
    client_id = Column(String(36), ForeignKey('clients.id'), nullable=False, index=True)
    created_by_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    client = relationship("Client")
    created_by = relationship("User")
    quote = relationship("Quote", back_populates="order", uselist=False)
    work_orders = relationship(
        "WorkOrder", back_populates="order", order_by="WorkOrder.created_at"
    )


# =============================================================================
# Work Order (OT)
# =============================================================================

class WorkOrder(Base):
    """
    Production task set spawned by an order.
    INVARIANT: order_id is set at creation and never changes.
    """
    __tablename__ = "work_orders"

    id = Column(String(36), primary_key=True, default=_new_id)
    work_order_number = Column(String(50), unique=True, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=WorkOrderStatus.DRAFT.value)
    order_id = Column(String(36), ForeignKey('orders.id'), nullable=False, index=True)
    advisor_id = Column(String(36), ForeignKey('users.id'), nullable=False)
    designer_id = Column(String(36), ForeignKey('users.id'), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    order = relationship("Order", back_populates="work_orders")
    advisor = relationship("User", foreign_keys=[advisor_id])
    designer = relationship("User", foreign_keys=[designer_id])
    expense_orders = relationship(
        "ExpenseOrder", back_populates="work_order", order_by="ExpenseOrder.created_at"
    )


# =============================================================================
# Expense Order (OG)
# =============================================================================

class ExpenseOrder(Base):
    """
    Expense recorded while executing a work order.
    work_order_id may be NULL when the expense was detached (orphan).
    """
    __tablename__ = "expense_orders"

    id = Column(String(36), primary_key=True, default=_new_id)
    og_number = Column(String(50), unique=True, nullable=False, index=True)
    status = Column(String(20), nullable=False, default=ExpenseOrderStatus.DRAFT.value)
    work_order_id = Column(String(36), ForeignKey('work_orders.id'), nullable=True, index=True)
    authorized_to_id = Column(String(36), ForeignKey('users.id'), nullable=True)
    responsible_id = Column(String(36), ForeignKey('users.id'), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    work_order = relationship("WorkOrder", back_populates="expense_orders")
    authorized_to = relationship("User", foreign_keys=[authorized_to_id])
    responsible = relationship("User", foreign_keys=[responsible_id])
    items = relationship(
        "ExpenseOrderItem", back_populates="expense_order", cascade="all, delete-orphan"
    )


class ExpenseOrderItem(Base):
    """Line item of an expense order."""
    __tablename__ = "expense_order_items"

    id = Column(String(36), primary_key=True, default=_new_id)
    expense_order_id = Column(String(36), ForeignKey('expense_orders.id'), nullable=False, index=True)
    description = Column(Text, nullable=True)
    total = Column(Numeric(12, 2), nullable=False, default=0)

    expense_order = relationship("ExpenseOrder", back_populates="items")


def init_db():
    """Initialize the database and create all tables."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Database session dependency for FastAPI."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory():
    """Session factory dependency for handlers that open their own sessions."""
    return SessionLocal
