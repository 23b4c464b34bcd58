"""SQLAlchemy models for fintrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC).replace(tzinfo=None)


class User(Base):
    """Registered user model."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(50), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    tracking_option = Column(String(20), default="both", nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    banks = relationship("Bank", back_populates="user", cascade="all, delete-orphan")
    credit_cards = relationship("CreditCard", back_populates="user", cascade="all, delete-orphan")
    cash_balance = relationship(
        "CashBalance", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    income_entries = relationship("IncomeEntry", back_populates="user", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="user", cascade="all, delete-orphan")


class Bank(Base):
    """Bank account model."""

    __tablename__ = "banks"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String(100), nullable=False)
    initial_balance = Column(Numeric(10, 2), nullable=True)
    current_balance = Column(Numeric(10, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_bank_user_name"),)

    # Relationships
    user = relationship("User", back_populates="banks")


class CreditCard(Base):
    """Credit card model."""

    __tablename__ = "credit_cards"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String(100), nullable=False)
    credit_limit = Column(Numeric(10, 2), nullable=True)
    used_limit = Column(Numeric(10, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_card_user_name"),)

    # Relationships
    user = relationship("User", back_populates="credit_cards")


class CashBalance(Base):
    """Cash balance model, one row per user."""

    __tablename__ = "cash_balance"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)
    balance = Column(Numeric(10, 2), default=0, nullable=False)
    initial_balance = Column(Numeric(10, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    updated_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="cash_balance")


class IncomeEntry(Base):
    """Income entry model."""

    __tablename__ = "income_entries"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    source = Column(String(100), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    credited_to_type = Column(String(10), nullable=False)
    credited_to_id = Column(Integer, nullable=True)
    date = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="income_entries")


class Expense(Base):
    """Expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String(200), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(15), nullable=False)
    payment_source_id = Column(Integer, nullable=True)
    date = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)

    # Relationships
    user = relationship("User", back_populates="expenses")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
