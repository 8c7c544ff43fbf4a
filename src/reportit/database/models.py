"""SQLAlchemy models for reportit database."""

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

from reportit.domain.period import utc_now

Base = declarative_base()


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    currency = Column(String(3), nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    transactions = relationship(
        "Transaction",
        back_populates="account",
        foreign_keys="Transaction.account_id",
        cascade="all, delete-orphan",
    )


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="category")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    type = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    to_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    to_amount = Column(Numeric(14, 2), nullable=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    title = Column(String, nullable=True)
    description = Column(String, nullable=True)
    date_time = Column(DateTime, nullable=True)
    due_date = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    account = relationship("Account", back_populates="transactions", foreign_keys=[account_id])
    to_account = relationship("Account", foreign_keys=[to_account_id])
    category = relationship("Category", back_populates="transactions")


class Settings(Base):
    """Single-row report settings model."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True)
    currency = Column(String(3), nullable=False)
    start_day_of_month = Column(Integer, nullable=False, default=1)


class ExchangeRate(Base):
    """Exchange rate model: 1 base_currency = rate * currency."""

    __tablename__ = "exchange_rates"

    id = Column(Integer, primary_key=True)
    base_currency = Column(String(3), nullable=False)
    currency = Column(String(3), nullable=False)
    rate = Column(Numeric(18, 8), nullable=False)

    __table_args__ = (UniqueConstraint("base_currency", "currency", name="uq_rate_pair"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Reports may load the ledger from a ReportSession worker thread
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
