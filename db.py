#This is db.py
from datetime import datetime
from sqlalchemy import create_engine, Column, Integer, Float, String, DateTime, Boolean, Text
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import DATABASE_URL

Base = declarative_base()


def make_engine(database_url: str):
    """
    Build an engine for `database_url`. In-memory SQLite gets a single shared
    connection, otherwise every session would see its own empty database.
    """
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(database_url, connect_args=connect_args)
    return create_engine(database_url)


def make_session_factory(bind_engine):
    return sessionmaker(bind=bind_engine, expire_on_commit=False)


engine = make_engine(DATABASE_URL)
SessionLocal = make_session_factory(engine)


class ProductRecord(Base):
    __tablename__ = "products"
    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, default=0)   # seed/catalog order
    name = Column(String(255), nullable=False)
    description = Column(Text, default="")
    category = Column(String(32), nullable=False)
    price = Column(Float, default=0.0)
    image_url = Column(String(512), default="")
    in_stock = Column(Boolean, default=True)
    weight_kg = Column(Float, nullable=False)
    origin_country = Column(String(64), default="")
    packaging_type = Column(String(32), nullable=False)
    base_production_emission = Column(Float, default=0.0)
    override_emission = Column(Float, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


def init_db(bind_engine=None):
    Base.metadata.create_all(bind_engine or engine)
