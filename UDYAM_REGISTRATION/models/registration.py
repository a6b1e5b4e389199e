from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, JSON, Index, BigInteger, Integer
from core.database import Base

class Registration(Base):
    __tablename__ = "udyam_registrations"

    # SQLite only autoincrements INTEGER primary keys
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    registration_id = Column(String(40), nullable=False, unique=True, index=True)
    submission_id = Column(String(36), nullable=True, index=True)
    source = Column(String(20), nullable=False)
    pan = Column(String(20), nullable=True)
    pincode = Column(String(10), nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(100), nullable=True)
    payload = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True, nullable=False)

    __table_args__ = (
        Index("idx_registration_pan", "pan"),
    )
