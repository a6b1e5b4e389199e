from sqlalchemy import Column, String, DateTime, Enum as SQLEnum, Index, BigInteger, Integer
from core.database import Base
from datetime import datetime, timezone
import enum

class SubmissionStatus(str, enum.Enum):
    STEP1_VALIDATED = "STEP1_VALIDATED"
    COMPLETED = "COMPLETED"

class StepSubmission(Base):
    __tablename__ = "registration_step_submissions"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    submission_id = Column(String(36), nullable=False, unique=True, index=True)
    aadhaar_last4 = Column(String(4), nullable=False)
    status = Column(SQLEnum(SubmissionStatus), nullable=False, default=SubmissionStatus.STEP1_VALIDATED)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_submission_status_created", "status", "created_at"),
    )
