from sqlalchemy.orm import Session
from models.registration import Registration
from typing import Optional
from datetime import datetime, timezone
import logging

logger = logging.getLogger(__name__)

def fit_column(column: str, value: Optional[str]) -> Optional[str]:
    # values wider than the column stay in the JSON payload only
    if value is None:
        return None
    width = Registration.__table__.c[column].type.length
    if width is not None and len(value) > width:
        logger.warning(f"Registration {column} longer than {width} characters, not stored in column")
        return None
    return value

class RegistrationRepository:

    @staticmethod
    def create_registration(
        db: Session,
        registration_id: str,
        source: str,
        payload: dict,
        submission_id: Optional[str] = None,
        pan: Optional[str] = None,
        pincode: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
    ) -> Registration:
        registration = Registration(
            registration_id = registration_id,
            submission_id   = submission_id,
            source          = source,
            pan             = fit_column("pan", pan),
            pincode         = fit_column("pincode", pincode),
            city            = fit_column("city", city),
            state           = fit_column("state", state),
            payload         = payload,
            created_at      = datetime.now(timezone.utc),
        )
        db.add(registration)
        db.commit()
        db.refresh(registration)
        return registration

    @staticmethod
    def get_by_registration_id(db: Session, registration_id: str) -> Optional[Registration]:
        return db.query(Registration).filter(Registration.registration_id == registration_id).first()
