from sqlalchemy.orm import Session
from models.step_submission import StepSubmission, SubmissionStatus
from datetime import datetime, timezone
from typing import Optional

class StepSubmissionRepository:

    @staticmethod
    def create_submission(db: Session, submission_id: str, aadhaar_last4: str) -> StepSubmission:
        submission = StepSubmission(
            submission_id = submission_id,
            aadhaar_last4 = aadhaar_last4,
            status        = SubmissionStatus.STEP1_VALIDATED,
            created_at    = datetime.now(timezone.utc),
        )
        db.add(submission)
        db.commit()
        db.refresh(submission)
        return submission

    @staticmethod
    def get_by_submission_id(db: Session, submission_id: str) -> Optional[StepSubmission]:
        return db.query(StepSubmission).filter(StepSubmission.submission_id == submission_id).first()

    @staticmethod
    def mark_completed(db: Session, submission: StepSubmission) -> bool:
        """Flip a STEP1_VALIDATED row to COMPLETED; False when another request got there first."""
        updated = db.query(StepSubmission).filter(
            StepSubmission.id == submission.id,
            StepSubmission.status == SubmissionStatus.STEP1_VALIDATED,
        ).update(
            {"status": SubmissionStatus.COMPLETED, "completed_at": datetime.now(timezone.utc)},
            synchronize_session=False,
        )
        db.commit()
        db.refresh(submission)
        return updated == 1

    @staticmethod
    def delete_stale_submissions(db: Session, cutoff_date: datetime) -> int:
        count = db.query(StepSubmission).filter(
            StepSubmission.status == SubmissionStatus.STEP1_VALIDATED,
            StepSubmission.created_at < cutoff_date,
        ).delete(synchronize_session=False)
        db.commit()
        return count
