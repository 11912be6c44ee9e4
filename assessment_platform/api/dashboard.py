from fastapi import APIRouter, Depends

from assessment_platform.db.database import JSONDatabase, get_db
from assessment_platform.crud.submission import SubmissionCRUD
from assessment_platform.models.submission import DashboardStats
from assessment_platform.services.scoring import summarize_scores

router = APIRouter(tags=["Dashboard"])


@router.get("/health")
async def health_check():
    """Liveness probe."""
    return {"status": "OK", "message": "Assessment Platform API is running"}


@router.get("/stats")
async def get_dashboard_stats(db: JSONDatabase = Depends(get_db)):
    """Platform-wide totals for the dashboard."""
    counts = db.counts()
    results = summarize_scores(SubmissionCRUD(db).get_submissions())
    stats = DashboardStats(
        total_questions=counts["questions"],
        total_assessments=counts["assessments"],
        total_submissions=results.total_submissions,
        average_score=results.average_score,
        pass_rate=results.pass_rate
    )
    return {"stats": stats}
