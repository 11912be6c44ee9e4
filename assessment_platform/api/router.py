from fastapi import APIRouter
from assessment_platform.api.questions import router as questions_router
from assessment_platform.api.assessments import router as assessments_router
from assessment_platform.api.dashboard import router as dashboard_router
from assessment_platform.api.submissions import router as submissions_router

api_router = APIRouter()

# Include all route modules
api_router.include_router(questions_router, prefix="/questions", tags=["questions"])
api_router.include_router(assessments_router, prefix="/assessments", tags=["assessments"])
api_router.include_router(submissions_router, prefix="/submissions", tags=["submissions"])
api_router.include_router(dashboard_router)
