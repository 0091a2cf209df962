## Main application entry point
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from goalpath.assessment.routes import router as assessments_router
from goalpath.auth.routes import router as auth_router
from goalpath.db.init_db import init_db
from goalpath.errors import ApiError
from goalpath.goal_templates.routes import router as goal_templates_router
from goalpath.goals.routes import router as goals_router
from goalpath.plans.routes import router as plans_router
from goalpath.projects.routes import router as projects_router
from goalpath.roadmaps.routes import router as roadmaps_router
from goalpath.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="goalpath")


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    body = {"error": exc.message}
    if exc.details is not None:
        body["details"] = jsonable_encoder(exc.details)
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request data", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.on_event("startup")
async def startup_event():
    if settings.auto_create_schema:
        init_db()


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(goals_router)
app.include_router(goal_templates_router)
app.include_router(assessments_router)
app.include_router(plans_router)
app.include_router(roadmaps_router)
