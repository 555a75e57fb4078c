import os
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app import config
from app.helpers.errors import PortalError, ValidationError, StoreError
from app.helpers.logger import get_logger

from app.routes.student.submissions import router as student_submission_router

from app.routes.admin.admin_login import router as admin_login_router
from app.routes.admin.submissions import router as admin_submission_router
from app.routes.admin.marks import router as admin_marks_router
from app.routes.admin.extensions import router as admin_extensions_router
from app.routes.admin.feed import router as admin_feed_router

logger = get_logger()


app=FastAPI(
    title="Assignment Submission Portal"
)

@app.get("/")
def root():
    return {
        "message":"Assignment Submission Portal is Running!"
        }


# ---------------------------
# Error responses
# ---------------------------
@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    if isinstance(exc, ValidationError):
        return JSONResponse(status_code=exc.status_code, content={"detail": {"errors": exc.errors}})
    if isinstance(exc, StoreError):
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


app.include_router(student_submission_router)

app.include_router(admin_login_router)
app.include_router(admin_submission_router)
app.include_router(admin_marks_router)
app.include_router(admin_extensions_router)
app.include_router(admin_feed_router)

# public file URLs stored on each submission
os.makedirs(config.UPLOADS_DIR, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=config.UPLOADS_DIR, check_dir=False), name="uploads")
