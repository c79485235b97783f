import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from app.api import ingredients, preps, ratings, recipes
from app.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name, version="0.1.0")


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """
    Unique-constraint races (e.g. two ratings by the same user submitted at once)
    surface as 409 instead of a 500.
    """
    logger.warning(
        "Integrity error: method=%s, path=%s, error=%s",
        request.method,
        request.url.path,
        exc.orig,
    )
    return JSONResponse(
        status_code=409,
        content={"detail": "Request conflicts with existing data"},
    )


# Include routers
app.include_router(ingredients.router)
app.include_router(recipes.router)
app.include_router(preps.router)
app.include_router(ratings.router)
app.include_router(ratings.dimensions_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
