import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import CORS_ORIGINS
from app.routes import ventilation
from services.error_types import HVACCalculationError, ValidationError
from services.reference_data import check_reference_data

logger = logging.getLogger(__name__)

app = FastAPI(
    title="ASHRAE 62.1 Ventilation API",
    version="1.0.0",
    description="Outdoor air, exhaust and ventilation load calculations per the ASHRAE 62.1 Ventilation Rate Procedure"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"REQUEST: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"RESPONSE: {response.status_code}")
    return response


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"Rejected {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"error": exc.to_json()})


@app.exception_handler(HVACCalculationError)
async def calculation_error_handler(request: Request, exc: HVACCalculationError):
    logger.error(f"Calculation error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": exc.to_json()})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(status_code=500, content={"error": {
        "type": type(exc).__name__,
        "message": "Internal server error",
        "details": {},
    }})


@app.on_event("startup")
async def startup_event():
    """Fail fast when the reference tables are missing"""
    tables = check_reference_data()
    logger.info(f"Reference data ready: {len(tables)} tables")


app.include_router(ventilation.router, prefix="/api/v1/ventilation")


@app.get("/")
async def root():
    return {"message": "ASHRAE 62.1 Ventilation API is running"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
