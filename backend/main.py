import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from backend.core import config
from backend.database import SessionLocal, engine, ensure_appointment_schema
from backend.models import appointment, doctor
from backend.routes import appointment_routes, doctor_routes
from backend.seed import seed_default_doctors

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI()

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials='*' not in config.CORS_ALLOW_ORIGINS,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': jsonable_encoder(exc.errors())},
    )


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()

    try:
        doctor.Base.metadata.create_all(bind=engine)
        appointment.Base.metadata.create_all(bind=engine)
        ensure_appointment_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')
        return

    if not config.SEED_DEFAULT_DOCTORS:
        return

    db = SessionLocal()
    try:
        seed_default_doctors(db)
    except SQLAlchemyError:
        db.rollback()
        logger.exception('Seeding default doctors failed.')
    finally:
        db.close()


@app.get('/')
def root():
    return {'status': 'Doctor Scheduling API Running'}


app.include_router(doctor_routes.router)
app.include_router(appointment_routes.router)
