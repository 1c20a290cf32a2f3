import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import facility_engine, Base
from shared.core.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware

# Models must be imported before create_all
from shared.models import notifications, profiles
from .models.assets import assets, employee_assets
from .models.common import code_sequences
from .models.communications import communications
from .models.employees import employees
from .models.gatepass import gatepasses
from .models.visitors import visitors

from .router.assets import assets_router
from .router.common import realtime_router
from .router.communications import communications_router
from .router.employees import employees_router
from .router.gatepass import gatepass_router
from .router.overview import analytics_router
from .router.system import notifications_router
from .router.visitors import visitors_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = FastAPI(title="Gatepass Service API")

# Create all tables
Base.metadata.create_all(bind=facility_engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(JsonResponseMiddleware)
setup_exception_handlers(app)

# Include routers
app.include_router(gatepass_router.router)
app.include_router(visitors_router.router)
app.include_router(employees_router.router)
app.include_router(assets_router.router)
app.include_router(communications_router.router)
app.include_router(analytics_router.router)
app.include_router(notifications_router.router)
app.include_router(realtime_router.router)


@app.get("/")
def root():
    return {"message": "Gatepass Service API is running"}
