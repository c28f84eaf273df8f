# farm/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from farm.api.middleware import AuditTriggerMiddleware, CorrelationIdMiddleware
from farm.api.routers import animals, barns, health
from farm.application.exceptions import (
    AnimalNotFoundError,
    ApplicationError,
    CollaboratorFailureError,
    RebalanceInProgressError,
)
from farm.config.logging import configure_logging
from farm.config.settings import get_settings
from farm.domain.exceptions import DomainError, InvalidArgumentError, InvalidStateError
from farm.infrastructure.database.session import get_engine, init_models

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models(get_engine())
    yield
    await get_engine().dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> AuditTrigger.
app.add_middleware(AuditTriggerMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(InvalidArgumentError)
async def invalid_argument_error_handler(request, exc: InvalidArgumentError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(InvalidStateError)
async def invalid_state_error_handler(request, exc: InvalidStateError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(AnimalNotFoundError)
async def animal_not_found_error_handler(request, exc: AnimalNotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(RebalanceInProgressError)
async def rebalance_in_progress_error_handler(request, exc: RebalanceInProgressError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(CollaboratorFailureError)
async def collaborator_failure_error_handler(request, exc: CollaboratorFailureError):
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /metrics, /animals, /barns
app.include_router(health.router)
app.include_router(animals.router, prefix="/animals")
app.include_router(barns.router, prefix="/barns")
