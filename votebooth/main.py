# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pymongo.errors import PyMongoError

from votebooth.candidate_registry import CandidateRegistry
from votebooth.config import Settings, get_settings, load_seed_candidates
from votebooth.database.connection import MongoConnector
from votebooth.errors import VotingError
from votebooth.logs import configure_logging
from votebooth.results import ResultsAggregator
from votebooth.routes.admin_routes import router as admin_router
from votebooth.routes.auth_routes import router as auth_router
from votebooth.routes.candidate_routes import router as candidate_router
from votebooth.routes.vote_routes import vote_router
from votebooth.storage_mongo import VoteLedger, VoterStore
from votebooth.voting import VotingService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, client=None) -> FastAPI:
    """
    Build the API. ``client`` replaces the real MongoClient (tests use mongomock).
    Indexes and seed candidates are applied on startup; the connection is
    closed on shutdown.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    seed_candidates = load_seed_candidates(settings)

    connector = MongoConnector(settings, client=client)
    voters = VoterStore(connector)
    ledger = VoteLedger(connector)
    registry = CandidateRegistry(connector)
    aggregator = ResultsAggregator(registry, voters, ledger, fallback_candidates=seed_candidates)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        connector.ensure_indexes()
        registry.seed(seed_candidates)
        logger.info(f"Connected to MongoDB: {settings.mongo_db}")
        yield
        connector.close()

    app = FastAPI(title="Votebooth - Online Voting API", lifespan=lifespan)
    app.state.settings = settings
    app.state.connector = connector
    app.state.voter_store = voters
    app.state.vote_ledger = ledger
    app.state.registry = registry
    app.state.aggregator = aggregator
    app.state.voting_service = VotingService(voters, registry, ledger, aggregator)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(VotingError)
    async def voting_error_handler(request: Request, exc: VotingError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return JSONResponse(status_code=422, content={"message": message or "Invalid request"})

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError):
        logger.error(f"Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"message": "Database error, request not processed"})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(status_code=500, content={"message": "Failed to process request"})

    app.include_router(auth_router)
    app.include_router(candidate_router)
    app.include_router(vote_router)
    app.include_router(admin_router)

    @app.get("/health", tags=["Root"])
    def health_check():
        if connector.ping():
            return {"status": "healthy", "database": "MongoDB"}
        return JSONResponse(status_code=503, content={"status": "degraded", "database": "unavailable"})

    @app.get("/", tags=["Root"])
    def read_root():
        return {"message": "Welcome to the Votebooth API"}

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    return app


app = create_app()
