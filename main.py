from contextlib import asynccontextmanager
from fastapi import Request, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from bson.errors import InvalidId
from database import DataBase, close_mongo_connection, connect_to_mongo
from routes import register_routes
from settings import Settings, get_settings
from supervisor import Supervisor
from util.logging_config import setup_logging
from util.response import Status, error, generate_response
import logging
import uvicorn
import os

logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await connect_to_mongo(app.state.db, settings)
        logger.info("Worker %d connected", os.getpid())
        yield
        await close_mongo_connection(app.state.db)

    app = FastAPI(title="Mahasiswa", lifespan=lifespan)
    app.state.settings = settings
    app.state.db = DataBase()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Route table
    register_routes(app)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error(
            exc.status_code,
            generate_response(Status.error, exc.status_code, request.method, exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return error(
            422,
            generate_response(
                Status.error, 422, request.method, "Validation error", data=exc.errors()
            ),
        )

    # Malformed ObjectId from the data accessor
    @app.exception_handler(InvalidId)
    async def invalid_id_handler(request: Request, exc: InvalidId):
        return error(
            400, generate_response(Status.error, 400, request.method, str(exc))
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error(
            500,
            generate_response(
                Status.error, 500, request.method, "An internal server error occurred"
            ),
        )

    return app


def run_worker(settings: Settings, sockets: list):
    """
    Worker process body: build the app and serve on the inherited sockets
    """
    setup_logging(settings.LOG_LEVEL)
    app = create_app(settings)
    config = uvicorn.Config(
        app=app, host=settings.HOST, port=settings.PORT, log_config=None
    )
    uvicorn.Server(config).run(sockets=sockets)


def main():
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    # Bound once in the parent, every worker accepts on the same socket
    bind_config = uvicorn.Config(app=None, host=settings.HOST, port=settings.PORT)
    sock = bind_config.bind_socket()
    supervisor = Supervisor(settings, target=run_worker, sockets=[sock])
    supervisor.run()


if __name__ == "__main__":
    main()
