import logging
import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

from backend.core import config
from backend.routes import auth_routes, course_routes, schedule_routes
from backend.store import CatalogStore, create_store

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s',
    )


async def http_error_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={'error': exc.detail},
        headers=getattr(exc, 'headers', None),
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug('Rejected request to %s: %s', request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={'error': 'Invalid request'})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return JSONResponse(status_code=500, content={'error': 'Internal server error'})


async def log_requests(request: Request, call_next):
    start_time = time.perf_counter()
    response = await call_next(request)
    process_time = round((time.perf_counter() - start_time) * 1000, 2)
    logger.info(
        '%s %s | Status: %s | Time: %sms',
        request.method,
        request.url.path,
        response.status_code,
        process_time,
    )
    response.headers['X-Process-Time'] = f'{process_time}ms'
    return response


def create_app(store: CatalogStore | None = None) -> FastAPI:
    config.validate_runtime_config()
    configure_logging()

    app = FastAPI(title='Course Catalog API')
    app.state.store = store or create_store()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=['*'],
        allow_headers=['*'],
    )
    app.middleware('http')(log_requests)

    app.add_exception_handler(HTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get('/')
    def root():
        return {'status': 'Course Catalog API Running'}

    app.include_router(auth_routes.router, prefix=f'{config.API_PREFIX}/auth')
    app.include_router(course_routes.router, prefix=f'{config.API_PREFIX}/courses')
    app.include_router(schedule_routes.router, prefix=f'{config.API_PREFIX}/me')

    if config.FRONTEND_DIR:
        frontend_dir = Path(config.FRONTEND_DIR)
        if frontend_dir.is_dir():
            app.mount('/app', StaticFiles(directory=str(frontend_dir), html=True), name='frontend')
        else:
            logger.warning('FRONTEND_DIR %s is not a directory; frontend not mounted', frontend_dir)

    return app


app = create_app()
