"""Ludoteca API - FastAPI Main Application

API REST de catálogo de jogos, categorias, editoras e usuários.
Arquitetura baseada em FastAPI com SQLAlchemy async e cache com tags.
"""

import traceback
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from prometheus_client import make_asgi_app
from sqlalchemy import text

from ludoteca.api.api import api_router
from ludoteca.core.cache import create_cache
from ludoteca.core.config import settings
from ludoteca.core.database import create_tables, engine
from ludoteca.core.exceptions import DatabaseError, LudotecaException, Violation
from ludoteca.core.logging import setup_logging
from ludoteca.core.middleware import LoggingMiddleware, SecurityHeadersMiddleware

# Partes do "loc" do FastAPI que não fazem parte do nome do campo
_LOCATION_PARTS = {"body", "query", "path", "header", "cookie"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia o ciclo de vida da aplicação.

    Configura logging, prepara o banco de dados e conecta o cache
    durante o startup. Libera recursos durante o shutdown.
    """
    # Startup
    setup_logging()
    logger.info("🚀 Iniciando Ludoteca API")

    if settings.AUTO_CREATE_TABLES:
        await create_tables()

    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        logger.info("✅ Conexão com banco de dados estabelecida")
    except Exception as e:
        logger.error(f"❌ Erro ao conectar com banco de dados: {e}")
        raise

    await app.state.cache.connect()
    logger.info(f"🎮 Ludoteca API iniciada (cache: {settings.CACHE_BACKEND})")

    yield

    # Shutdown
    logger.info("🛑 Finalizando Ludoteca API")
    await app.state.cache.close()
    await engine.dispose()
    logger.info("👋 Ludoteca API finalizada")


def _request_violations(exc: RequestValidationError):
    violations = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part not in _LOCATION_PARTS)
        violations.append(Violation(field=field, rule=err["type"], message=err["msg"]))
    return violations


def create_application() -> FastAPI:
    """Factory para criar a aplicação FastAPI.

    Configura middlewares, rotas, cache, handlers de exceção e documentação.

    Returns:
        FastAPI: Instância configurada da aplicação
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.DESCRIPTION,
        version=settings.VERSION,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs" if settings.DEBUG else None,
        redoc_url=f"{settings.API_PREFIX}/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Cache compartilhado pelas listagens
    app.state.cache = create_cache(
        settings.CACHE_BACKEND,
        redis_url=settings.REDIS_URL,
        prefix=settings.CACHE_PREFIX,
        default_ttl=settings.CACHE_TTL,
        max_entries=settings.CACHE_MAX_ENTRIES,
    )

    # Middlewares
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(LoggingMiddleware)

    # CORS
    if settings.BACKEND_CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Compressão
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Rotas da API
    app.include_router(api_router, prefix=settings.API_PREFIX)

    # Métricas Prometheus
    if settings.ENABLE_METRICS:
        app.mount("/metrics", make_asgi_app())

    # Health check
    @app.get("/health")
    async def health_check():
        """Endpoint de health check para monitoramento."""
        return {
            "status": "healthy",
            "service": settings.PROJECT_NAME,
            "version": settings.VERSION,
        }

    # Exception handlers
    @app.exception_handler(DatabaseError)
    async def database_exception_handler(request: Request, exc: DatabaseError):
        """Handler para erros de banco de dados."""
        logger.error(f"Database Error: {exc.message} - {exc.details}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "database_error",
                "message": "Erro interno do banco de dados",
                "details": exc.details if settings.DEBUG else None,
            },
        )

    @app.exception_handler(LudotecaException)
    async def ludoteca_exception_handler(request: Request, exc: LudotecaException):
        """Handler para exceções customizadas da Ludoteca."""
        if exc.status_code >= 500:
            logger.error(f"Ludoteca Exception: {exc.message} - {exc.details}")
        else:
            logger.warning(f"{exc.error_code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "details": exc.details,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        """Erros de parâmetros/corpo da requisição viram 400 com violações."""
        violations = _request_violations(exc)
        logger.warning(f"Validation Error em {request.method} {request.url.path}: {len(violations)} violações")
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Dados inválidos",
                "details": {"violations": violations},
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handler geral para exceções não tratadas."""
        error_details = traceback.format_exc()
        logger.error(f"Unhandled Exception in {request.method} {request.url}: {exc}")
        logger.error(f"Full traceback: {error_details}")
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "Erro interno do servidor",
                "details": error_details if settings.DEBUG else None,
            },
        )

    return app


# Criar instância da aplicação
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ludoteca.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info",
    )
