"""Middlewares customizados da Ludoteca API.

Implementa logging de acesso e headers de segurança.
"""

import time
from typing import Callable, Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from ludoteca.core.logging import log_request


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware para logging de requisições HTTP.

    Registra cada requisição com duração, status, IP do cliente e,
    quando autenticado, o id do usuário.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Processa requisição e registra logs."""
        start_time = time.time()

        client_ip = self._get_client_ip(request)
        user_agent = request.headers.get("user-agent", "Unknown")

        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            logger.exception(f"Erro durante processamento da requisição: {e}")
            status_code = 500
            response = JSONResponse(
                status_code=500,
                content={
                    "error": "internal_server_error",
                    "message": "Erro interno do servidor",
                    "details": None,
                }
            )

        duration = (time.time() - start_time) * 1000  # em ms

        log_request(
            method=request.method,
            url=str(request.url),
            status_code=status_code,
            duration=duration,
            client_ip=client_ip,
            user_agent=user_agent,
            user_id=getattr(request.state, "user_id", None)
        )

        response.headers["X-Process-Time"] = str(round(duration, 2))
        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extrai IP real do cliente considerando proxies."""
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        return request.client.host if request.client else "unknown"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware para adicionar headers de segurança às respostas."""

    def __init__(self, app, security_headers: Optional[Dict[str, str]] = None):
        super().__init__(app)
        self.security_headers = security_headers or self._get_default_headers()

    def _get_default_headers(self) -> Dict[str, str]:
        return {
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "strict-origin-when-cross-origin",
        }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for header, value in self.security_headers.items():
            response.headers[header] = value

        # HSTS apenas para HTTPS
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        return response
