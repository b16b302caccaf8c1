"""Configuração de logging da Ludoteca API.

Configura o sistema de logging usando Loguru com diferentes
níveis, formatação e rotação de arquivos.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger

from ludoteca.core.config import settings


LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging() -> None:
    """Configura o sistema de logging da aplicação.

    Remove handlers padrão e configura novos com formatação
    personalizada, níveis apropriados e rotação de arquivos.
    """
    # Remove handler padrão do loguru
    logger.remove()

    # Handler para console (stdout)
    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=settings.LOG_LEVEL,
        colorize=True,
        backtrace=True,
        diagnose=settings.DEBUG,
    )

    if settings.LOG_TO_FILE:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)

        # Logs gerais
        logger.add(
            log_dir / "ludoteca.log",
            format=LOG_FORMAT,
            level="INFO",
            rotation="10 MB",
            retention="30 days",
            compression="zip",
        )

        # Apenas erros
        logger.add(
            log_dir / "errors.log",
            format=LOG_FORMAT,
            level="ERROR",
            rotation="5 MB",
            retention="60 days",
            compression="zip",
            backtrace=True,
        )

        # Acesso HTTP
        logger.add(
            log_dir / "access.log",
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{extra[method]} {extra[url]} | "
                "Status: {extra[status_code]} | "
                "Duration: {extra[duration]}ms | "
                "IP: {extra[client_ip]}"
            ),
            level="INFO",
            rotation="20 MB",
            retention="90 days",
            compression="zip",
            filter=lambda record: "access" in record["extra"],
        )

    configure_external_loggers()

    logger.info("Sistema de logging configurado com sucesso")


def configure_external_loggers() -> None:
    """Ajusta níveis de log das bibliotecas externas."""
    external_loggers = {
        "sqlalchemy.engine": "WARNING",
        "sqlalchemy.pool": "WARNING",
        "uvicorn": "INFO",
        "uvicorn.access": "WARNING",
        "redis": "WARNING",
        "passlib": "ERROR",
    }

    for logger_name, level in external_loggers.items():
        logging.getLogger(logger_name).setLevel(getattr(logging, level))


def log_request(
    method: str,
    url: str,
    status_code: int,
    duration: float,
    client_ip: str,
    user_agent: str,
    user_id: Optional[str] = None
) -> None:
    """Registra log de requisição HTTP.

    Args:
        method: Método HTTP
        url: URL da requisição
        status_code: Código de status da resposta
        duration: Duração da requisição em ms
        client_ip: IP do cliente
        user_agent: User-Agent do cliente
        user_id: ID do usuário (se autenticado)
    """
    context = {
        "access": True,
        "method": method,
        "url": url,
        "status_code": status_code,
        "duration": round(duration, 2),
        "client_ip": client_ip,
        "user_agent": user_agent[:100],
    }

    if user_id:
        context["user_id"] = user_id

    logger.bind(**context).info(f"{method} {url} - {status_code}")


def log_security_event(
    event_type: str,
    client_ip: Optional[str] = None,
    user_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> None:
    """Registra evento de segurança.

    Args:
        event_type: Tipo do evento (login_failed, forbidden, etc.)
        client_ip: IP do cliente
        user_id: ID ou email do usuário (se disponível)
        details: Detalhes adicionais do evento
    """
    context = {
        "security": True,
        "event_type": event_type,
        "client_ip": client_ip or "unknown",
    }

    if user_id:
        context["user_id"] = user_id
    if details:
        context.update(details)

    logger.bind(**context).warning(f"Security event: {event_type}")
