"""
Configuração do logging estruturado (structlog).

A biblioteca apenas obtém loggers via structlog.get_logger(); scripts e
hosts chamam configure_logging() uma vez na inicialização.
"""

import logging
import sys

import structlog


def configure_logging(level: str = 'INFO', json_output: bool = True) -> None:
    """
    Configura structlog para o processo corrente.

    Args:
        level: Nível mínimo (DEBUG, INFO, WARNING, ERROR)
        json_output: Se True, renderiza JSON; caso contrário, saída de console
    """
    log_level = getattr(logging, level.upper())

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
