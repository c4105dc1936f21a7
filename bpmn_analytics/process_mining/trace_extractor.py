"""
Extrator de traces.

Agrupa um event log plano em sequências ordenadas de atividades por case.
"""

from typing import Any, Dict, List, Mapping, Sequence, Union

import structlog
from pydantic import ValidationError

from ..exceptions import EmptyLogError, MalformedEventError
from ..models.events import Event

logger = structlog.get_logger()

Trace = List[str]
RawEvent = Union[Event, Mapping[str, Any]]


def coerce_events(events: Sequence[RawEvent]) -> List[Event]:
    """
    Valida eventos crus (dicts) em modelos Event.

    Raises:
        MalformedEventError: No primeiro evento inválido (nenhum resultado
            parcial é retornado)
    """
    validated = []

    for index, raw in enumerate(events):
        if isinstance(raw, Event):
            validated.append(raw)
            continue
        try:
            validated.append(Event.model_validate(raw))
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in err['loc']) or 'event'
                for err in e.errors()
            )
            logger.error(
                "[coerce_events] - malformed_event",
                index=index,
                fields=fields
            )
            raise MalformedEventError(index, f"invalid field(s): {fields}") from e

    return validated


def extract_traces(events: Sequence[RawEvent]) -> Dict[str, Trace]:
    """
    Agrupa eventos por case em traces ordenados por timestamp.

    A ordenação é estável: eventos com o mesmo timestamp mantêm a ordem
    relativa da entrada. Nenhum evento é descartado.

    Args:
        events: Sequência de Event (ou dicts com caseId, activity, timestamp)

    Returns:
        Mapeamento case_id -> lista de atividades, na ordem de primeira
        aparição dos cases após a ordenação

    Raises:
        EmptyLogError: Se não há eventos
        MalformedEventError: Se algum evento é inválido
    """
    if not events:
        logger.error("[extract_traces] - empty_event_log")
        raise EmptyLogError("Event log is empty")

    validated = coerce_events(events)
    ordered = sorted(validated, key=lambda event: event.timestamp)

    traces: Dict[str, Trace] = {}
    for event in ordered:
        traces.setdefault(event.case_id, []).append(event.activity)

    logger.info(
        "[extract_traces] - traces_extracted",
        events=len(ordered),
        cases=len(traces)
    )

    return traces
