"""
Integração com PM4Py.

Funcionalidades:
- Conversão de eventos para DataFrame no formato padrão PM4Py
- Descoberta do DFG pelo PM4Py (referência para validar o DFG próprio)
"""

from typing import Sequence

import pandas as pd
import structlog

from ..exceptions import ProcessMiningError
from .dfg import DirectlyFollowsGraph, relation_key
from .trace_extractor import RawEvent, coerce_events

try:
    import pm4py
    PM4PY_AVAILABLE = True
except ImportError:
    PM4PY_AVAILABLE = False

logger = structlog.get_logger()

CASE_COLUMN = 'case:concept:name'
ACTIVITY_COLUMN = 'concept:name'
TIMESTAMP_COLUMN = 'time:timestamp'


def events_to_dataframe(events: Sequence[RawEvent]) -> pd.DataFrame:
    """
    Converte eventos em DataFrame com as colunas padrão do PM4Py.

    A ordem das linhas segue a ordem de entrada; timestamps em UTC.

    Args:
        events: Eventos (Event ou dicts)

    Returns:
        DataFrame com case:concept:name, concept:name, time:timestamp
    """
    validated = coerce_events(events)

    df = pd.DataFrame({
        CASE_COLUMN: [e.case_id for e in validated],
        ACTIVITY_COLUMN: [e.activity for e in validated],
        TIMESTAMP_COLUMN: [e.timestamp for e in validated],
    })
    df[TIMESTAMP_COLUMN] = pd.to_datetime(df[TIMESTAMP_COLUMN], utc=True)

    return df


def discover_dfg_pm4py(events: Sequence[RawEvent]) -> DirectlyFollowsGraph:
    """
    Descobre o DFG usando pm4py.discover_dfg.

    Args:
        events: Eventos (Event ou dicts)

    Returns:
        DirectlyFollowsGraph equivalente ao retornado pelo PM4Py

    Raises:
        ProcessMiningError: Se PM4Py não está instalado ou a descoberta falhou
    """
    if not PM4PY_AVAILABLE:
        raise ProcessMiningError(
            "PM4Py is not installed. Run: pip install pm4py"
        )

    df = events_to_dataframe(events)

    logger.info("[discover_dfg_pm4py] - discovering_dfg", events=len(df))

    try:
        dfg, start_activities, end_activities = pm4py.discover_dfg(
            df,
            case_id_key=CASE_COLUMN,
            activity_key=ACTIVITY_COLUMN,
            timestamp_key=TIMESTAMP_COLUMN
        )
    except Exception as e:
        logger.error("[discover_dfg_pm4py] - dfg_discovery_failed", error=str(e))
        raise ProcessMiningError(f"PM4Py DFG discovery failed: {e}")

    result = DirectlyFollowsGraph(
        nodes=set(df[ACTIVITY_COLUMN].unique()),
        start_nodes=set(start_activities),
        end_nodes=set(end_activities),
        relations={
            relation_key(source, target): int(count)
            for (source, target), count in dfg.items()
        }
    )

    logger.info(
        "[discover_dfg_pm4py] - dfg_discovered",
        activities=len(result.nodes),
        relations=len(result.relations)
    )

    return result
