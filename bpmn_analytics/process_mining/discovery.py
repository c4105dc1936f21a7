"""
Descoberta de processos a partir de event logs.

Orquestra o pipeline de mineração:
1. Extração de traces por case
2. Construção do directly-follows graph
3. Síntese do grafo de processo
"""

import time
from dataclasses import dataclass
from typing import Dict, List, Sequence

import structlog

from ..models.graph import ProcessGraph
from .dfg import DirectlyFollowsGraph, build_dfg
from .graph_synthesizer import synthesize_graph
from .trace_extractor import RawEvent, extract_traces

logger = structlog.get_logger()


@dataclass(frozen=True)
class DiscoveryResult:
    """Resultado de uma execução de descoberta."""

    graph: ProcessGraph
    dfg: DirectlyFollowsGraph
    traces: Dict[str, List[str]]

    # Estatísticas do log
    case_count: int
    event_count: int
    variant_count: int
    discovery_time: float

    def __str__(self) -> str:
        """Representação string do resultado."""
        lines = [
            f"Process Discovery Results",
            f"",
            f"Log Statistics:",
            f"   • Cases: {self.case_count}",
            f"   • Events: {self.event_count}",
            f"   • Variants: {self.variant_count}",
            f"",
            f"Directly-Follows Graph:",
            f"   • Activities: {len(self.dfg.nodes)}",
            f"   • Relations: {len(self.dfg.relations)}",
            f"",
            f"Process Graph:",
            f"   • Nodes: {len(self.graph.nodes)}",
            f"   • Edges: {len(self.graph.edges)}",
        ]
        return "\n".join(lines)

    def metadata(self) -> Dict[str, float]:
        return {
            'case_count': self.case_count,
            'event_count': self.event_count,
            'variants': self.variant_count,
            'discovery_time': self.discovery_time,
        }


def count_variants(traces: Dict[str, List[str]]) -> int:
    """Número de sequências de atividades distintas."""
    return len({tuple(trace) for trace in traces.values()})


class MiningEngine:
    """Motor de descoberta de modelos de processo a partir de event logs."""

    def discover(self, events: Sequence[RawEvent]) -> DiscoveryResult:
        """
        Descobre o grafo de processo de um event log.

        Cada chamada constrói traces, DFG e grafo do zero; execuções
        independentes não compartilham estado.

        Args:
            events: Eventos (Event ou dicts com caseId, activity, timestamp)

        Returns:
            DiscoveryResult com grafo, DFG, traces e metadados

        Raises:
            EmptyLogError: Se o log está vazio
            MalformedEventError: Se algum evento é inválido
            NodeIdCollisionError: Se duas atividades geram o mesmo ID de nó
        """
        logger.info("[MiningEngine.discover] - starting_discovery", events=len(events))

        traces = extract_traces(events)
        dfg = build_dfg(traces)
        graph = synthesize_graph(dfg)

        result = DiscoveryResult(
            graph=graph,
            dfg=dfg,
            traces=traces,
            case_count=len(traces),
            event_count=len(events),
            variant_count=count_variants(traces),
            discovery_time=time.time(),
        )

        logger.info(
            "[MiningEngine.discover] - discovery_completed",
            cases=result.case_count,
            variants=result.variant_count,
            nodes=len(graph.nodes),
            edges=len(graph.edges)
        )

        return result
