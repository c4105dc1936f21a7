"""
Graph Metrics Engine - métricas estruturais e de performance.

Funções puras de um ProcessGraph (minerado ou vindo de um parser BPMN):
- Complexidade (McCabe, peso cognitivo, pontos de decisão)
- Performance estimada (gargalos, duração, espera, caminho crítico)
- Estatísticas básicas
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

import networkx as nx
import structlog

from ..config import AnalysisConfig
from ..models.graph import ProcessGraph
from . import traversal
from .compliance import ComplianceReport

logger = structlog.get_logger()


@dataclass(frozen=True)
class BasicMetrics:
    """Contagens básicas do modelo."""

    element_count: int
    task_count: int
    gateway_count: int
    event_count: int
    lane_count: int
    start_events: Tuple[Dict[str, Optional[str]], ...]
    end_events: Tuple[Dict[str, Optional[str]], ...]

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['start_events'] = list(data['start_events'])
        data['end_events'] = list(data['end_events'])
        return data


@dataclass(frozen=True)
class ComplexityMetrics:
    """Métricas de complexidade estrutural."""

    cyclomatic: int
    cognitive_weight: float
    decision_points: int
    parallel_paths: int
    role_handovers: int
    components: int
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PerformanceMetrics:
    """Estimativas de performance."""

    estimated_duration: int
    bottlenecks: Tuple[str, ...]
    estimated_wait_time: int
    critical_path: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'estimated_duration': self.estimated_duration,
            'bottlenecks': list(self.bottlenecks),
            'estimated_wait_time': self.estimated_wait_time,
            'critical_path': list(self.critical_path),
        }


@dataclass(frozen=True)
class GraphMetrics:
    """Snapshot das métricas de um grafo, entrada do motor de recomendações."""

    complexity: ComplexityMetrics
    performance: PerformanceMetrics
    compliance: ComplianceReport


class GraphMetricsEngine:
    """
    Engine para cálculo de métricas de grafos de processo.

    Nunca lança exceção para grafos bem formados; grafo sem nós resulta em
    complexidade 0 e lista de gargalos vazia.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Inicializa engine de métricas.

        Args:
            config: Limiares da análise (padrão: AnalysisConfig())
        """
        self.config = config or AnalysisConfig()

# Complexidade
    def cyclomatic_complexity(self, graph: ProcessGraph) -> int:
        """McCabe: E - N + 2P, com P contado por travessia."""
        components = traversal.connected_components(graph)
        return len(graph.edges) - len(graph.nodes) + 2 * components

    def cognitive_weight(self, graph: ProcessGraph) -> float:
        return len(graph.nodes) * 1.5 + len(graph.gateways) * 2

    def decision_points(self, graph: ProcessGraph) -> int:
        return len(graph.gateways)

    def parallel_paths(self, graph: ProcessGraph) -> int:
        return sum(1 for g in graph.gateways if 'parallel' in g.type.lower()) + 1

    def role_handovers(self, graph: ProcessGraph) -> int:
        """Arestas entre nós de lanes diferentes (ambos com lane definida)."""
        handovers = 0
        for edge in graph.edges.values():
            source = graph.nodes.get(edge.source)
            target = graph.nodes.get(edge.target)
            if source is None or target is None:
                continue
            if source.lane and target.lane and source.lane != target.lane:
                handovers += 1
        return handovers

    def complexity(self, graph: ProcessGraph) -> ComplexityMetrics:
        """Calcula todas as métricas de complexidade."""
        components = traversal.connected_components(graph)
        cyclomatic = len(graph.edges) - len(graph.nodes) + 2 * components
        decision_points = self.decision_points(graph)

        return ComplexityMetrics(
            cyclomatic=cyclomatic,
            cognitive_weight=self.cognitive_weight(graph),
            decision_points=decision_points,
            parallel_paths=self.parallel_paths(graph),
            role_handovers=self.role_handovers(graph),
            components=components,
            score=min(100, cyclomatic * 5 + decision_points * 10),
        )

# Performance
    def bottlenecks(self, graph: ProcessGraph) -> List[str]:
        """Nós com mais entradas que o limiar, em ordem de inserção."""
        threshold = self.config.bottleneck_incoming_threshold
        return [n.id for n in graph.nodes.values() if len(n.incoming) > threshold]

    def estimated_duration(self, graph: ProcessGraph) -> int:
        """
        Duração estimada em minutos.

        Política fixa: minutes_per_task por tarefa (média, não medição).
        """
        return len(graph.tasks()) * self.config.minutes_per_task

    def critical_path(self, graph: ProcessGraph) -> List[str]:
        """
        Caminho mais longo a partir dos eventos de início.

        Arestas de retorno (laços) são descartadas; o comprimento é medido
        em número de tarefas, depois pela soma dos pesos das arestas e por
        fim pelo número de nós.

        Returns:
            IDs dos nós do caminho (vazio para grafo sem nós)
        """
        if not graph.nodes:
            return []

        roots = traversal.entry_nodes(graph)
        dag = traversal.acyclic_graph(graph)
        reachable = set(roots).union(*(nx.descendants(dag, root) for root in roots))
        dag = dag.subgraph(reachable).copy()

        # Peso composto: tarefa domina peso, que domina comprimento
        step = len(dag) + 1
        task_step = (sum(w for _, _, w in dag.edges(data='weight')) + 1) * step

        def rank(node_id: str, weight: float) -> float:
            return int(graph.nodes[node_id].is_task) * task_step + weight * step + 1

        for _, target, data in dag.edges(data=True):
            data['rank'] = rank(target, data['weight'])

        source = object()
        for root in roots:
            dag.add_edge(source, root, rank=rank(root, 0))

        return nx.dag_longest_path(dag, weight='rank')[1:]

    def performance(self, graph: ProcessGraph) -> PerformanceMetrics:
        """Calcula as estimativas de performance."""
        bottlenecks = self.bottlenecks(graph)

        return PerformanceMetrics(
            estimated_duration=self.estimated_duration(graph),
            bottlenecks=tuple(bottlenecks),
            estimated_wait_time=len(bottlenecks) * self.config.wait_minutes_per_bottleneck,
            critical_path=tuple(self.critical_path(graph)),
        )

# Estatísticas básicas
    def basic(self, graph: ProcessGraph) -> BasicMetrics:
        lanes = {n.lane for n in graph.nodes.values() if n.lane}

        return BasicMetrics(
            element_count=len(graph.nodes),
            task_count=len(graph.tasks()),
            gateway_count=len(graph.gateways),
            event_count=len(graph.start_events) + len(graph.end_events),
            lane_count=len(lanes),
            start_events=tuple({'id': n.id, 'name': n.name} for n in graph.start_events),
            end_events=tuple({'id': n.id, 'name': n.name} for n in graph.end_events),
        )
