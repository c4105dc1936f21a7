"""
Grafo de processo genérico (nós e arestas).

Representação compartilhada por modelos minerados (via DFG) e por diagramas
BPMN entregues por um parser externo.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..exceptions import GraphIntegrityError

START_EVENT = 'startEvent'
END_EVENT = 'endEvent'
TASK = 'task'


@dataclass
class Node:
    """Nó do grafo (tarefa, evento ou gateway)."""

    id: str
    name: Optional[str] = None
    type: str = TASK
    incoming: List[str] = field(default_factory=list)
    outgoing: List[str] = field(default_factory=list)
    lane: Optional[str] = None

    @property
    def is_task(self) -> bool:
        return 'task' in self.type.lower()

    @property
    def is_gateway(self) -> bool:
        return 'gateway' in self.type.lower()

    @property
    def is_start_event(self) -> bool:
        return 'startevent' in self.type.lower()

    @property
    def is_end_event(self) -> bool:
        return 'endevent' in self.type.lower()

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'incoming': list(self.incoming),
            'outgoing': list(self.outgoing),
        }
        if self.lane is not None:
            data['lane'] = self.lane
        return data


@dataclass
class Edge:
    """Aresta dirigida (sequence flow)."""

    id: str
    source: str
    target: str
    weight: Optional[int] = None
    condition: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'source': self.source,
            'target': self.target,
            'weight': self.weight,
            'condition': self.condition,
        }


@dataclass
class ProcessGraph:
    """
    Grafo de processo.

    Invariante: toda aresta referencia nós existentes e as listas
    incoming/outgoing de cada nó correspondem exatamente às arestas que o
    referenciam. Use rebuild_adjacency() após montar o grafo e
    check_integrity() para validar grafos vindos de fora.
    """

    nodes: Dict[str, Node] = field(default_factory=dict)
    edges: Dict[str, Edge] = field(default_factory=dict)
    start_events: List[Node] = field(default_factory=list)
    end_events: List[Node] = field(default_factory=list)
    gateways: List[Node] = field(default_factory=list)

    def add_node(self, node: Node) -> Node:
        """Registra um nó e o classifica como start/end/gateway pelo tipo."""
        self.nodes[node.id] = node
        if node.is_start_event:
            self.start_events.append(node)
        elif node.is_end_event:
            self.end_events.append(node)
        elif node.is_gateway:
            self.gateways.append(node)
        return node

    def add_edge(self, edge: Edge) -> Edge:
        self.edges[edge.id] = edge
        return edge

    def tasks(self) -> List[Node]:
        """Nós cujo tipo contém 'task' (case-insensitive), em ordem de inserção."""
        return [n for n in self.nodes.values() if n.is_task]

    def rebuild_adjacency(self) -> None:
        """Recalcula incoming/outgoing de todos os nós a partir das arestas."""
        for node in self.nodes.values():
            node.incoming = []
            node.outgoing = []

        for edge in self.edges.values():
            if edge.source in self.nodes:
                self.nodes[edge.source].outgoing.append(edge.id)
            if edge.target in self.nodes:
                self.nodes[edge.target].incoming.append(edge.id)

    def check_integrity(self) -> None:
        """
        Valida o invariante do grafo.

        Raises:
            GraphIntegrityError: Se alguma aresta referencia nó inexistente ou
                se incoming/outgoing divergem do conjunto de arestas
        """
        expected_in: Dict[str, List[str]] = {node_id: [] for node_id in self.nodes}
        expected_out: Dict[str, List[str]] = {node_id: [] for node_id in self.nodes}

        for edge in self.edges.values():
            for endpoint in (edge.source, edge.target):
                if endpoint not in self.nodes:
                    raise GraphIntegrityError(
                        f"Edge '{edge.id}' references unknown node '{endpoint}'"
                    )
            expected_out[edge.source].append(edge.id)
            expected_in[edge.target].append(edge.id)

        for node in self.nodes.values():
            if sorted(node.incoming) != sorted(expected_in[node.id]):
                raise GraphIntegrityError(
                    f"Node '{node.id}' incoming {node.incoming} != {expected_in[node.id]}"
                )
            if sorted(node.outgoing) != sorted(expected_out[node.id]):
                raise GraphIntegrityError(
                    f"Node '{node.id}' outgoing {node.outgoing} != {expected_out[node.id]}"
                )

    def to_dict(self) -> Dict[str, Any]:
        """Representação em dicts/listas/primitivos para exportadores e UI."""
        return {
            'nodes': {node_id: node.to_dict() for node_id, node in self.nodes.items()},
            'edges': {edge_id: edge.to_dict() for edge_id, edge in self.edges.items()},
            'start_events': [n.id for n in self.start_events],
            'end_events': [n.id for n in self.end_events],
            'gateways': [n.id for n in self.gateways],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProcessGraph':
        """
        Constrói um grafo a partir da saída de um parser BPMN externo.

        Aceita 'nodes'/'edges' como lista ou como mapeamento id -> dados.
        Listas incoming/outgoing eventualmente fornecidas são ignoradas e
        recalculadas a partir das arestas.

        Raises:
            GraphIntegrityError: Se falta id, source ou target, ou se alguma
                aresta referencia nó inexistente
        """
        graph = cls()

        for index, raw in enumerate(_iter_entries(data.get('nodes', []))):
            graph.add_node(Node(
                id=_require(raw, 'id', 'Node', index),
                name=raw.get('name'),
                type=raw.get('type', TASK),
                lane=raw.get('lane'),
            ))

        for index, raw in enumerate(_iter_entries(data.get('edges', []))):
            graph.add_edge(Edge(
                id=_require(raw, 'id', 'Edge', index),
                source=_require(raw, 'source', 'Edge', index),
                target=_require(raw, 'target', 'Edge', index),
                weight=raw.get('weight'),
                condition=raw.get('condition'),
            ))

        graph.rebuild_adjacency()
        graph.check_integrity()
        return graph


def _iter_entries(entries: Any) -> Iterable[Dict[str, Any]]:
    if isinstance(entries, dict):
        for key, value in entries.items():
            yield {'id': key, **value}
    else:
        yield from entries


def _require(raw: Dict[str, Any], key: str, kind: str, index: int) -> Any:
    if raw.get(key) is None:
        raise GraphIntegrityError(f"{kind} #{index} is missing required key '{key}'")
    return raw[key]
