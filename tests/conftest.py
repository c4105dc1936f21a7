"""
Fixtures compartilhadas dos testes.
"""

import random

import pytest

from bpmn_analytics.config import AnalysisConfig
from bpmn_analytics.models.graph import Edge, Node, ProcessGraph


def build_graph(nodes, edges) -> ProcessGraph:
    """
    Monta um ProcessGraph a partir de tuplas.

    Args:
        nodes: (id, type[, name[, lane]])
        edges: (source, target[, weight[, condition]])
    """
    graph = ProcessGraph()
    for entry in nodes:
        node_id, node_type = entry[0], entry[1]
        name = entry[2] if len(entry) > 2 else node_id.title()
        lane = entry[3] if len(entry) > 3 else None
        graph.add_node(Node(id=node_id, name=name, type=node_type, lane=lane))
    for entry in edges:
        source, target = entry[0], entry[1]
        graph.add_edge(Edge(
            id=f"{source}->{target}",
            source=source,
            target=target,
            weight=entry[2] if len(entry) > 2 else None,
            condition=entry[3] if len(entry) > 3 else None,
        ))
    graph.rebuild_adjacency()
    return graph


@pytest.fixture
def make_graph():
    """Fábrica de grafos a partir de tuplas (ver build_graph)."""
    return build_graph


@pytest.fixture
def config():
    """Configuração padrão."""
    return AnalysisConfig()


@pytest.fixture
def ab_events():
    """Dois cases com a mesma sequência A -> B."""
    return [
        {'case': '1', 'activity': 'A', 't': '2024-01-01T00:00:00Z'},
        {'case': '1', 'activity': 'B', 't': '2024-01-01T00:01:00Z'},
        {'case': '2', 'activity': 'A', 't': '2024-01-01T00:02:00Z'},
        {'case': '2', 'activity': 'B', 't': '2024-01-01T00:03:00Z'},
    ]


@pytest.fixture
def random_traces():
    """
    Fábrica de logs gerados: seed -> mapeamento case_id -> atividades.

    Traces de 0 a 8 atividades sorteadas de um alfabeto fixo (com repetição,
    o que gera laços e retrabalho).
    """
    activities = ['Register', 'Check order', 'Approve', 'Pay invoice', 'Ship', 'Archive']

    def _generate(seed):
        rng = random.Random(seed)
        return {
            f"case-{case}": [rng.choice(activities) for _ in range(rng.randint(0, 8))]
            for case in range(rng.randint(1, 12))
        }

    return _generate


@pytest.fixture
def linear_graph():
    """start -> a -> b -> end (BPMN bem formado, sem gateways)."""
    return build_graph(
        nodes=[
            ('start', 'startEvent', 'Order received'),
            ('a', 'task', 'Check order'),
            ('b', 'userTask', 'Ship order'),
            ('end', 'endEvent', 'Order shipped'),
        ],
        edges=[('start', 'a'), ('a', 'b'), ('b', 'end')],
    )


@pytest.fixture
def gateway_graph():
    """
    Processo com decisão exclusiva e junção.

        start -> review -> xor -> approve -> join -> end
                             \\-> reject  -/
    """
    return build_graph(
        nodes=[
            ('start', 'bpmn:StartEvent', 'Request'),
            ('review', 'bpmn:UserTask', 'Review request'),
            ('xor', 'bpmn:ExclusiveGateway', 'Approved?'),
            ('approve', 'bpmn:Task', 'Approve'),
            ('reject', 'bpmn:Task', 'Reject'),
            ('join', 'bpmn:ExclusiveGateway', None),
            ('end', 'bpmn:EndEvent', 'Done'),
        ],
        edges=[
            ('start', 'review'),
            ('review', 'xor'),
            ('xor', 'approve', None, 'yes'),
            ('xor', 'reject', None, 'no'),
            ('approve', 'join'),
            ('reject', 'join'),
            ('join', 'end'),
        ],
    )
