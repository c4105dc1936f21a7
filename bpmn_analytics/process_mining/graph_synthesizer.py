"""
Sintetizador de grafo de processo.

Converte um DFG em ProcessGraph: um nó de tarefa por atividade e um evento
de início sintético por atividade inicial.
"""

import re
from typing import Dict

import structlog

from ..exceptions import NodeIdCollisionError
from ..models.graph import START_EVENT, TASK, Edge, Node, ProcessGraph
from .dfg import DirectlyFollowsGraph

logger = structlog.get_logger()

_NON_ALPHANUMERIC = re.compile(r'[^a-zA-Z0-9]')

TASK_PREFIX = 'task_'
START_PREFIX = 'start_'


def sanitize(activity: str) -> str:
    """Substitui caracteres não alfanuméricos por '_'."""
    return _NON_ALPHANUMERIC.sub('_', activity)


def task_id(activity: str) -> str:
    return f"{TASK_PREFIX}{sanitize(activity)}"


def start_id(activity: str) -> str:
    return f"{START_PREFIX}{sanitize(activity)}"


def edge_id(source_id: str, target_id: str) -> str:
    # '-' nunca ocorre em IDs sanitizados, então o par é recuperável
    return f"edge_{source_id}-{target_id}"


def synthesize_graph(dfg: DirectlyFollowsGraph) -> ProcessGraph:
    """
    Constrói um ProcessGraph a partir do DFG.

    - Um nó 'task' por atividade (ID task_<atividade sanitizada>), criados em
      ordem alfabética de atividade para IDs e ordem de inserção estáveis
    - Um nó 'startEvent' por atividade inicial, ligado à tarefa por uma
      aresta sem condição
    - Uma aresta por relação do DFG, com peso = contagem (ordenadas por par
      origem/destino)
    - Nenhum evento de fim sintético (atividades finais são alcançáveis
      transitivamente)

    Args:
        dfg: Directly-follows graph

    Returns:
        ProcessGraph com adjacência recalculada a partir das arestas

    Raises:
        NodeIdCollisionError: Se duas atividades distintas geram o mesmo ID
    """
    graph = ProcessGraph()
    owners: Dict[str, str] = {}

    for activity in sorted(dfg.nodes):
        node_id = task_id(activity)
        if node_id in owners:
            logger.error(
                "[synthesize_graph] - node_id_collision",
                node_id=node_id,
                activities=[owners[node_id], activity]
            )
            raise NodeIdCollisionError(node_id, owners[node_id], activity)
        owners[node_id] = activity
        graph.add_node(Node(id=node_id, name=activity, type=TASK))

    for activity in sorted(dfg.start_nodes):
        source = graph.add_node(Node(id=start_id(activity), type=START_EVENT))
        target_id = task_id(activity)
        graph.add_edge(Edge(
            id=edge_id(source.id, target_id),
            source=source.id,
            target=target_id,
            condition=None
        ))

    for source_activity, target_activity, count in sorted(dfg.pairs()):
        source_id = task_id(source_activity)
        target_id = task_id(target_activity)
        graph.add_edge(Edge(
            id=edge_id(source_id, target_id),
            source=source_id,
            target=target_id,
            weight=count
        ))

    graph.rebuild_adjacency()

    logger.info(
        "[synthesize_graph] - graph_synthesized",
        nodes=len(graph.nodes),
        edges=len(graph.edges),
        start_events=len(graph.start_events)
    )

    return graph
