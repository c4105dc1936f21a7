"""
Algoritmos de travessia sobre ProcessGraph.

O grafo é projetado num networkx.DiGraph; arestas cujas pontas não existem
no grafo são ignoradas. Arestas paralelas (mesma origem e destino) viram uma
só, com a lista de IDs e o maior peso.
"""

from typing import Iterable, List, Optional, Set

import networkx as nx

from ..models.graph import Node, ProcessGraph


def to_networkx(graph: ProcessGraph, first: Iterable[str] = ()) -> nx.DiGraph:
    """
    Projeta um ProcessGraph num DiGraph.

    Args:
        graph: Grafo de processo
        first: Nós inseridos antes dos demais (define a ordem das travessias)

    Returns:
        DiGraph com atributos 'ids' e 'weight' nas arestas
    """
    digraph = nx.DiGraph()
    for node_id in first:
        digraph.add_node(node_id)
    digraph.add_nodes_from(graph.nodes)

    for edge in graph.edges.values():
        if edge.source not in graph.nodes or edge.target not in graph.nodes:
            continue
        if digraph.has_edge(edge.source, edge.target):
            data = digraph.edges[edge.source, edge.target]
            data['ids'].append(edge.id)
            data['weight'] = max(data['weight'], edge.weight or 0)
        else:
            digraph.add_edge(edge.source, edge.target, ids=[edge.id], weight=edge.weight or 0)

    return digraph


def connected_components(graph: ProcessGraph) -> int:
    """
    Conta componentes fracamente conexos.

    Returns:
        Número de componentes (0 para grafo sem nós)
    """
    return nx.number_weakly_connected_components(to_networkx(graph))


def articulation_points(graph: ProcessGraph) -> List[str]:
    """
    Nós cuja remoção desconecta a projeção não dirigida.

    Returns:
        IDs em ordem de inserção
    """
    undirected = to_networkx(graph).to_undirected()
    undirected.remove_edges_from(list(nx.selfloop_edges(undirected)))
    points = set(nx.articulation_points(undirected))
    return [node_id for node_id in graph.nodes if node_id in points]


def entry_nodes(graph: ProcessGraph) -> List[str]:
    """
    Raízes para travessias dirigidas.

    Eventos de início; na falta deles, nós sem entradas; em último caso
    (grafo totalmente cíclico), o primeiro nó.
    """
    roots = [n.id for n in graph.start_events if n.id in graph.nodes]
    if not roots:
        roots = [n.id for n in graph.nodes.values() if not n.incoming]
    if not roots and graph.nodes:
        roots = [next(iter(graph.nodes))]
    return roots


def back_edges(graph: ProcessGraph) -> Set[str]:
    """
    IDs das arestas de retorno de uma DFS a partir das raízes.

    Uma aresta não-árvore cujo destino ainda está na pilha da DFS fecha um
    ciclo (laços incluídos).
    """
    digraph = to_networkx(graph, first=entry_nodes(graph))
    on_stack: Set[str] = set()
    found: Set[str] = set()

    for source, target, label in nx.dfs_labeled_edges(digraph):
        if label == 'forward':
            on_stack.add(target)
        elif label == 'reverse':
            on_stack.discard(target)
        elif label == 'nontree' and target in on_stack:
            found.update(digraph.edges[source, target]['ids'])

    return found


def acyclic_graph(graph: ProcessGraph) -> nx.DiGraph:
    """DiGraph sem as arestas de retorno (sempre acíclico)."""
    digraph = to_networkx(graph)
    cycles = back_edges(graph)
    digraph.remove_edges_from([
        (source, target) for source, target, ids in digraph.edges(data='ids')
        if cycles.intersection(ids)
    ])
    return digraph


def sequential_chains(graph: ProcessGraph) -> List[List[str]]:
    """
    Cadeias maximais de tarefas ligadas 1-para-1.

    Um elo u -> v pertence à cadeia quando u tem uma única saída, v é tarefa
    e tem uma única entrada. Ciclos puros de tarefas não formam cadeia.

    Returns:
        Listas de IDs, cada uma com pelo menos dois nós
    """
    def follower(node: Node) -> Optional[str]:
        if len(node.outgoing) != 1:
            return None
        edge = graph.edges.get(node.outgoing[0])
        if edge is None or edge.target == node.id or edge.target not in graph.nodes:
            return None
        target = graph.nodes[edge.target]
        if target.is_task and len(target.incoming) == 1:
            return target.id
        return None

    linked_targets = set()
    for node in graph.tasks():
        nxt = follower(node)
        if nxt is not None:
            linked_targets.add(nxt)

    chains: List[List[str]] = []
    visited: Set[str] = set()

    for head in graph.tasks():
        if head.id in linked_targets or head.id in visited:
            continue
        chain = [head.id]
        visited.add(head.id)
        nxt = follower(head)
        while nxt is not None and nxt not in visited:
            chain.append(nxt)
            visited.add(nxt)
            nxt = follower(graph.nodes[nxt])
        if len(chain) >= 2:
            chains.append(chain)

    return chains
