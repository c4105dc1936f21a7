"""
Testes para o sintetizador de grafo de processo.
"""

import pytest

from bpmn_analytics.analysis import GraphMetricsEngine
from bpmn_analytics.exceptions import NodeIdCollisionError
from bpmn_analytics.process_mining import build_dfg, start_id, synthesize_graph, task_id


class TestNodeIds:
    """Testes de geração de IDs."""

    def test_sanitizes_non_alphanumerics(self):
        """Testa substituição por '_'."""
        assert task_id('Check order #1') == 'task_Check_order__1'
        assert start_id('Check order') == 'start_Check_order'

    def test_collision_detected(self):
        """Testa atividades distintas com o mesmo ID sanitizado."""
        dfg = build_dfg({'1': ['a b', 'a_b']})

        with pytest.raises(NodeIdCollisionError) as exc_info:
            synthesize_graph(dfg)

        assert exc_info.value.node_id == 'task_a_b'
        assert exc_info.value.activities == ('a b', 'a_b')


class TestSynthesizeGraph:
    """Testes da síntese a partir do DFG."""

    def test_ab_scenario(self):
        """Testa 2 tarefas, 1 início e arestas start->A e A->B (peso 2)."""
        graph = synthesize_graph(build_dfg({'1': ['A', 'B'], '2': ['A', 'B']}))

        assert [n.id for n in graph.tasks()] == ['task_A', 'task_B']
        assert [n.id for n in graph.start_events] == ['start_A']
        assert graph.end_events == []

        edges = {(e.source, e.target): e for e in graph.edges.values()}
        assert set(edges) == {('start_A', 'task_A'), ('task_A', 'task_B')}
        assert edges[('task_A', 'task_B')].weight == 2
        assert edges[('start_A', 'task_A')].weight is None
        assert edges[('start_A', 'task_A')].condition is None

    def test_task_names_are_activities(self):
        """Testa que o nome do nó é a atividade original."""
        graph = synthesize_graph(build_dfg({'1': ['Check order']}))

        assert graph.nodes['task_Check_order'].name == 'Check order'
        assert graph.nodes['task_Check_order'].type == 'task'

    def test_one_start_per_start_activity(self):
        """Testa múltiplas atividades iniciais."""
        graph = synthesize_graph(build_dfg({'1': ['A', 'C'], '2': ['B', 'C']}))

        assert [n.id for n in graph.start_events] == ['start_A', 'start_B']

    def test_adjacency_consistent(self):
        """Testa invariante incoming/outgoing após a síntese."""
        graph = synthesize_graph(build_dfg({
            '1': ['A', 'B', 'C'],
            '2': ['A', 'C', 'B', 'C'],
        }))

        graph.check_integrity()
        assert len(graph.nodes['task_C'].incoming) == 2
        assert len(graph.nodes['task_A'].outgoing) == 2

    def test_deterministic_ids_and_order(self):
        """Testa que execuções independentes geram o mesmo grafo."""
        traces = {'x': ['Pay', 'Ship'], 'y': ['Order', 'Pay', 'Ship']}

        first = synthesize_graph(build_dfg(traces))
        second = synthesize_graph(build_dfg(dict(reversed(list(traces.items())))))

        assert list(first.nodes) == list(second.nodes)
        assert list(first.edges) == list(second.edges)


class TestGeneratedLogs:
    """Invariante do grafo sintetizado sobre logs gerados."""

    @pytest.mark.parametrize("seed", range(10))
    def test_graph_invariant(self, random_traces, seed):
        """Testa arestas com pontas existentes e adjacência consistente."""
        dfg = build_dfg(random_traces(seed))

        graph = synthesize_graph(dfg)

        graph.check_integrity()
        for edge in graph.edges.values():
            assert edge.source in graph.nodes
            assert edge.target in graph.nodes
        assert len(graph.tasks()) == len(dfg.nodes)
        assert len(graph.start_events) == len(dfg.start_nodes)
        assert len(graph.edges) == len(dfg.relations) + len(dfg.start_nodes)
        assert sum(e.weight or 0 for e in graph.edges.values()) == dfg.total_transitions

    @pytest.mark.parametrize("seed", range(10))
    def test_critical_path_starts_at_start_event(self, random_traces, seed):
        """Testa caminho crítico finito mesmo com laços de retrabalho."""
        graph = synthesize_graph(build_dfg(random_traces(seed)))

        path = GraphMetricsEngine().critical_path(graph)

        if graph.nodes:
            assert graph.nodes[path[0]].is_start_event
            assert len(path) == len(set(path))
        else:
            assert path == []
