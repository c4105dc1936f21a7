"""
Testes para o Directly-Follows Graph.
"""

import pytest

from bpmn_analytics.process_mining import DirectlyFollowsGraph, build_dfg, relation_key


class TestBuildDfg:
    """Testes de construção do DFG."""

    def test_ab_scenario(self):
        """Testa relações, inícios e fins do cenário A/B."""
        dfg = build_dfg({'1': ['A', 'B'], '2': ['A', 'B']})

        assert dfg.relations == {'A -> B': 2}
        assert dfg.start_nodes == {'A'}
        assert dfg.end_nodes == {'B'}
        assert dfg.nodes == {'A', 'B'}

    def test_self_loop_counted(self):
        """Testa repetição consecutiva da mesma atividade."""
        dfg = build_dfg({'1': ['A', 'A', 'B']})

        assert dfg.relations == {'A -> A': 1, 'A -> B': 1}

    def test_single_activity_trace(self):
        """Testa trace de uma atividade: início e fim, sem relações."""
        dfg = build_dfg({'1': ['A']})

        assert dfg.start_nodes == {'A'}
        assert dfg.end_nodes == {'A'}
        assert dfg.relations == {}

    def test_empty_trace_contributes_nothing(self):
        """Testa que traces vazios são ignorados."""
        dfg = build_dfg({'1': [], '2': ['A', 'B']})

        assert dfg.start_nodes == {'A'}
        assert dfg.total_transitions == 1

    def test_independent_of_case_order(self):
        """Testa que a ordem dos cases não altera o resultado."""
        first = build_dfg({'1': ['A', 'B', 'C'], '2': ['A', 'C']})
        second = build_dfg({'2': ['A', 'C'], '1': ['A', 'B', 'C']})

        assert first.to_dict() == second.to_dict()

    def test_relation_counts_positive_and_known(self):
        """Testa invariante: pontas conhecidas, contagens >= 1."""
        dfg = build_dfg({'1': ['A', 'B', 'C', 'B'], '2': ['B', 'C']})

        for source, target, count in dfg.pairs():
            assert source in dfg.nodes
            assert target in dfg.nodes
            assert count >= 1
        assert dfg.relations['B -> C'] == 2


class TestPairs:
    """Testes de decomposição das chaves de relação."""

    def test_activity_name_containing_separator(self):
        """Testa nome de atividade com ' -> '."""
        dfg = build_dfg({'1': ['Load -> Parse', 'Store']})

        assert list(dfg.pairs()) == [('Load -> Parse', 'Store', 1)]

    def test_unknown_relation_rejected(self):
        """Testa relação com pontas desconhecidas."""
        dfg = DirectlyFollowsGraph(nodes={'A'}, relations={relation_key('A', 'X'): 1})

        with pytest.raises(ValueError):
            list(dfg.pairs())

    def test_to_dict_sorted(self):
        """Testa serialização determinística."""
        dfg = build_dfg({'1': ['B', 'A']})

        assert dfg.to_dict() == {
            'nodes': ['A', 'B'],
            'start_nodes': ['B'],
            'end_nodes': ['A'],
            'relations': {'B -> A': 1},
        }


class TestGeneratedLogs:
    """Propriedades do DFG sobre logs gerados."""

    @pytest.mark.parametrize("seed", range(10))
    def test_transition_count_conserved(self, random_traces, seed):
        """Testa soma das relações = soma de (tamanho - 1) dos traces."""
        traces = random_traces(seed)

        dfg = build_dfg(traces)

        assert sum(dfg.relations.values()) == sum(max(len(t) - 1, 0) for t in traces.values())
        assert dfg.nodes == {activity for trace in traces.values() for activity in trace}
        assert dfg.start_nodes == {t[0] for t in traces.values() if t}
        assert dfg.end_nodes == {t[-1] for t in traces.values() if t}

    @pytest.mark.parametrize("seed", range(10))
    def test_trace_order_irrelevant(self, random_traces, seed):
        """Testa que a ordem dos cases não altera o DFG."""
        traces = random_traces(seed)
        shuffled = dict(reversed(list(traces.items())))

        assert build_dfg(shuffled).to_dict() == build_dfg(traces).to_dict()
