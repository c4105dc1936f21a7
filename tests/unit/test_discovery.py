"""
Testes para MiningEngine.
"""

import pytest

from bpmn_analytics.exceptions import EmptyLogError
from bpmn_analytics.process_mining import MiningEngine, count_variants


@pytest.fixture
def engine():
    return MiningEngine()


class TestMiningEngine:
    """Testes do pipeline de descoberta."""

    def test_discover_ab(self, engine, ab_events):
        """Testa resultado completo do cenário A/B."""
        result = engine.discover(ab_events)

        assert result.traces == {'1': ['A', 'B'], '2': ['A', 'B']}
        assert result.dfg.relations == {'A -> B': 2}
        assert result.case_count == 2
        assert result.event_count == 4
        assert result.variant_count == 1
        assert len(result.graph.tasks()) == 2

    def test_metadata(self, engine, ab_events):
        """Testa metadados do resultado."""
        metadata = engine.discover(ab_events).metadata()

        assert metadata['case_count'] == 2
        assert metadata['variants'] == 1
        assert metadata['discovery_time'] > 0

    def test_runs_are_independent(self, engine, ab_events):
        """Testa que uma execução não afeta a seguinte."""
        engine.discover(ab_events)
        second = engine.discover([
            {'caseId': 'z', 'activity': 'Only', 'timestamp': '2024-01-01T00:00:00Z'},
        ])

        assert second.dfg.nodes == {'Only'}
        assert list(second.graph.nodes) == ['task_Only', 'start_Only']

    def test_str_summary(self, engine, ab_events):
        """Testa representação textual."""
        text = str(engine.discover(ab_events))

        assert 'Cases: 2' in text
        assert 'Relations: 1' in text

    def test_empty_log(self, engine):
        """Testa propagação de EmptyLogError."""
        with pytest.raises(EmptyLogError):
            engine.discover([])


class TestCountVariants:
    """Testes de contagem de variantes."""

    def test_distinct_sequences(self):
        traces = {'1': ['A', 'B'], '2': ['A', 'B'], '3': ['B', 'A'], '4': ['A']}

        assert count_variants(traces) == 3
