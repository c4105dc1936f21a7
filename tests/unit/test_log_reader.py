"""
Testes para LogReader.

Testa leitura de logs CSV, JSON e HAR em eventos Event validados.
"""

import json
import pytest
from datetime import datetime, timezone
from pathlib import Path

from bpmn_analytics.exceptions import ParseError
from bpmn_analytics.parsers import LogReader
from bpmn_analytics.parsers.log_reader import HAR_CASE_ID


@pytest.fixture
def write_log(tmp_path):
    """Fixture para criar arquivos de log temporários."""
    def _write(name: str, content) -> Path:
        filepath = tmp_path / name
        if not isinstance(content, str):
            content = json.dumps(content)
        filepath.write_text(content, encoding='utf-8')
        return filepath
    return _write


class TestCsv:
    """Testes de logs CSV."""

    def test_detects_columns(self, write_log):
        """Testa detecção de colunas pelo cabeçalho."""
        path = write_log("log.csv", (
            "Case ID,Activity,Timestamp\n"
            "1,Register,2024-01-01T10:00:00Z\n"
            "1,Approve,2024-01-01T11:00:00Z\n"
        ))

        events = LogReader().parse_file(path)

        assert [(e.case_id, e.activity) for e in events] == [('1', 'Register'), ('1', 'Approve')]
        assert events[0].timestamp == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)

    def test_alternative_headers(self, write_log):
        """Testa cabeçalhos event/datum e colunas em outra ordem."""
        path = write_log("log.csv", (
            "datum,event,case\n"
            "2024-01-01T10:00:00,Start,c9\n"
        ))

        events = LogReader().parse_file(path)

        assert events[0].case_id == 'c9'
        assert events[0].activity == 'Start'

    def test_without_time_column_keeps_row_order(self, write_log):
        """Testa ordem das linhas quando não há coluna de tempo."""
        path = write_log("log.csv", "case,task\n1,A\n1,B\n1,C\n")

        events = LogReader().parse_file(path)

        assert [e.timestamp for e in events] == sorted(e.timestamp for e in events)
        assert events[0].timestamp < events[1].timestamp

    def test_quoted_values(self, write_log):
        """Testa valores com vírgula entre aspas."""
        path = write_log("log.csv", (
            'case,activity,timestamp\n'
            '1,"Check order, stock",2024-01-01T10:00:00Z\n'
        ))

        assert LogReader().parse_file(path)[0].activity == 'Check order, stock'

    def test_blank_lines_ignored(self, write_log):
        path = write_log("log.csv", "case,activity,time\n\n1,A,2024-01-01T10:00:00Z\n\n")

        assert len(LogReader().parse_file(path)) == 1

    def test_unrecognized_columns(self, write_log):
        """Testa cabeçalho sem coluna de atividade."""
        path = write_log("log.csv", "case,value\n1,42\n")

        with pytest.raises(ParseError) as exc_info:
            LogReader().parse_file(path)

        assert exc_info.value.line_num == 1

    def test_empty_csv(self, write_log):
        path = write_log("log.csv", "case,activity\n")

        with pytest.raises(ParseError):
            LogReader().parse_file(path)

    def test_strict_invalid_row(self, write_log):
        """Testa modo estrito: linha inválida aborta."""
        path = write_log("log.csv", (
            "case,activity,timestamp\n"
            "1,A,2024-01-01T10:00:00Z\n"
            "1,B,not-a-date\n"
        ))

        with pytest.raises(ParseError) as exc_info:
            LogReader(strict=True).parse_file(path)

        assert exc_info.value.line_num == 3
        assert 'timestamp' in exc_info.value.reason

    def test_lenient_collects_errors(self, write_log):
        """Testa modo tolerante: linha inválida é ignorada e registrada."""
        path = write_log("log.csv", (
            "case,activity,timestamp\n"
            "1,A,2024-01-01T10:00:00Z\n"
            ",B,2024-01-01T10:01:00Z\n"
            "1,C,2024-01-01T10:02:00Z\n"
        ))

        reader = LogReader(strict=False)
        events = reader.parse_file(path)

        assert [e.activity for e in events] == ['A', 'C']
        assert len(reader.errors) == 1
        assert reader.errors[0].line_num == 3


class TestJson:
    """Testes de logs JSON."""

    def test_list_of_events(self, write_log):
        path = write_log("log.json", [
            {'caseId': 'c1', 'activity': 'A', 'timestamp': '2024-01-01T10:00:00Z'},
            {'id': 'c1', 'name': 'B', 'time': '2024-01-01T10:01:00Z'},
        ])

        events = LogReader().parse_file(path)

        assert [e.activity for e in events] == ['A', 'B']
        assert events[1].case_id == 'c1'

    def test_events_wrapper(self, write_log):
        path = write_log("log.json", {'events': [
            {'caseId': 7, 'activity': 'A', 'timestamp': '2024-01-01T10:00:00Z'},
        ]})

        assert LogReader().parse_file(path)[0].case_id == '7'

    def test_invalid_json(self, write_log):
        path = write_log("log.json", "{not json")

        with pytest.raises(ParseError, match='Invalid JSON'):
            LogReader().parse_file(path)

    def test_lenient_skips_non_objects(self, write_log):
        path = write_log("log.json", [
            'garbage',
            {'caseId': 'c1', 'activity': 'A', 'timestamp': '2024-01-01T10:00:00Z'},
        ])

        reader = LogReader(strict=False)

        assert len(reader.parse_file(path)) == 1
        assert reader.errors[0].line_num == 1


class TestHar:
    """Testes de HTTP Archives."""

    def test_entries_become_session_events(self, write_log):
        path = write_log("session.har", {'log': {'entries': [
            {
                'startedDateTime': '2024-01-01T10:00:00.000Z',
                'request': {'method': 'GET', 'url': 'https://shop.example.com/cart?id=1'},
            },
            {
                'startedDateTime': '2024-01-01T10:00:02.000Z',
                'request': {'method': 'POST', 'url': 'https://shop.example.com/checkout'},
            },
        ]}})

        events = LogReader().parse_file(path)

        assert {e.case_id for e in events} == {HAR_CASE_ID}
        assert [e.activity for e in events] == ['GET /cart', 'POST /checkout']

    def test_missing_entries(self, write_log):
        path = write_log("session.har", {'log': {}})

        with pytest.raises(ParseError, match='log.entries'):
            LogReader().parse_file(path)


class TestParseFile:
    """Testes de despacho por extensão."""

    def test_unsupported_extension(self, write_log):
        path = write_log("log.xes", "<log/>")

        with pytest.raises(ParseError, match='Unsupported'):
            LogReader().parse_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LogReader().parse_file(tmp_path / "missing.csv")

    def test_errors_reset_between_files(self, write_log):
        reader = LogReader(strict=False)
        reader.parse_file(write_log("bad.csv", "case,activity,time\n1,A,never\n"))

        reader.parse_file(write_log("good.csv", "case,activity,time\n1,A,2024-01-01T00:00:00Z\n"))

        assert reader.errors == []
