"""
Leitor de event logs (CSV, JSON, HAR).

Converte arquivos de log em eventos Event validados, prontos para o
MiningEngine. O formato é escolhido pela extensão do arquivo.
"""

import csv
import json
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from urllib.parse import urlparse

import structlog
from pydantic import ValidationError

from ..exceptions import ParseError
from ..models.events import Event

logger = structlog.get_logger()

HAR_CASE_ID = 'network_session'
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

CASE_HEADERS = ('case', 'id')
ACTIVITY_HEADERS = ('activity', 'event', 'task')
TIME_HEADERS = ('timestamp', 'time', 'datum')


def _find_column(headers: List[str], keywords: tuple, skip: Optional[int] = None) -> Optional[int]:
    for idx, header in enumerate(headers):
        if idx != skip and any(k in header for k in keywords):
            return idx
    return None


class LogReader:
    """
    Leitor de event logs em CSV, JSON ou HAR.

    Em modo estrito a primeira entrada inválida aborta a leitura; em modo
    tolerante os erros são registrados em self.errors e a entrada é ignorada.
    """

    def __init__(self, strict: bool = True):
        """
        Inicializa o leitor.

        Args:
            strict: Se True, lança exceção em entradas inválidas.
                   Se False, registra erro e continua.
        """
        self.strict = strict
        self.errors: List[ParseError] = []

    def parse_file(self, filepath: Union[str, Path]) -> List[Event]:
        """
        Lê um arquivo de log completo.

        Args:
            filepath: Caminho do arquivo (.csv, .json ou .har)

        Returns:
            Lista de eventos validados, na ordem do arquivo

        Raises:
            FileNotFoundError: Se arquivo não existe
            ParseError: Formato não suportado, estrutura inválida ou
                (strict=True) entrada inválida
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        parsers = {
            '.csv': self.parse_csv,
            '.json': self.parse_json,
            '.har': self.parse_har,
        }
        suffix = filepath.suffix.lower()
        if suffix not in parsers:
            raise ParseError(
                line_num=0,
                raw_line=filepath.name,
                reason=f"Unsupported format '{suffix}' (expected .csv, .json or .har)"
            )

        self.errors.clear()
        logger.info("[LogReader.parse_file] - reading_log", file=str(filepath), format=suffix)

        with open(filepath, 'r', encoding='utf-8') as f:
            events = parsers[suffix](f.read())

        logger.info(
            "[LogReader.parse_file] - reading_complete",
            events=len(events),
            errors=len(self.errors)
        )

        return events

    def parse_csv(self, text: str) -> List[Event]:
        """
        Lê CSV com detecção de colunas pelo cabeçalho.

        Coluna de case: contém 'case' ou 'id'; atividade: 'activity', 'event'
        ou 'task'; tempo: 'timestamp', 'time' ou 'datum'. Sem coluna de tempo,
        a ordem das linhas define a ordem dos eventos.
        """
        rows = [row for row in csv.reader(text.splitlines()) if any(c.strip() for c in row)]
        if len(rows) < 2:
            raise ParseError(line_num=1, raw_line=text[:80], reason="CSV file is empty or invalid")

        headers = [h.strip().lower() for h in rows[0]]
        case_idx = _find_column(headers, CASE_HEADERS)
        activity_idx = _find_column(headers, ACTIVITY_HEADERS, skip=case_idx)
        time_idx = _find_column(headers, TIME_HEADERS, skip=case_idx)

        if case_idx is None or activity_idx is None:
            raise ParseError(
                line_num=1,
                raw_line=",".join(rows[0]),
                reason="CSV columns not recognized (need case id and activity)"
            )

        events = []
        for line_num, row in enumerate(rows[1:], start=2):
            def cell(idx: Optional[int]) -> str:
                return row[idx].strip() if idx is not None and idx < len(row) else ''

            raw = {
                'case_id': cell(case_idx),
                'activity': cell(activity_idx),
                'timestamp': cell(time_idx) or EPOCH + timedelta(milliseconds=line_num - 2),
            }
            self._append(events, raw, line_num, ",".join(row))

        return events

    def parse_json(self, text: str) -> List[Event]:
        """Lê lista de eventos ou objeto {"events": [...]}."""
        data = self._load_json(text)
        if isinstance(data, dict):
            data = data.get('events', [])
        if not isinstance(data, list):
            raise ParseError(line_num=0, raw_line=text[:80], reason="Expected a list of events")
        entries = data

        events = []
        for idx, entry in enumerate(entries, start=1):
            if not isinstance(entry, dict):
                self._reject(ParseError(idx, str(entry), "Event is not an object"))
                continue
            raw = {
                'case_id': entry.get('caseId') or entry.get('case_id') or entry.get('id'),
                'activity': entry.get('activity') or entry.get('name'),
                'timestamp': entry.get('timestamp') or entry.get('time'),
            }
            self._append(events, raw, idx, json.dumps(entry, default=str))

        return events

    def parse_har(self, text: str) -> List[Event]:
        """
        Lê um HTTP Archive como uma única sessão.

        Cada requisição vira um evento '<METHOD> <path>' no case
        'network_session'.
        """
        data = self._load_json(text)
        try:
            entries = data['log']['entries']
        except (KeyError, TypeError):
            raise ParseError(line_num=0, raw_line=text[:80], reason="Missing 'log.entries'") from None

        events = []
        for idx, entry in enumerate(entries, start=1):
            try:
                request = entry['request']
                path = urlparse(request['url']).path or '/'
                raw = {
                    'case_id': HAR_CASE_ID,
                    'activity': f"{request['method']} {path}",
                    'timestamp': entry.get('startedDateTime'),
                }
            except (KeyError, TypeError) as e:
                self._reject(ParseError(idx, str(entry)[:200], f"Invalid HAR entry: missing {e}"))
                continue
            self._append(events, raw, idx, raw['activity'])

        return events

    def _load_json(self, text: str) -> Any:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ParseError(line_num=e.lineno, raw_line=text[:80], reason=f"Invalid JSON: {e.msg}") from e

    def _append(self, events: List[Event], raw: Dict[str, Any], line_num: int, raw_line: str) -> None:
        try:
            events.append(Event.model_validate(raw))
        except ValidationError as e:
            fields = ", ".join(str(err['loc'][0]) for err in e.errors() if err['loc'])
            self._reject(ParseError(line_num, raw_line, f"Invalid field(s): {fields}"))

    def _reject(self, error: ParseError) -> None:
        if self.strict:
            raise error
        logger.warning(
            "[LogReader] - parse_error",
            line_num=error.line_num,
            reason=error.reason
        )
        self.errors.append(error)
