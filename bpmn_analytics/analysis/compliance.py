"""
Compliance Scorer.

Executa uma bateria fixa de checagens independentes (ISO 9001, GDPR, SOX,
acessibilidade) e agrega um score geral. A ordem das checagens é fixa para
relatórios reproduzíveis.
"""

import math
import re
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import structlog

from ..config import AnalysisConfig
from ..models.graph import ProcessGraph

logger = structlog.get_logger()


@dataclass(frozen=True)
class ComplianceCheck:
    """Resultado de uma checagem de compliance."""

    name: str
    passed: bool
    score: int
    details: Optional[Tuple[Dict[str, Any], ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if self.details is None:
            data.pop('details')
        else:
            data['details'] = list(data['details'])
        return data


@dataclass(frozen=True)
class ComplianceReport:
    """Relatório agregado de compliance."""

    standards: Tuple[ComplianceCheck, ...]
    overall_score: int
    failed_checks: int
    recommendations: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'standards': [c.to_dict() for c in self.standards],
            'overall_score': self.overall_score,
            'failed_checks': self.failed_checks,
            'recommendations': list(self.recommendations),
        }


ISO_9001 = 'ISO 9001:2015'
GDPR = 'GDPR / DS-GVO'
SOX = 'SOX Compliance'
ACCESSIBILITY = 'Accessibility (WCAG)'

REMEDIATIONS = {
    ISO_9001: "Model explicit start and end events and give every task a descriptive name",
    GDPR: "Document the legal basis for tasks that process personal data",
    SOX: "Add approval or control gateways before critical steps",
    ACCESSIBILITY: "Run an accessibility audit on the user-facing steps",
}


def aggregate(checks: Sequence[ComplianceCheck]) -> Dict[str, int]:
    """
    Agrega os scores das checagens.

    Returns:
        Dict com overall_score (piso da média) e failed_checks
    """
    if not checks:
        return {'overall_score': 0, 'failed_checks': 0}

    return {
        'overall_score': math.floor(sum(c.score for c in checks) / len(checks)),
        'failed_checks': sum(1 for c in checks if not c.passed),
    }


class ComplianceScorer:
    """Avaliador de compliance de grafos de processo."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()
        keywords = sorted(self.config.sensitive_keywords)
        self._sensitive_pattern = re.compile(
            "|".join(re.escape(k) for k in keywords), re.IGNORECASE
        ) if keywords else None

    def score(self, graph: ProcessGraph) -> ComplianceReport:
        """
        Executa todas as checagens na ordem fixa e agrega o resultado.

        Args:
            graph: Grafo de processo

        Returns:
            ComplianceReport
        """
        checks = [
            self.check_iso9001(graph),
            self.check_gdpr(graph),
            self.check_sox(graph),
            self.check_accessibility(graph),
        ]
        totals = aggregate(checks)

        report = ComplianceReport(
            standards=tuple(checks),
            overall_score=totals['overall_score'],
            failed_checks=totals['failed_checks'],
            recommendations=tuple(REMEDIATIONS[c.name] for c in checks if not c.passed),
        )

        logger.info(
            "[ComplianceScorer.score] - compliance_scored",
            overall_score=report.overall_score,
            failed_checks=report.failed_checks
        )

        return report

    def check_iso9001(self, graph: ProcessGraph) -> ComplianceCheck:
        """
        Presença de início/fim, profundidade mínima e nomenclatura.

        +25 por critério atendido; aprovado com score >= limiar (80).
        """
        tasks = graph.tasks()

        criteria = [
            ('Start event present', len(graph.start_events) > 0),
            ('End event present', len(graph.end_events) > 0),
            ('Minimum process depth', len(tasks) >= 2),
            ('Consistent naming', all(t.name and t.name != t.id for t in tasks)),
        ]
        score = sum(25 for _, passed in criteria if passed)

        return ComplianceCheck(
            name=ISO_9001,
            passed=score >= self.config.compliance_pass_threshold,
            score=score,
            details=tuple({'name': name, 'passed': passed} for name, passed in criteria),
        )

    def check_gdpr(self, graph: ProcessGraph) -> ComplianceCheck:
        """
        Heurística de dados sensíveis nos nomes dos nós.

        O score reflete a menção a dados pessoais; passed é sempre True
        (a heurística informa o score, não reprova).
        """
        return ComplianceCheck(
            name=GDPR,
            passed=True,
            score=75 if self.sensitive_nodes(graph) else 100,
        )

    def check_sox(self, graph: ProcessGraph) -> ComplianceCheck:
        """Controles: aprovado se existe ao menos um gateway."""
        has_control = len(graph.gateways) > 0
        return ComplianceCheck(
            name=SOX,
            passed=has_control,
            score=100 if has_control else 50,
        )

    def check_accessibility(self, graph: ProcessGraph) -> ComplianceCheck:
        """Valor fixo até a integração com uma auditoria externa."""
        return ComplianceCheck(name=ACCESSIBILITY, passed=True, score=95)

    def sensitive_nodes(self, graph: ProcessGraph) -> List[str]:
        """IDs dos nós cujo nome menciona alguma palavra-chave sensível."""
        if self._sensitive_pattern is None:
            return []
        return [
            n.id for n in graph.nodes.values()
            if n.name and self._sensitive_pattern.search(n.name)
        ]
