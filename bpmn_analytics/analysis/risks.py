"""
Análise de riscos do modelo de processo.
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Sequence, Tuple

from ..models.graph import ProcessGraph
from . import traversal
from .compliance import ComplianceReport, ComplianceScorer


@dataclass(frozen=True)
class RiskAssessment:
    """Riscos identificados e score agregado (0-100)."""

    single_points_of_failure: Tuple[str, ...]
    compliance_risks: Tuple[str, ...]
    security_risks: Tuple[str, ...]
    operational_risks: Tuple[str, ...]
    risk_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            name: list(value) if isinstance(value, tuple) else value
            for name, value in asdict(self).items()
        }


def dead_ends(graph: ProcessGraph) -> List[str]:
    """Nós sem saída que não são eventos de fim."""
    return [
        n.id for n in graph.nodes.values()
        if not n.outgoing and not n.is_end_event
    ]


def assess_risks(
    graph: ProcessGraph,
    compliance: ComplianceReport,
    bottlenecks: Sequence[str],
    scorer: ComplianceScorer
) -> RiskAssessment:
    """
    Identifica riscos estruturais, de compliance, segurança e operação.

    - Pontos únicos de falha: pontos de articulação da projeção não dirigida
    - Compliance: checagens reprovadas
    - Segurança: nós com dados sensíveis em processos sem gateways de controle
    - Operação: gargalos e becos sem saída

    Args:
        graph: Grafo de processo
        compliance: Relatório de compliance já calculado
        bottlenecks: Gargalos já calculados
        scorer: Scorer usado para localizar nós sensíveis

    Returns:
        RiskAssessment
    """
    spof = traversal.articulation_points(graph)
    compliance_risks = [c.name for c in compliance.standards if not c.passed]
    security_risks = scorer.sensitive_nodes(graph) if not graph.gateways else []

    operational_risks = list(bottlenecks)
    for node_id in dead_ends(graph):
        if node_id not in operational_risks:
            operational_risks.append(node_id)

    risk_score = min(
        100,
        10 * len(spof)
        + 15 * len(compliance_risks)
        + 10 * len(security_risks)
        + 5 * len(operational_risks)
    )

    return RiskAssessment(
        single_points_of_failure=tuple(spof),
        compliance_risks=tuple(compliance_risks),
        security_risks=tuple(security_risks),
        operational_risks=tuple(operational_risks),
        risk_score=risk_score,
    )
