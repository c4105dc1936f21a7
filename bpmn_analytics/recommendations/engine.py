"""
Recommendation Engine - geração e priorização de recomendações.

Avalia as regras de uma estratégia contra (grafo, métricas) e ordena as
recomendações pelo score ponderado:

    score = clamp01(impact*0.4 + roi*0.3 + effort*(-0.2) + confidence*0.1)

Campos ausentes contribuem com 0. A ordenação é estável: empates mantêm a
ordem de registro das regras.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import structlog

from ..analysis.compliance import ComplianceScorer
from ..analysis.metrics import GraphMetrics, GraphMetricsEngine
from ..config import AnalysisConfig
from ..models.graph import ProcessGraph
from .strategies import Rule, RuleContext, Strategy, rules_for

logger = structlog.get_logger()


@dataclass(frozen=True)
class Recommendation:
    """Recomendação acionável; priority, score e timeline são derivados."""

    rule_id: str
    type: str
    title: str
    description: str
    actions: Tuple[Dict[str, Any], ...]
    severity: str = 'medium'
    impact: Optional[float] = None
    effort: Optional[float] = None
    roi: Optional[float] = None
    confidence: Optional[float] = None
    priority: Optional[str] = None
    score: Optional[float] = None
    timeline: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['actions'] = list(data['actions'])
        if self.confidence is None:
            data.pop('confidence')
        return data


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def score_recommendation(
    rec: Recommendation,
    weights: Optional[Mapping[str, float]] = None
) -> float:
    """
    Score ponderado de uma recomendação, limitado a [0, 1].

    Args:
        rec: Recomendação candidata
        weights: Pesos por campo (padrão: impact 0.4, roi 0.3, effort -0.2,
            confidence 0.1)
    """
    weights = weights or AnalysisConfig().scoring_weights
    total = sum(
        (getattr(rec, name) or 0) * weight
        for name, weight in weights.items()
    )
    return clamp01(total)


def priority_for(score: float) -> str:
    if score > 0.7:
        return 'high'
    if score > 0.4:
        return 'medium'
    return 'low'


def prioritize(
    recommendations: Sequence[Recommendation],
    weights: Optional[Mapping[str, float]] = None
) -> List[Recommendation]:
    """
    Calcula score, prioridade e prazo e ordena por score decrescente.

    Returns:
        Nova lista; as recomendações de entrada não são alteradas
    """
    scored = []
    for rec in recommendations:
        score = score_recommendation(rec, weights)
        scored.append(replace(
            rec,
            score=score,
            priority=priority_for(score),
            timeline=rec.effort,
        ))

    return sorted(scored, key=lambda r: r.score, reverse=True)


class RecommendationEngine:
    """Motor de recomendações baseado em regras."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or AnalysisConfig()
        self.metrics_engine = GraphMetricsEngine(self.config)
        self.compliance_scorer = ComplianceScorer(self.config)

    def compute_metrics(self, graph: ProcessGraph) -> GraphMetrics:
        return GraphMetrics(
            complexity=self.metrics_engine.complexity(graph),
            performance=self.metrics_engine.performance(graph),
            compliance=self.compliance_scorer.score(graph),
        )

    def evaluate(
        self,
        rules: Sequence[Rule],
        context: RuleContext
    ) -> List[Recommendation]:
        """
        Avalia as regras na ordem dada.

        Returns:
            Recomendações das regras disparadas, ainda sem score
        """
        fired = []
        for rule in rules:
            if not rule.check(context):
                continue
            fired.append(Recommendation(
                rule_id=rule.id,
                type=rule.type,
                title=rule.title,
                description=rule.describe(context),
                actions=tuple(rule.actions(context)),
                severity=rule.severity,
                impact=rule.impact,
                effort=rule.effort,
                roi=rule.roi(context) if rule.roi is not None else None,
                confidence=rule.confidence,
            ))
        return fired

    def generate(
        self,
        graph: ProcessGraph,
        metrics: Optional[GraphMetrics] = None,
        strategy: Union[str, Strategy] = Strategy.AUTO
    ) -> List[Recommendation]:
        """
        Gera recomendações priorizadas para um grafo.

        A estratégia é validada antes de qualquer avaliação; nenhuma lista
        parcial é produzida em caso de erro.

        Args:
            graph: Grafo de processo
            metrics: Métricas já calculadas (calculadas aqui se None)
            strategy: Nome ou membro de Strategy

        Returns:
            Recomendações ordenadas por score decrescente

        Raises:
            UnknownStrategyError: Se a estratégia não existe
        """
        rules = rules_for(strategy)
        selected = Strategy.parse(strategy)

        if metrics is None:
            metrics = self.compute_metrics(graph)

        context = RuleContext(graph=graph, metrics=metrics, config=self.config)
        recommendations = prioritize(
            self.evaluate(rules, context), self.config.scoring_weights
        )

        logger.info(
            "[RecommendationEngine.generate] - recommendations_generated",
            strategy=selected.value,
            rules=len(rules),
            recommendations=len(recommendations),
            high_priority=sum(1 for r in recommendations if r.priority == 'high')
        )

        return recommendations
