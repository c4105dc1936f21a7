"""
Process Analyzer - análise completa de um grafo de processo.

Combina métricas, compliance, riscos, KPIs e recomendações num único
AnalysisResult imutável. O grafo pode vir da mineração de um event log
(discover_and_analyze) ou de um parser BPMN externo (ProcessGraph.from_dict).
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

import structlog

from . import __version__
from .analysis.compliance import ComplianceReport, ComplianceScorer
from .analysis.metrics import (
    BasicMetrics,
    ComplexityMetrics,
    GraphMetrics,
    GraphMetricsEngine,
    PerformanceMetrics,
)
from .analysis.risks import RiskAssessment, assess_risks
from .config import AnalysisConfig
from .models.graph import ProcessGraph
from .process_mining.discovery import DiscoveryResult, MiningEngine
from .process_mining.trace_extractor import RawEvent
from .recommendations.engine import Recommendation, RecommendationEngine
from .recommendations.strategies import Strategy

logger = structlog.get_logger()


@dataclass(frozen=True)
class AnalysisResult:
    """
    Snapshot imutável de uma análise.

    Coleções são tuplas e kpis/metadata são mapeamentos somente leitura.
    """

    basic: BasicMetrics
    complexity: ComplexityMetrics
    performance: PerformanceMetrics
    compliance: ComplianceReport
    risks: RiskAssessment
    recommendations: Tuple[Recommendation, ...]
    kpis: Mapping[str, float]
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'recommendations', tuple(self.recommendations))
        object.__setattr__(self, 'kpis', MappingProxyType(dict(self.kpis)))
        object.__setattr__(self, 'metadata', MappingProxyType(dict(self.metadata)))

    def to_dict(self) -> Dict[str, Any]:
        """Estrutura aninhada de dicts/listas/primitivos para exportação."""
        return {
            'basic': self.basic.to_dict(),
            'complexity': self.complexity.to_dict(),
            'performance': self.performance.to_dict(),
            'compliance': self.compliance.to_dict(),
            'risks': self.risks.to_dict(),
            'recommendations': [r.to_dict() for r in self.recommendations],
            'kpis': dict(self.kpis),
            'metadata': dict(self.metadata),
        }

    def __str__(self) -> str:
        """Representação string do resultado."""
        lines = [
            f"Process Analysis Results",
            f"",
            f"Model:",
            f"   • Elements: {self.basic.element_count}",
            f"   • Tasks: {self.basic.task_count}",
            f"   • Gateways: {self.basic.gateway_count}",
            f"",
            f"Complexity:",
            f"   • Cyclomatic: {self.complexity.cyclomatic}",
            f"   • Cognitive weight: {self.complexity.cognitive_weight:.1f}",
            f"   • Score: {self.complexity.score}",
            f"",
            f"Performance:",
            f"   • Estimated duration: {self.performance.estimated_duration} min",
            f"   • Bottlenecks: {len(self.performance.bottlenecks)}",
            f"",
            f"Compliance: {self.compliance.overall_score}/100 "
            f"({self.compliance.failed_checks} failed)",
            f"Risk score: {self.risks.risk_score}/100",
            f"",
            f"Recommendations ({len(self.recommendations)}):",
        ]
        for rec in self.recommendations:
            lines.append(f"   • [{rec.priority}] {rec.title} (score {rec.score:.2f})")
        return "\n".join(lines)


def calculate_kpis(
    basic: BasicMetrics,
    complexity: ComplexityMetrics,
    performance: PerformanceMetrics,
    compliance: ComplianceReport,
    config: AnalysisConfig
) -> Dict[str, float]:
    """
    KPIs derivados das métricas.

    - efficiency: fração de nós que são tarefas
    - quality: score de compliance / 100
    - agility: 1 - score de complexidade / 100
    - compliance: score geral de compliance
    - time: duração estimada (minutos)
    - cost: (duração + espera) em horas x custo por hora
    """
    efficiency = basic.task_count / basic.element_count if basic.element_count else 0.0
    minutes = performance.estimated_duration + performance.estimated_wait_time

    return {
        'efficiency': round(efficiency, 2),
        'quality': round(compliance.overall_score / 100, 2),
        'agility': round(1 - complexity.score / 100, 2),
        'compliance': compliance.overall_score,
        'time': performance.estimated_duration,
        'cost': round(minutes / 60 * config.cost_per_hour, 2),
    }


class ProcessAnalyzer:
    """
    Analisador de grafos de processo.

    Example:
        >>> analyzer = ProcessAnalyzer()
        >>> result = analyzer.analyze(graph, strategy='performance')
        >>> print(result)
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Inicializa o analisador.

        Args:
            config: Limiares e pesos da análise (padrão: AnalysisConfig())
        """
        self.config = config or AnalysisConfig()
        self.metrics_engine = GraphMetricsEngine(self.config)
        self.compliance_scorer = ComplianceScorer(self.config)
        self.recommendation_engine = RecommendationEngine(self.config)
        self.mining_engine = MiningEngine()

    def analyze(
        self,
        graph: ProcessGraph,
        strategy: Union[str, Strategy] = Strategy.AUTO
    ) -> AnalysisResult:
        """
        Executa a análise completa de um grafo.

        Args:
            graph: Grafo de processo
            strategy: Estratégia de recomendação

        Returns:
            AnalysisResult

        Raises:
            UnknownStrategyError: Se a estratégia não existe
            GraphIntegrityError: Se o grafo viola o invariante de arestas
        """
        selected = Strategy.parse(strategy)
        graph.check_integrity()

        started = time.time()
        logger.info(
            "[ProcessAnalyzer.analyze] - starting_analysis",
            nodes=len(graph.nodes),
            edges=len(graph.edges),
            strategy=selected.value
        )

        basic = self.metrics_engine.basic(graph)
        complexity = self.metrics_engine.complexity(graph)
        performance = self.metrics_engine.performance(graph)
        compliance = self.compliance_scorer.score(graph)

        metrics = GraphMetrics(
            complexity=complexity,
            performance=performance,
            compliance=compliance,
        )
        recommendations = self.recommendation_engine.generate(graph, metrics, selected)
        risks = assess_risks(graph, compliance, performance.bottlenecks, self.compliance_scorer)

        result = AnalysisResult(
            basic=basic,
            complexity=complexity,
            performance=performance,
            compliance=compliance,
            risks=risks,
            recommendations=tuple(recommendations),
            kpis=calculate_kpis(basic, complexity, performance, compliance, self.config),
            metadata={
                'analysis_time': round(time.time() - started, 4),
                'timestamp': datetime.now(timezone.utc).isoformat(),
                'version': __version__,
                'strategy': selected.value,
            },
        )

        logger.info(
            "[ProcessAnalyzer.analyze] - analysis_completed",
            compliance=compliance.overall_score,
            risk_score=risks.risk_score,
            recommendations=len(recommendations)
        )

        return result

    def discover_and_analyze(
        self,
        events: Sequence[RawEvent],
        strategy: Union[str, Strategy] = Strategy.AUTO
    ) -> Tuple[DiscoveryResult, AnalysisResult]:
        """
        Minera o grafo de um event log e o analisa.

        A estratégia é validada antes da mineração.

        Returns:
            Tupla (DiscoveryResult, AnalysisResult)
        """
        selected = Strategy.parse(strategy)
        discovery = self.mining_engine.discover(events)
        return discovery, self.analyze(discovery.graph, selected)
