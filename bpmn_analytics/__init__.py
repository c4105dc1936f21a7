"""
BPMN-Analytics: descoberta e análise de processos de negócio.

Este pacote implementa a mineração de processos a partir de event logs
(directly-follows graph), métricas de complexidade e performance,
checagens de compliance e recomendações de otimização priorizadas.
"""

__version__ = "0.1.0"

# Facilitadores de importação para usuários do pacote
from bpmn_analytics.models import Event, Edge, Node, ProcessGraph
from bpmn_analytics.parsers import LogReader
from bpmn_analytics.config import AnalysisConfig, load_config
from bpmn_analytics.exceptions import (
    BPMNAnalyticsError,
    EmptyLogError,
    MalformedEventError,
    NodeIdCollisionError,
    UnknownStrategyError,
    GraphIntegrityError,
    ParseError,
    ProcessMiningError,
)
from bpmn_analytics.process_mining import MiningEngine, DiscoveryResult
from bpmn_analytics.analysis import GraphMetricsEngine, ComplianceScorer
from bpmn_analytics.recommendations import Recommendation, RecommendationEngine, Strategy
from bpmn_analytics.analyzer import AnalysisResult, ProcessAnalyzer

__all__ = [
    "__version__",
    "Event",
    "Edge",
    "Node",
    "ProcessGraph",
    "LogReader",
    "AnalysisConfig",
    "load_config",
    "BPMNAnalyticsError",
    "EmptyLogError",
    "MalformedEventError",
    "NodeIdCollisionError",
    "UnknownStrategyError",
    "GraphIntegrityError",
    "ParseError",
    "ProcessMiningError",
    "MiningEngine",
    "DiscoveryResult",
    "GraphMetricsEngine",
    "ComplianceScorer",
    "Recommendation",
    "RecommendationEngine",
    "Strategy",
    "AnalysisResult",
    "ProcessAnalyzer",
]
