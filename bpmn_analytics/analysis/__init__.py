"""
Motores de análise de grafos de processo.

Métricas estruturais e de performance, compliance e riscos.
"""

from .compliance import ComplianceCheck, ComplianceReport, ComplianceScorer, aggregate
from .metrics import (
    BasicMetrics,
    ComplexityMetrics,
    GraphMetrics,
    GraphMetricsEngine,
    PerformanceMetrics,
)
from .risks import RiskAssessment, assess_risks

__all__ = [
    "ComplianceCheck",
    "ComplianceReport",
    "ComplianceScorer",
    "aggregate",
    "BasicMetrics",
    "ComplexityMetrics",
    "GraphMetrics",
    "GraphMetricsEngine",
    "PerformanceMetrics",
    "RiskAssessment",
    "assess_risks",
]
