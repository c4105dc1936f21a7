"""
Estratégias de otimização e catálogo de regras.

Cada regra tem um predicado check(contexto), impacto e esforço estáticos e,
opcionalmente, uma calculadora de ROI e uma confiança. Uma estratégia é um
subconjunto ordenado de regras; 'auto' une performance, redução de custo e
compliance (não simplicidade).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from ..analysis import traversal
from ..analysis.compliance import ComplianceScorer
from ..analysis.metrics import GraphMetrics
from ..config import AnalysisConfig
from ..exceptions import UnknownStrategyError
from ..models.graph import ProcessGraph


class Strategy(Enum):
    """Estratégias de otimização suportadas."""

    COST_REDUCTION = 'cost-reduction'
    PERFORMANCE = 'performance'
    COMPLIANCE = 'compliance'
    SIMPLICITY = 'simplicity'
    AUTO = 'auto'

    @classmethod
    def parse(cls, name: Union[str, 'Strategy']) -> 'Strategy':
        """
        Resolve o nome de uma estratégia.

        Raises:
            UnknownStrategyError: Se o nome não corresponde a nenhuma estratégia
        """
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise UnknownStrategyError(str(name), [s.value for s in cls]) from None


@dataclass(frozen=True)
class RuleContext:
    """Entrada das regras: grafo, métricas e configuração."""

    graph: ProcessGraph
    metrics: GraphMetrics
    config: AnalysisConfig


Action = Dict[str, Any]


@dataclass(frozen=True)
class Rule:
    """Regra de recomendação."""

    id: str
    type: str
    severity: str
    title: str
    check: Callable[[RuleContext], bool]
    describe: Callable[[RuleContext], str]
    actions: Callable[[RuleContext], List[Action]]
    impact: Optional[float] = None
    effort: Optional[float] = None
    roi: Optional[Callable[[RuleContext], float]] = None
    confidence: Optional[float] = None


# Auxiliares de grafo
def _task_chains(ctx: RuleContext) -> List[List[str]]:
    return [
        chain for chain in traversal.sequential_chains(ctx.graph)
        if len(chain) >= ctx.config.sequential_chain_length
    ]


def _same_lane_runs(ctx: RuleContext) -> List[List[str]]:
    """
    Trechos de cadeias sequenciais em que todas as tarefas têm a mesma lane.

    Tarefas sem lane não pertencem a nenhum trecho.
    """
    runs = []
    for chain in traversal.sequential_chains(ctx.graph):
        current: List[str] = []
        for node_id in chain:
            lane = ctx.graph.nodes[node_id].lane
            if lane is None:
                runs.append(current)
                current = []
            elif current and lane == ctx.graph.nodes[current[-1]].lane:
                current.append(node_id)
            else:
                runs.append(current)
                current = [node_id]
        runs.append(current)
    return [run for run in runs if len(run) > ctx.config.consolidation_run_length]


def _unconditioned_exclusive_gateways(ctx: RuleContext) -> List[str]:
    matches = []
    for gateway in ctx.graph.gateways:
        if 'exclusive' not in gateway.type.lower() or len(gateway.outgoing) < 2:
            continue
        edges = [ctx.graph.edges[e] for e in gateway.outgoing if e in ctx.graph.edges]
        if all(not edge.condition for edge in edges):
            matches.append(gateway.id)
    return matches


def _rework_edges(ctx: RuleContext) -> List[str]:
    back_edges = traversal.back_edges(ctx.graph)
    return [edge_id for edge_id in ctx.graph.edges if edge_id in back_edges]


def _rework_share(ctx: RuleContext) -> float:
    """Fração do peso das transições carregada por laços de retrabalho."""
    total = sum(e.weight or 0 for e in ctx.graph.edges.values())
    if total == 0:
        return 0.5
    rework = sum(ctx.graph.edges[e].weight or 0 for e in _rework_edges(ctx))
    return round(rework / total, 2)


def _unnamed_tasks(ctx: RuleContext) -> List[str]:
    return [t.id for t in ctx.graph.tasks() if not t.name or t.name == t.id]


def _sensitive_nodes(ctx: RuleContext) -> List[str]:
    return ComplianceScorer(ctx.config).sensitive_nodes(ctx.graph)


def _critical_tasks(ctx: RuleContext) -> List[str]:
    return [
        node_id for node_id in ctx.metrics.performance.critical_path
        if ctx.graph.nodes[node_id].is_task
    ]


def _each(action: str, targets: List[Any], improvement: str) -> List[Action]:
    return [
        {
            'action': action,
            'target': target if isinstance(target, list) else [target],
            'expected_improvement': improvement,
        }
        for target in targets
    ]


# Performance
BOTTLENECK = Rule(
    id='RULE-002',
    type='performance',
    severity='medium',
    title='Possible bottleneck identified',
    check=lambda ctx: bool(ctx.metrics.performance.bottlenecks),
    describe=lambda ctx: (
        f"{len(ctx.metrics.performance.bottlenecks)} task(s) with more than "
        f"{ctx.config.bottleneck_incoming_threshold} incoming connections"
    ),
    actions=lambda ctx: _each(
        'Check parallel processing', ctx.metrics.performance.bottlenecks, '15-30% less waiting'
    ),
    impact=0.6,
    effort=0.4,
    roi=lambda ctx: round(min(1.0, 0.3 + 0.1 * len(ctx.metrics.performance.bottlenecks)), 2),
)

SLOW_PATHS = Rule(
    id='PERF-001',
    type='performance',
    severity='medium',
    title='Optimize slow process paths',
    check=lambda ctx: len(_critical_tasks(ctx)) >= ctx.config.critical_path_threshold,
    describe=lambda ctx: (
        f"Critical path runs through {len(_critical_tasks(ctx))} tasks "
        f"(~{len(_critical_tasks(ctx)) * ctx.config.minutes_per_task} min)"
    ),
    actions=lambda ctx: _each('Check automation', [_critical_tasks(ctx)], '30-50% reduction'),
    impact=0.7,
    effort=0.6,
    roi=lambda ctx: 0.7,
)

PARALLELIZATION = Rule(
    id='PERF-002',
    type='parallelization',
    severity='low',
    title='Parallelization potential',
    check=lambda ctx: bool(_task_chains(ctx)),
    describe=lambda ctx: f"{len(_task_chains(ctx))} places for parallel processing",
    actions=lambda ctx: [
        {
            'action': 'Parallelize sequential tasks',
            'target': chain,
            'expected_improvement': f"{min(50, 10 * (len(chain) - 1))}%",
        }
        for chain in _task_chains(ctx)
    ],
    impact=0.6,
    effort=0.5,
    roi=lambda ctx: 0.8,
)

GATEWAY_CONVERSION = Rule(
    id='PATTERN-002',
    type='ai-pattern',
    severity='low',
    title='Parallel gateway conversion',
    check=lambda ctx: bool(_unconditioned_exclusive_gateways(ctx)),
    describe=lambda ctx: (
        f"{len(_unconditioned_exclusive_gateways(ctx))} exclusive gateway(s) without "
        "conditions could run their branches in parallel"
    ),
    actions=lambda ctx: _each(
        'Convert exclusive gateway to parallel', _unconditioned_exclusive_gateways(ctx), '40%'
    ),
    impact=0.5,
    effort=0.3,
    roi=lambda ctx: 0.4,
    confidence=0.85,
)

# Redução de custo
REWORK_LOOPS = Rule(
    id='COST-001',
    type='cost-reduction',
    severity='medium',
    title='Reduce rework loops',
    check=lambda ctx: bool(_rework_edges(ctx)),
    describe=lambda ctx: (
        f"{len(_rework_edges(ctx))} loop(s) send work back to earlier steps "
        f"({_rework_share(ctx):.0%} of observed transitions)"
    ),
    actions=lambda ctx: _each(
        'Add quality gate before the loop', _rework_edges(ctx), 'fewer repeated executions'
    ),
    impact=0.7,
    effort=0.5,
    roi=_rework_share,
)

TASK_CONSOLIDATION = Rule(
    id='PATTERN-001',
    type='ai-pattern',
    severity='low',
    title='Task consolidation',
    check=lambda ctx: bool(_same_lane_runs(ctx)),
    describe=lambda ctx: (
        f"{len(_same_lane_runs(ctx))} run(s) of more than "
        f"{ctx.config.consolidation_run_length} sequential tasks in the same role"
    ),
    actions=lambda ctx: _each('Combine sequential tasks', _same_lane_runs(ctx), '20% cost'),
    impact=0.5,
    effort=0.4,
    roi=lambda ctx: 0.3,
    confidence=0.85,
)

# Compliance
MISSING_EVENTS = Rule(
    id='COMP-001',
    type='compliance',
    severity='high',
    title='Missing start or end events',
    check=lambda ctx: not ctx.graph.start_events or not ctx.graph.end_events,
    describe=lambda ctx: (
        f"{len(ctx.graph.start_events)} start and {len(ctx.graph.end_events)} end "
        "event(s) modelled"
    ),
    actions=lambda ctx: [{'action': 'Model explicit start and end events', 'target': []}],
    impact=0.6,
    effort=0.2,
    roi=lambda ctx: 0.5,
)

UNNAMED_TASKS = Rule(
    id='COMP-002',
    type='compliance',
    severity='low',
    title='Unnamed tasks',
    check=lambda ctx: bool(_unnamed_tasks(ctx)),
    describe=lambda ctx: f"{len(_unnamed_tasks(ctx))} task(s) without a descriptive name",
    actions=lambda ctx: _each('Name the task', _unnamed_tasks(ctx), 'ISO 9001 naming'),
    impact=0.4,
    effort=0.1,
    roi=lambda ctx: 0.3,
)

MISSING_CONTROLS = Rule(
    id='COMP-003',
    type='compliance',
    severity='high',
    title='No control points',
    check=lambda ctx: not ctx.graph.gateways,
    describe=lambda ctx: "The process has no approval or control gateways (SOX)",
    actions=lambda ctx: [{'action': 'Add approval gateway before critical steps', 'target': []}],
    impact=0.7,
    effort=0.5,
    roi=lambda ctx: 0.5,
)

SENSITIVE_DATA = Rule(
    id='COMP-004',
    type='compliance',
    severity='medium',
    title='Personal data processing',
    check=lambda ctx: bool(_sensitive_nodes(ctx)) and not ctx.graph.gateways,
    describe=lambda ctx: (
        f"{len(_sensitive_nodes(ctx))} step(s) handle personal data without a control "
        "gateway (GDPR)"
    ),
    actions=lambda ctx: _each(
        'Document legal basis and retention', _sensitive_nodes(ctx), 'GDPR score 100'
    ),
    impact=0.5,
    effort=0.3,
    roi=lambda ctx: 0.4,
)

# Simplicidade
HIGH_COMPLEXITY = Rule(
    id='RULE-001',
    type='complexity',
    severity='high',
    title='High cyclomatic complexity',
    check=lambda ctx: ctx.metrics.complexity.cyclomatic > ctx.config.complexity_threshold,
    describe=lambda ctx: (
        f"Cyclomatic complexity {ctx.metrics.complexity.cyclomatic} exceeds "
        f"{ctx.config.complexity_threshold}"
    ),
    actions=lambda ctx: [{'action': 'Split process into sub-processes', 'target': []}],
    impact=0.8,
    effort=0.6,
)

COGNITIVE_LOAD = Rule(
    id='SIMP-001',
    type='complexity',
    severity='medium',
    title='High cognitive weight',
    check=lambda ctx: (
        ctx.metrics.complexity.cognitive_weight > ctx.config.cognitive_weight_benchmark
    ),
    describe=lambda ctx: (
        f"Cognitive weight {ctx.metrics.complexity.cognitive_weight:.1f} above the "
        f"industry benchmark of {ctx.config.cognitive_weight_benchmark:.1f}"
    ),
    actions=lambda ctx: [{'action': 'Group related tasks into sub-processes', 'target': []}],
    impact=0.5,
    effort=0.4,
)

DECISION_OVERLOAD = Rule(
    id='SIMP-002',
    type='complexity',
    severity='medium',
    title='Too many decision points',
    check=lambda ctx: (
        ctx.metrics.complexity.decision_points > ctx.config.decision_point_threshold
    ),
    describe=lambda ctx: f"{ctx.metrics.complexity.decision_points} gateways in one model",
    actions=lambda ctx: _each(
        'Move decision logic to a business rule task',
        [g.id for g in ctx.graph.gateways],
        'simpler flow'
    ),
    impact=0.6,
    effort=0.5,
)


AUTO_COMPONENTS = (Strategy.PERFORMANCE, Strategy.COST_REDUCTION, Strategy.COMPLIANCE)

STRATEGY_RULES: Dict[Strategy, Tuple[Rule, ...]] = {
    Strategy.PERFORMANCE: (BOTTLENECK, SLOW_PATHS, PARALLELIZATION, GATEWAY_CONVERSION),
    Strategy.COST_REDUCTION: (REWORK_LOOPS, TASK_CONSOLIDATION),
    Strategy.COMPLIANCE: (MISSING_EVENTS, UNNAMED_TASKS, MISSING_CONTROLS, SENSITIVE_DATA),
    Strategy.SIMPLICITY: (HIGH_COMPLEXITY, COGNITIVE_LOAD, DECISION_OVERLOAD),
}


def _compose(components: Tuple[Strategy, ...]) -> Tuple[Rule, ...]:
    """União das regras das estratégias, sem repetir IDs."""
    rules: List[Rule] = []
    seen = set()
    for component in components:
        for rule in STRATEGY_RULES[component]:
            if rule.id not in seen:
                seen.add(rule.id)
                rules.append(rule)
    return tuple(rules)


STRATEGY_RULES[Strategy.AUTO] = _compose(AUTO_COMPONENTS)

_missing = set(Strategy) - set(STRATEGY_RULES)
if _missing:
    raise RuntimeError(f"Strategies without rules: {sorted(s.value for s in _missing)}")


def rules_for(strategy: Union[str, Strategy]) -> Tuple[Rule, ...]:
    """
    Regras de uma estratégia, na ordem de registro.

    Raises:
        UnknownStrategyError: Se a estratégia não existe
    """
    return STRATEGY_RULES[Strategy.parse(strategy)]
