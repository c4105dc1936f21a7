"""
Process Mining module - descoberta de modelos a partir de event logs.

Pipeline: extração de traces -> directly-follows graph -> grafo de processo.
"""

from .dfg import DirectlyFollowsGraph, build_dfg, relation_key
from .discovery import DiscoveryResult, MiningEngine, count_variants
from .graph_synthesizer import synthesize_graph, task_id, start_id
from .trace_extractor import extract_traces, coerce_events

__all__ = [
    'DirectlyFollowsGraph',
    'build_dfg',
    'relation_key',
    'DiscoveryResult',
    'MiningEngine',
    'count_variants',
    'synthesize_graph',
    'task_id',
    'start_id',
    'extract_traces',
    'coerce_events',
]
