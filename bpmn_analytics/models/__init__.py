"""
Modelos de dados BPMN-Analytics.

Este pacote contém o modelo Pydantic de eventos e o grafo de processo
compartilhado pela mineração e pela análise.
"""

from bpmn_analytics.models.events import Event
from bpmn_analytics.models.graph import Edge, Node, ProcessGraph

__all__ = [
    "Event",
    "Edge",
    "Node",
    "ProcessGraph",
]
