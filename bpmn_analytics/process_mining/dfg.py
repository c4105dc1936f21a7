"""
Directly-Follows Graph (DFG).

Agrega as frequências de transição entre atividades consecutivas em todos
os traces.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Mapping, Set, Tuple

import structlog

logger = structlog.get_logger()

RELATION_SEPARATOR = " -> "


def relation_key(source: str, target: str) -> str:
    """Chave textual de uma relação ("A -> B")."""
    return f"{source}{RELATION_SEPARATOR}{target}"


@dataclass
class DirectlyFollowsGraph:
    """
    DFG com nós, atividades iniciais/finais e contagem de relações.

    Invariante: as duas pontas de toda relação estão em nodes; contagens >= 1.
    """

    nodes: Set[str] = field(default_factory=set)
    start_nodes: Set[str] = field(default_factory=set)
    end_nodes: Set[str] = field(default_factory=set)
    relations: Dict[str, int] = field(default_factory=dict)

    def pairs(self) -> Iterator[Tuple[str, str, int]]:
        """
        Itera (origem, destino, contagem) para cada relação.

        A chave é dividida no separador cujas duas metades são atividades
        conhecidas, o que resolve nomes que contêm " -> ".
        """
        for key, count in self.relations.items():
            source, target = self._split(key)
            yield source, target, count

    def _split(self, key: str) -> Tuple[str, str]:
        position = key.find(RELATION_SEPARATOR)
        while position != -1:
            source = key[:position]
            target = key[position + len(RELATION_SEPARATOR):]
            if source in self.nodes and target in self.nodes:
                return source, target
            position = key.find(RELATION_SEPARATOR, position + 1)
        raise ValueError(f"Relation '{key}' does not join two known activities")

    @property
    def total_transitions(self) -> int:
        return sum(self.relations.values())

    def to_dict(self) -> Dict[str, object]:
        return {
            'nodes': sorted(self.nodes),
            'start_nodes': sorted(self.start_nodes),
            'end_nodes': sorted(self.end_nodes),
            'relations': dict(self.relations),
        }


def build_dfg(traces: Mapping[str, Iterable[str]]) -> DirectlyFollowsGraph:
    """
    Constrói o DFG a partir dos traces.

    Traces vazios não contribuem. O resultado depende apenas do multiconjunto
    de traces (contagens são comutativas).

    Args:
        traces: Mapeamento case_id -> sequência de atividades

    Returns:
        DirectlyFollowsGraph
    """
    dfg = DirectlyFollowsGraph()

    for trace in traces.values():
        trace = list(trace)
        if not trace:
            continue

        dfg.start_nodes.add(trace[0])
        dfg.end_nodes.add(trace[-1])
        dfg.nodes.update(trace)

        for current, following in zip(trace, trace[1:]):
            key = relation_key(current, following)
            dfg.relations[key] = dfg.relations.get(key, 0) + 1

    logger.info(
        "[build_dfg] - dfg_built",
        activities=len(dfg.nodes),
        relations=len(dfg.relations),
        transitions=dfg.total_transitions
    )

    return dfg
