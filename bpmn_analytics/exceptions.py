"""
Taxonomia de erros do BPMN-Analytics.

Erros de entrada abortam a execução corrente do pipeline e são propagados
sem alteração para o chamador.
"""


class BPMNAnalyticsError(Exception):
    """Erro base do pacote."""
    pass


class EmptyLogError(BPMNAnalyticsError):
    """Event log vazio entregue ao extrator de traces."""
    pass


class MalformedEventError(BPMNAnalyticsError):
    """Evento inválido (timestamp ilegível, campo ausente)."""

    def __init__(self, index: int, reason: str):
        self.index = index
        self.reason = reason
        super().__init__(f"Event #{index}: {reason}")


class NodeIdCollisionError(BPMNAnalyticsError):
    """Duas atividades distintas geram o mesmo ID de nó."""

    def __init__(self, node_id: str, first: str, second: str):
        self.node_id = node_id
        self.activities = (first, second)
        super().__init__(
            f"Activities '{first}' and '{second}' both map to node id '{node_id}'"
        )


class UnknownStrategyError(BPMNAnalyticsError):
    """Estratégia de otimização desconhecida."""

    def __init__(self, name: str, supported: list):
        self.name = name
        self.supported = supported
        super().__init__(
            f"Strategy '{name}' not supported (expected one of: {', '.join(supported)})"
        )


class GraphIntegrityError(BPMNAnalyticsError):
    """ProcessGraph viola o invariante de arestas/adjacência."""
    pass


class ParseError(BPMNAnalyticsError):
    """Erro ao parsear uma linha/entrada do event log."""

    def __init__(self, line_num: int, raw_line: str, reason: str):
        self.line_num = line_num
        self.raw_line = raw_line
        self.reason = reason
        super().__init__(f"Line {line_num}: {reason}")


class ProcessMiningError(BPMNAnalyticsError):
    """Exceção para erros na integração com PM4Py."""
    pass
