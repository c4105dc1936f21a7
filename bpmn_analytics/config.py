"""
Configuração da análise.

Limiares e pesos usados pelos motores de métricas, compliance e
recomendações. A configuração é um objeto explícito passado aos
construtores; não há estado global.
"""

from pathlib import Path
from typing import Dict, FrozenSet, Union

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = structlog.get_logger()

DEFAULT_SENSITIVE_KEYWORDS = frozenset({
    'daten', 'data', 'user', 'kunde', 'customer', 'person',
})

DEFAULT_SCORING_WEIGHTS = {
    'impact': 0.4,
    'roi': 0.3,
    'effort': -0.2,
    'confidence': 0.1,
}


class AnalysisConfig(BaseModel):
    """Parâmetros da análise de processos (valores padrão calibrados)."""

    model_config = ConfigDict(frozen=True, extra='forbid')

    # Performance
    bottleneck_incoming_threshold: int = Field(
        2, ge=0, description="Nó é gargalo se tiver mais entradas que isso"
    )
    minutes_per_task: int = Field(
        30, ge=0, description="Duração média assumida por tarefa (minutos)"
    )
    wait_minutes_per_bottleneck: int = Field(
        15, ge=0, description="Espera estimada por gargalo (minutos)"
    )
    cost_per_hour: float = Field(
        60.0, ge=0, description="Custo por hora de processamento"
    )

    # Limiares das regras de recomendação
    complexity_threshold: int = Field(10, description="Limite de complexidade ciclomática")
    cognitive_weight_benchmark: float = Field(
        22.5, ge=0, description="Peso cognitivo médio do setor (15 tarefas)"
    )
    decision_point_threshold: int = Field(5, ge=0)
    critical_path_threshold: int = Field(
        8, ge=1, description="Número de tarefas a partir do qual o caminho é lento"
    )
    sequential_chain_length: int = Field(
        3, ge=2, description="Tamanho mínimo de cadeia sequencial paralelizável"
    )
    consolidation_run_length: int = Field(
        3, ge=1, description="Cadeias na mesma lane maiores que isso são consolidáveis"
    )

    # Compliance
    sensitive_keywords: FrozenSet[str] = DEFAULT_SENSITIVE_KEYWORDS
    compliance_pass_threshold: int = Field(80, ge=0, le=100)

    # Priorização
    scoring_weights: Dict[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_SCORING_WEIGHTS)
    )

    @field_validator('scoring_weights')
    @classmethod
    def known_scoring_fields(cls, value: Dict[str, float]) -> Dict[str, float]:
        """Pesos só podem referenciar campos pontuáveis da recomendação."""
        unknown = sorted(set(value) - set(DEFAULT_SCORING_WEIGHTS))
        if unknown:
            raise ValueError(
                f"unknown scoring field(s) {unknown}; "
                f"expected a subset of {sorted(DEFAULT_SCORING_WEIGHTS)}"
            )
        return value


def load_config(path: Union[str, Path]) -> AnalysisConfig:
    """
    Carrega configuração de um arquivo YAML.

    Chaves ausentes assumem os valores padrão; chaves desconhecidas são
    rejeitadas.

    Args:
        path: Caminho do arquivo YAML

    Returns:
        AnalysisConfig validada

    Raises:
        FileNotFoundError: Se o arquivo não existe
        pydantic.ValidationError: Se algum valor é inválido
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    config = AnalysisConfig(**data)

    logger.info("[load_config] - config_loaded", path=str(config_path), keys=sorted(data))

    return config
