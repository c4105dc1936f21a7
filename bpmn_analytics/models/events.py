"""
Modelagem Pydantic de eventos de event logs.

Este módulo define o modelo de dados para eventos de processo (case,
atividade, timestamp), com validação automática, coerção de tipos e
mensagens de erro claras.
"""

from datetime import datetime, timezone
from typing import Any, Dict

import pandas as pd
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Event(BaseModel):
    """
    Evento de um event log.

    Imutável: produzido por um leitor de log externo e consumido pelo
    extrator de traces. A ordem dentro de um case é inferida pelo timestamp.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
        frozen=True,
    )

    case_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices('case_id', 'caseId', 'case'),
        description="Identificador do case (instância de processo)"
    )
    activity: str = Field(
        ...,
        min_length=1,
        description="Nome da atividade executada"
    )
    timestamp: datetime = Field(
        ...,
        validation_alias=AliasChoices('timestamp', 'time', 't'),
        description="Timestamp do evento em formato ISO-8601"
    )

    @field_validator('case_id', mode='before')
    @classmethod
    def coerce_case_id(cls, value: Any) -> Any:
        """Aceita IDs numéricos (comuns em CSV/JSON) convertendo para string."""
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator('timestamp', mode='before')
    @classmethod
    def parse_timestamp(cls, value: Any) -> Any:
        """
        Interpreta strings de data/hora com pandas.

        Aceita ISO-8601 (estendido e básico), RFC 2822 e demais formatos
        reconhecidos por pandas.to_datetime; o resultado é convertido para UTC.
        """
        if not isinstance(value, str):
            return value
        try:
            parsed = pd.to_datetime(value.strip(), utc=True)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"unparseable timestamp {value!r}") from e
        if pd.isna(parsed):
            raise ValueError(f"unparseable timestamp {value!r}")
        return parsed.to_pydatetime().astimezone(timezone.utc)

    @field_validator('timestamp', mode='after')
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        """
        Timestamps sem fuso são interpretados como UTC.

        Garante que logs misturando timestamps com e sem fuso possam ser
        ordenados sem TypeError.
        """
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_dict(self) -> Dict[str, str]:
        """Representação serializável (chaves no formato do log)."""
        return {
            'caseId': self.case_id,
            'activity': self.activity,
            'timestamp': self.timestamp.isoformat(),
        }
