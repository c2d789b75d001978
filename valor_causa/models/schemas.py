"""
Schemas Pydantic do cálculo do valor da causa previdenciária.

Descrevem os dados extraídos do CNIS (contribuições brutas e DIB) e o
resultado do cálculo (RMI, parcelas vencidas, vincendas e total da causa).
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ContribuicaoBruta(BaseModel):
    """Registro de contribuição como saiu da extração, ainda sem validação."""

    data: Optional[Union[date, str]] = Field(
        default=None,
        description="Competência da contribuição (ex: '03/2019'); pode vir malformada"
    )
    valor: Any = Field(
        default=None,
        description="Salário de contribuição; pode ser número, texto ou lixo da extração"
    )


class Contribuicao(BaseModel):
    """Contribuição validada: competência real e valor positivo."""

    model_config = ConfigDict(frozen=True)

    competencia: date = Field(
        ...,
        description="Primeiro dia do mês de competência"
    )
    valor: Decimal = Field(..., gt=0)


class DadosCNIS(BaseModel):
    """
    Dados extraídos do texto de um extrato CNIS.

    A DIB permanece como texto: a validação acontece no cálculo, que devolve
    um resultado indisponível em vez de falhar.
    """

    nome_segurado: Optional[str] = None
    nit: Optional[str] = None
    dib: Optional[str] = Field(
        default=None,
        description="DIB encontrada no documento, como aparece no documento (ex: '15/06/2021')"
    )
    contribuicoes: List[ContribuicaoBruta] = Field(default_factory=list)


class ResultadoVencidas(BaseModel):
    """Parcelas vencidas entre a DIB e a data do cálculo."""

    model_config = ConfigDict(frozen=True)

    total: Optional[Decimal] = None
    meses: int = Field(default=0, ge=0)


class ResultadoCalculo(BaseModel):
    """
    Resultado completo do cálculo do valor da causa.

    `total_vencidas` e `total_geral` são nulos juntos quando a DIB está
    ausente ou é inválida; nunca são convertidos para zero.
    """

    model_config = ConfigDict(frozen=True)

    rmi: Decimal = Field(..., ge=0)
    total_vencidas: Optional[Decimal] = None
    meses_vencidos: int = Field(default=0, ge=0)
    total_vincendas: Decimal = Field(..., ge=0)
    total_geral: Optional[Decimal] = None

    dib: Optional[date] = None
    data_calculo: date
    contribuicoes_utilizadas: int = Field(default=0, ge=0)
    observacoes: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def verificar_totais_indisponiveis(self) -> "ResultadoCalculo":
        if (self.total_vencidas is None) != (self.total_geral is None):
            raise ValueError(
                "total_vencidas e total_geral devem ser nulos juntos"
            )
        return self

    @property
    def disponivel(self) -> bool:
        """True quando a DIB permitiu calcular vencidas e total."""
        return self.total_geral is not None

    def como_dict(self) -> Dict[str, Any]:
        """
        Representação estruturada e determinística do resultado.

        Valores monetários saem como texto com duas casas decimais ("1200.00")
        e datas em ISO; totais indisponíveis saem como None.
        """
        def _valor(valor: Optional[Decimal]) -> Optional[str]:
            return None if valor is None else f"{valor:.2f}"

        return {
            "rmi": _valor(self.rmi),
            "total_vencidas": _valor(self.total_vencidas),
            "meses_vencidos": self.meses_vencidos,
            "total_vincendas": _valor(self.total_vincendas),
            "total_geral": _valor(self.total_geral),
            "dib": self.dib.isoformat() if self.dib else None,
            "data_calculo": self.data_calculo.isoformat(),
            "contribuicoes_utilizadas": self.contribuicoes_utilizadas,
            "observacoes": list(self.observacoes),
        }
