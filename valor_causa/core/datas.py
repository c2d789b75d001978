"""
Interpretação de datas textuais usadas no cálculo previdenciário.

A DIB pode chegar em ISO (AAAA-MM-DD) ou no formato brasileiro (DD/MM/AAAA).
Cada formato é tentado em ordem; o resultado informa a data e qual formato
casou, ou fica vazio quando nenhum serviu.
"""

from datetime import date, datetime
from typing import NamedTuple, Optional, Sequence

# Ordem de tentativa para a DIB
FORMATOS_DIB = ("%Y-%m-%d", "%d/%m/%Y")

# Competências: mês/ano, ou uma data completa da qual só o mês interessa
FORMATOS_COMPETENCIA = ("%m/%Y", "%Y-%m", "%d/%m/%Y", "%Y-%m-%d")


class DataInterpretada(NamedTuple):
    """Resultado da interpretação: a data e o formato que a produziu."""

    data: Optional[date]
    formato: Optional[str] = None

    @property
    def valida(self) -> bool:
        return self.data is not None


DATA_INVALIDA = DataInterpretada(None)


def interpretar_data(
    valor: object,
    formatos: Sequence[str] = FORMATOS_DIB,
) -> DataInterpretada:
    """
    Tenta interpretar `valor` em cada formato, na ordem dada.

    Args:
        valor: Texto, `date` ou `datetime`. Qualquer outro tipo é inválido.
        formatos: Formatos `strptime` a tentar.

    Returns:
        DataInterpretada com a data e o formato, ou DATA_INVALIDA.

    Exemplo:
        >>> interpretar_data("15/06/2021")
        DataInterpretada(data=datetime.date(2021, 6, 15), formato='%d/%m/%Y')
        >>> interpretar_data("31/02/2020").valida
        False
    """
    if isinstance(valor, datetime):
        return DataInterpretada(valor.date(), "datetime")
    if isinstance(valor, date):
        return DataInterpretada(valor, "date")
    if not isinstance(valor, str):
        return DATA_INVALIDA

    texto = valor.strip()
    if not texto:
        return DATA_INVALIDA

    for formato in formatos:
        try:
            return DataInterpretada(datetime.strptime(texto, formato).date(), formato)
        except ValueError:
            continue

    return DATA_INVALIDA


def interpretar_competencia(valor: object) -> Optional[date]:
    """
    Converte uma competência no primeiro dia do seu mês.

    Exemplo:
        >>> interpretar_competencia("03/2019")
        datetime.date(2019, 3, 1)
        >>> interpretar_competencia("13/2019") is None
        True
    """
    interpretada = interpretar_data(valor, FORMATOS_COMPETENCIA)
    if not interpretada.valida:
        return None
    return interpretada.data.replace(day=1)


def chave_competencia(data: date) -> str:
    """Chave "MM/AAAA" usada na tabela de correção."""
    return data.strftime("%m/%Y")
