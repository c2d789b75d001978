"""
Dados históricos oficiais usados para conferir a RMI calculada.

Fornece salário mínimo e teto do INSS por competência. A conferência é apenas
informativa: gera observações no relatório e nunca altera a RMI.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List, Tuple

from valor_causa.core.relatorio import formatar_moeda

logger = logging.getLogger(__name__)

# Formato: {ano: [(mes_inicio, valor), ...]}
# Se houver apenas uma tupla, o valor é válido para todo o ano
HISTORICO_SALARIO_MINIMO: Dict[int, List[Tuple[int, Decimal]]] = {
    2015: [(1, Decimal("788.00"))],
    2016: [(1, Decimal("880.00"))],
    2017: [(1, Decimal("937.00"))],
    2018: [(1, Decimal("954.00"))],
    2019: [(1, Decimal("998.00"))],
    2020: [
        (1, Decimal("1039.00")),  # Janeiro
        (2, Decimal("1045.00")),  # Fevereiro a Dezembro (MP 919/2020)
    ],
    2021: [(1, Decimal("1100.00"))],
    2022: [(1, Decimal("1212.00"))],
    2023: [
        (1, Decimal("1302.00")),  # Janeiro a Abril
        (5, Decimal("1320.00")),  # Maio a Dezembro
    ],
    2024: [(1, Decimal("1412.00"))],
    2025: [(1, Decimal("1518.00"))],
}

HISTORICO_TETO_INSS: Dict[int, List[Tuple[int, Decimal]]] = {
    2015: [(1, Decimal("4663.75"))],
    2016: [(1, Decimal("5189.82"))],
    2017: [(1, Decimal("5531.31"))],
    2018: [(1, Decimal("5645.80"))],
    2019: [(1, Decimal("5839.45"))],
    2020: [(1, Decimal("6101.06"))],
    2021: [(1, Decimal("6433.57"))],
    2022: [(1, Decimal("7087.22"))],
    2023: [
        (1, Decimal("7507.49")),  # Janeiro a Abril
        (5, Decimal("7786.02")),  # Maio a Dezembro
    ],
    2024: [(1, Decimal("7786.02"))],
    2025: [(1, Decimal("8157.41"))],
}


def _valor_vigente(
    historico: Dict[int, List[Tuple[int, Decimal]]],
    data_competencia: date,
    descricao: str,
) -> Decimal:
    ano = data_competencia.year
    mes = data_competencia.month

    if ano not in historico:
        # Ano futuro sem dados: vale o último valor conhecido
        ultimo_ano_conhecido = max(historico.keys())
        if ano > ultimo_ano_conhecido:
            logger.warning(
                "Sem dados de %s para %d; usando o último ano conhecido (%d)",
                descricao, ano, ultimo_ano_conhecido,
            )
            return historico[ultimo_ano_conhecido][-1][1]
        raise ValueError(
            f"Não há dados de {descricao} para o ano {ano}. "
            f"Anos disponíveis: {sorted(historico.keys())}"
        )

    valores_ano = historico[ano]
    valor_vigente = valores_ano[0][1]

    for mes_inicio, valor in valores_ano:
        if mes >= mes_inicio:
            valor_vigente = valor
        else:
            break

    return valor_vigente


def obter_salario_minimo(data_competencia: date) -> Decimal:
    """
    Retorna o salário mínimo vigente na competência.

    Raises:
        ValueError: Se não houver dados para o ano solicitado.

    Exemplo:
        >>> obter_salario_minimo(date(2023, 3, 1))
        Decimal('1302.00')
        >>> obter_salario_minimo(date(2023, 7, 15))
        Decimal('1320.00')
    """
    return _valor_vigente(HISTORICO_SALARIO_MINIMO, data_competencia, "salário mínimo")


def obter_teto_inss(data_competencia: date) -> Decimal:
    """
    Retorna o teto do INSS (limite máximo de benefício) vigente na competência.

    Raises:
        ValueError: Se não houver dados para o ano solicitado.
    """
    return _valor_vigente(HISTORICO_TETO_INSS, data_competencia, "teto do INSS")


def validar_rmi(rmi: Decimal, data_competencia: date) -> Tuple[bool, str]:
    """
    Confere se a RMI está entre o salário mínimo e o teto do INSS.

    Returns:
        Tupla (valido, mensagem).

    Exemplo:
        >>> validar_rmi(Decimal("800.00"), date(2024, 1, 1))
        (False, 'RMI (R$ 800,00) está abaixo do salário mínimo vigente (R$ 1.412,00).')
        >>> validar_rmi(Decimal("1500.00"), date(2024, 1, 1))
        (True, 'RMI válida.')
    """
    salario_minimo = obter_salario_minimo(data_competencia)
    teto_inss = obter_teto_inss(data_competencia)

    if rmi < salario_minimo:
        return (
            False,
            f"RMI ({formatar_moeda(rmi)}) está abaixo do salário mínimo vigente "
            f"({formatar_moeda(salario_minimo)})."
        )

    if rmi > teto_inss:
        return (
            False,
            f"RMI ({formatar_moeda(rmi)}) está acima do teto do INSS "
            f"({formatar_moeda(teto_inss)})."
        )

    return (True, "RMI válida.")
