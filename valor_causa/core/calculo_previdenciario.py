"""
Cálculo determinístico do valor da causa previdenciária.

Implementa, sem estado global e sem consultar o relógio do sistema:
1. Filtro das contribuições válidas do CNIS.
2. RMI: média das 80% maiores contribuições × 50%.
3. Parcelas vencidas: RMI corrigida mês a mês desde a DIB.
4. Parcelas vincendas: 13 × RMI (12 parcelas + abono anual).
5. Valor total da causa.

Arredondamento: todos os valores monetários são arredondados para centavos
com ROUND_HALF_UP. As vencidas são somadas sem arredondamento e arredondadas
uma única vez no total.
"""

import logging
from datetime import date
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, List, Optional, Union

from dateutil.relativedelta import relativedelta

from valor_causa.core.datas import interpretar_competencia, interpretar_data
from valor_causa.core.tabela_correcao import TabelaCorrecao
from valor_causa.models.schemas import (
    Contribuicao,
    ContribuicaoBruta,
    ResultadoCalculo,
    ResultadoVencidas,
)

logger = logging.getLogger(__name__)

CENTAVOS = Decimal("0.01")
PERCENTUAL_MAIORES_CONTRIBUICOES = Decimal("0.8")
COEFICIENTE_RMI = Decimal("0.5")
PARCELAS_VINCENDAS = 13  # 12 mensais + abono anual

# Contribuições anteriores a 04/1994 ficam de fora quando o filtro é ligado
INICIO_PLANO_REAL = date(1994, 4, 1)


def arredondar(valor: Decimal) -> Decimal:
    """Arredonda para centavos (ROUND_HALF_UP)."""
    return valor.quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def converter_valor(valor: object) -> Optional[Decimal]:
    """
    Converte o valor de uma contribuição em Decimal finito, ou None.

    Aceita números e texto no formato brasileiro ("1.234,56") ou com ponto
    decimal ("1234.56"). Booleanos não são valores.
    """
    if isinstance(valor, bool) or valor is None:
        return None

    if isinstance(valor, Decimal):
        convertido = valor
    elif isinstance(valor, (int, float)):
        convertido = Decimal(str(valor))
    elif isinstance(valor, str):
        texto = valor.replace("R$", "").strip()
        if "," in texto:
            texto = texto.replace(".", "").replace(",", ".")
        try:
            convertido = Decimal(texto)
        except InvalidOperation:
            return None
    else:
        return None

    if not convertido.is_finite():
        return None
    return convertido


def filtrar_contribuicoes(
    registros: Iterable[Union[ContribuicaoBruta, Contribuicao, dict]],
    excluir_pre_plano_real: bool = False,
) -> List[Contribuicao]:
    """
    Seleciona as contribuições válidas para o cálculo da RMI.

    Args:
        registros: Contribuições brutas (modelos ou dicts com "data" e "valor").
        excluir_pre_plano_real: Descarta competências anteriores a 04/1994.

    Returns:
        Lista de Contribuicao com valor (em centavos) positivo e competência
        válida. Entradas inválidas são descartadas silenciosamente; lista
        vazia não é erro.
    """
    validas: List[Contribuicao] = []

    for registro in registros:
        if isinstance(registro, Contribuicao):
            data_bruta, valor_bruto = registro.competencia, registro.valor
        elif isinstance(registro, ContribuicaoBruta):
            data_bruta, valor_bruto = registro.data, registro.valor
        elif isinstance(registro, dict):
            data_bruta, valor_bruto = registro.get("data"), registro.get("valor")
        else:
            logger.debug("Registro ignorado (tipo não suportado): %r", registro)
            continue

        valor = converter_valor(valor_bruto)
        if valor is not None:
            valor = arredondar(valor)
        # Abaixo de meio centavo arredonda para zero e não conta
        if valor is None or valor <= 0:
            logger.debug("Contribuição ignorada (valor inválido): %r", registro)
            continue

        competencia = interpretar_competencia(data_bruta)
        if competencia is None:
            logger.debug("Contribuição ignorada (competência inválida): %r", registro)
            continue

        if excluir_pre_plano_real and competencia < INICIO_PLANO_REAL:
            logger.debug("Contribuição anterior ao Plano Real ignorada: %s", competencia)
            continue

        validas.append(Contribuicao(competencia=competencia, valor=valor))

    return validas


def calcular_rmi(contribuicoes: Iterable[Contribuicao]) -> Decimal:
    """
    Calcula a Renda Mensal Inicial.

    Ordena as contribuições em ordem decrescente, usa as 80% maiores (contagem
    arredondada para baixo, mínimo de 1), tira a média e aplica 50%.

    Exemplo:
        >>> valores = [100, 200, 300, 400, 500]
        >>> contribs = [Contribuicao(competencia=date(2020, m, 1), valor=v)
        ...             for m, v in enumerate(valores, 1)]
        >>> calcular_rmi(contribs)
        Decimal('175.00')
    """
    valores = sorted((c.valor for c in contribuicoes), reverse=True)
    if not valores:
        return arredondar(Decimal("0"))

    quantidade = int(
        (len(valores) * PERCENTUAL_MAIORES_CONTRIBUICOES).to_integral_value(rounding=ROUND_DOWN)
    )
    maiores = valores[:max(quantidade, 1)]

    media = sum(maiores, Decimal("0")) / len(maiores)
    return arredondar(media * COEFICIENTE_RMI)


def meses_decorridos(inicio: date, fim: date) -> int:
    """Meses civis completos entre duas datas (nunca negativo)."""
    delta = relativedelta(fim, inicio)
    return max(delta.years * 12 + delta.months, 0)


def calcular_parcelas_vencidas(
    rmi: Decimal,
    dib: object,
    hoje: date,
    tabela: TabelaCorrecao,
) -> ResultadoVencidas:
    """
    Calcula as parcelas vencidas entre a DIB e `hoje`.

    Para cada mês i em 0..meses-1, a competência DIB + i meses recebe
    RMI × fator da tabela para essa competência (1 quando ausente).

    Args:
        rmi: Renda Mensal Inicial.
        dib: DIB como texto ("DD/MM/AAAA" ou "AAAA-MM-DD") ou date.
        hoje: Data de referência do cálculo (injetada pelo chamador).
        tabela: Tabela de correção monetária.

    Returns:
        ResultadoVencidas. Com DIB ausente ou inválida: total None e 0 meses.
    """
    interpretada = interpretar_data(dib)
    if not interpretada.valida:
        logger.info("DIB ausente ou inválida (%r): vencidas indisponíveis", dib)
        return ResultadoVencidas(total=None, meses=0)

    inicio = interpretada.data
    meses = meses_decorridos(inicio, hoje)

    total = Decimal("0")
    for i in range(meses):
        competencia = inicio + relativedelta(months=i)
        total += rmi * tabela.fator(competencia)

    return ResultadoVencidas(total=arredondar(total), meses=meses)


def calcular_parcelas_vincendas(rmi: Decimal) -> Decimal:
    """13 × RMI: doze parcelas mensais mais o abono anual."""
    return arredondar(rmi * PARCELAS_VINCENDAS)


def totalizar(vencidas: ResultadoVencidas, vincendas: Decimal) -> Optional[Decimal]:
    """Valor total da causa; None quando as vencidas estão indisponíveis."""
    if vencidas.total is None:
        return None
    return arredondar(vencidas.total + vincendas)


def calcular_valor_da_causa(
    contribuicoes: Iterable[Union[ContribuicaoBruta, Contribuicao, dict]],
    dib: object,
    hoje: date,
    tabela: TabelaCorrecao,
    excluir_pre_plano_real: bool = False,
) -> ResultadoCalculo:
    """
    Pipeline completo: filtro → RMI → vencidas → vincendas → total.

    Nunca levanta exceção por dado malformado: contribuições inválidas são
    descartadas e uma DIB inválida deixa vencidas e total como None.

    Exemplo:
        >>> resultado = calcular_valor_da_causa(
        ...     contribuicoes=[{"data": "01/2020", "valor": 400.0}],
        ...     dib="2024-01-10",
        ...     hoje=date(2024, 7, 10),
        ...     tabela=TabelaCorrecao(),
        ... )
        >>> resultado.total_geral
        Decimal('3800.00')
    """
    validas = filtrar_contribuicoes(contribuicoes, excluir_pre_plano_real)
    rmi = calcular_rmi(validas)
    vencidas = calcular_parcelas_vencidas(rmi, dib, hoje, tabela)
    vincendas = calcular_parcelas_vincendas(rmi)
    total = totalizar(vencidas, vincendas)

    observacoes: List[str] = []
    if not validas:
        observacoes.append("Nenhuma contribuição válida encontrada: RMI considerada zero.")
    if excluir_pre_plano_real:
        observacoes.append("Contribuições anteriores a 04/1994 desconsideradas.")
    if vencidas.total is None:
        observacoes.append(
            "DIB ausente ou inválida: parcelas vencidas e valor total indisponíveis."
        )

    return ResultadoCalculo(
        rmi=rmi,
        total_vencidas=vencidas.total,
        meses_vencidos=vencidas.meses,
        total_vincendas=vincendas,
        total_geral=total,
        dib=interpretar_data(dib).data,
        data_calculo=hoje,
        contribuicoes_utilizadas=len(validas),
        observacoes=observacoes,
    )
