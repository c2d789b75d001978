"""
Formatação dos resultados para a petição e para conferência.

Gera texto limpo, sem emojis, pronto para copiar no Word.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Union

from valor_causa.models.schemas import ResultadoCalculo

INDISPONIVEL = "indisponível"


def formatar_moeda(valor: Optional[Union[Decimal, float, int]]) -> str:
    """
    Formata um valor em reais no padrão brasileiro.

    Exemplo:
        >>> formatar_moeda(Decimal("1234.5"))
        'R$ 1.234,50'
        >>> formatar_moeda(None)
        'indisponível'
    """
    if valor is None:
        return INDISPONIVEL

    centavos = Decimal(str(valor)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"R$ {centavos:,.2f}".replace(',', '_').replace('.', ',').replace('_', '.')


def gerar_texto_valor_causa(resultado: ResultadoCalculo) -> str:
    """
    Parágrafo do valor da causa para a petição inicial.

    Quando a DIB é inválida o texto diz que o valor está indisponível, em vez
    de apresentar um total parcial.
    """
    linhas = [
        f"RMI: {formatar_moeda(resultado.rmi)}",
        f"Parcelas vencidas ({resultado.meses_vencidos} meses): "
        f"{formatar_moeda(resultado.total_vencidas)}",
        f"Parcelas vincendas (13 x RMI): {formatar_moeda(resultado.total_vincendas)}",
    ]

    if resultado.disponivel:
        linhas.append(f"Valor total da causa: {formatar_moeda(resultado.total_geral)}")
    else:
        linhas.append(
            "Valor total da causa: indisponível (DIB ausente ou inválida)"
        )

    return "\n".join(linhas)


def formatar_relatorio(resultado: ResultadoCalculo, nome_segurado: Optional[str] = None) -> str:
    """
    Relatório completo do cálculo, em seções.

    Args:
        resultado: Resultado do cálculo do valor da causa.
        nome_segurado: Nome extraído do CNIS, se houver.

    Returns:
        String formatada para documento oficial.
    """
    linhas: List[str] = []

    linhas.append("=" * 80)
    linhas.append("CALCULO DO VALOR DA CAUSA PREVIDENCIARIA")
    linhas.append("=" * 80)
    linhas.append("")

    if nome_segurado:
        linhas.append("SEGURADO: " + nome_segurado.upper())
        linhas.append("")

    linhas.append("-" * 80)
    linhas.append("1. DADOS DO BENEFICIO")
    linhas.append("-" * 80)
    linhas.append("")

    if resultado.dib:
        linhas.append(f"DIB (Data de Inicio do Beneficio): {resultado.dib.strftime('%d/%m/%Y')}")
    else:
        linhas.append("DIB (Data de Inicio do Beneficio): nao informada ou invalida")

    linhas.append(f"Contribuicoes consideradas: {resultado.contribuicoes_utilizadas}")
    linhas.append(f"RMI (Renda Mensal Inicial): {formatar_moeda(resultado.rmi)}")
    linhas.append("")

    linhas.append("-" * 80)
    linhas.append("2. PARCELAS")
    linhas.append("-" * 80)
    linhas.append("")
    linhas.append(f"Meses vencidos: {resultado.meses_vencidos}")
    linhas.append(f"Parcelas vencidas (corrigidas): {formatar_moeda(resultado.total_vencidas)}")
    linhas.append(f"Parcelas vincendas (13 x RMI): {formatar_moeda(resultado.total_vincendas)}")
    linhas.append("")

    linhas.append("=" * 80)
    linhas.append(f"VALOR TOTAL DA CAUSA: {formatar_moeda(resultado.total_geral)}")
    linhas.append("=" * 80)
    linhas.append("")

    if resultado.observacoes:
        linhas.append("-" * 80)
        linhas.append("3. OBSERVACOES")
        linhas.append("-" * 80)
        linhas.append("")
        for i, obs in enumerate(resultado.observacoes, 1):
            linhas.append(f"{i}. {obs}")
        linhas.append("")

    linhas.append("-" * 80)
    linhas.append(f"Data do Calculo: {resultado.data_calculo.strftime('%d/%m/%Y')}")
    linhas.append("=" * 80)

    return "\n".join(linhas)
