from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from valor_causa import calcular_valor_da_causa
from valor_causa.core.relatorio import formatar_moeda, formatar_relatorio, gerar_texto_valor_causa


@pytest.mark.parametrize(
    "valor, esperado",
    [
        (Decimal("1234.5"), "R$ 1.234,50"),
        (Decimal("0.005"), "R$ 0,01"),
        (Decimal("1234567.891"), "R$ 1.234.567,89"),
        (0, "R$ 0,00"),
        (None, "indisponível"),
    ],
)
def test_formatar_moeda(valor, esperado):
    assert formatar_moeda(valor) == esperado


def test_petition_text_with_total(tabela_neutra, hoje):
    resultado = calcular_valor_da_causa([{"data": "01/2020", "valor": 400}], "2024-01-10", hoje, tabela_neutra)

    assert gerar_texto_valor_causa(resultado) == "\n".join(
        [
            "RMI: R$ 200,00",
            "Parcelas vencidas (6 meses): R$ 1.200,00",
            "Parcelas vincendas (13 x RMI): R$ 2.600,00",
            "Valor total da causa: R$ 3.800,00",
        ]
    )


def test_petition_text_never_shows_partial_total(tabela_neutra, hoje):
    resultado = calcular_valor_da_causa([{"data": "01/2020", "valor": 400}], "31/02/2020", hoje, tabela_neutra)

    texto = gerar_texto_valor_causa(resultado)

    assert "Parcelas vencidas (0 meses): indisponível" in texto
    assert texto.endswith("Valor total da causa: indisponível (DIB ausente ou inválida)")
    assert "2.600,00" in texto


def test_report_sections(tabela_neutra):
    resultado = calcular_valor_da_causa(
        [{"data": "01/2020", "valor": 400}], "10/01/2024", date(2024, 7, 10), tabela_neutra
    )

    relatorio = formatar_relatorio(resultado, "Maria da Silva")

    assert "CALCULO DO VALOR DA CAUSA PREVIDENCIARIA" in relatorio
    assert "SEGURADO: MARIA DA SILVA" in relatorio
    assert "DIB (Data de Inicio do Beneficio): 10/01/2024" in relatorio
    assert "VALOR TOTAL DA CAUSA: R$ 3.800,00" in relatorio
    assert "Data do Calculo: 10/07/2024" in relatorio
    assert "OBSERVACOES" not in relatorio


def test_report_lists_observations_when_dib_is_invalid(tabela_neutra, hoje):
    resultado = calcular_valor_da_causa([{"data": "01/2020", "valor": 400}], None, hoje, tabela_neutra)

    relatorio = formatar_relatorio(resultado)

    assert "nao informada ou invalida" in relatorio
    assert "VALOR TOTAL DA CAUSA: indisponível" in relatorio
    assert "3. OBSERVACOES" in relatorio
    assert "SEGURADO" not in relatorio
