from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from valor_causa.core.tabela_correcao import TabelaCorrecao


@pytest.fixture()
def tabela_neutra() -> TabelaCorrecao:
    """Tabela sem competências: todo fator é 1."""
    return TabelaCorrecao()


@pytest.fixture()
def hoje() -> date:
    return date(2024, 7, 10)


@pytest.fixture()
def texto_cnis() -> str:
    return "\n".join(
        [
            "INSS - Extrato Previdenciário",
            "Nome: MARIA DA SILVA OLIVEIRA",
            "NIT: 123.45678.90-1",
            "NB 1876543210 Aposentadoria por Idade",
            "Data Início",
            "15/06/2021",
            "Remunerações",
            "01/2020   1.500,00",
            "02/2020   1.600,50",
            "03/2020   850,00",
        ]
    )


@pytest.fixture()
def contribuicoes_com_valores():
    """Fábrica de contribuições brutas em meses consecutivos de 2020."""
    def fabricar(*valores) -> list:
        return [
            {"data": f"{mes:02d}/2020", "valor": Decimal(str(valor))}
            for mes, valor in enumerate(valores, start=1)
        ]

    return fabricar
