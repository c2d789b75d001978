from __future__ import annotations

from datetime import date
from decimal import Decimal

import pandas as pd
import pytest

from valor_causa.core import financeiro_bcb
from valor_causa.core.financeiro_bcb import GerenteFinanceiroBCB


@pytest.fixture()
def gerente() -> GerenteFinanceiroBCB:
    return GerenteFinanceiroBCB()


def _serie(nome, valores, inicio="2023-01-01"):
    indice = pd.date_range(inicio, periods=len(valores), freq="MS")
    return pd.DataFrame({nome: valores}, index=indice)


def test_monthly_rates_from_sgs(monkeypatch, gerente):
    chamadas = []

    def sgs_get(codes, start, end):
        chamadas.append(codes)
        return _serie("inpc", [0.46, float("nan"), 0.77])

    monkeypatch.setattr(financeiro_bcb.sgs, "get", sgs_get)

    taxas = gerente.get_taxas_mensais("INPC", date(2023, 1, 1), date(2023, 3, 31))

    assert chamadas == [{"inpc": 188}]
    assert taxas == {"01/2023": Decimal("0.46"), "03/2023": Decimal("0.77")}


def test_cumulative_factors_from_oldest_to_newest(monkeypatch, gerente):
    monkeypatch.setattr(financeiro_bcb.sgs, "get", lambda codes, start, end: _serie("inpc", [1.0, 2.0]))

    tabela = gerente.gerar_tabela_correcao(date(2023, 1, 1), date(2023, 2, 28), "inpc")

    assert list(tabela) == ["01/2023", "02/2023"]
    assert tabela.fator(date(2023, 2, 1)) == Decimal("1.02")
    assert tabela.fator(date(2023, 1, 1)) == Decimal("1.0302")


def test_api_failure_falls_back_with_warning(monkeypatch, gerente):
    def sgs_get(codes, start, end):
        raise ConnectionError("sem rede")

    monkeypatch.setattr(financeiro_bcb.sgs, "get", sgs_get)

    with pytest.warns(UserWarning, match="fallback"):
        tabela = gerente.gerar_tabela_correcao(date(2023, 1, 1), date(2023, 2, 28), "INPC")

    assert tabela.fator(date(2023, 2, 1)) == Decimal("1.004")
    assert tabela.fator(date(2023, 1, 1)) == Decimal("1.008016")


def test_empty_series_falls_back_with_warning(monkeypatch, gerente):
    monkeypatch.setattr(financeiro_bcb.sgs, "get", lambda codes, start, end: pd.DataFrame())

    with pytest.warns(UserWarning, match="Nenhum dado SELIC"):
        taxas = gerente.get_taxas_mensais("SELIC", date(2024, 12, 1), date(2025, 1, 31))

    assert taxas == {"12/2024": Decimal("0.92"), "01/2025": Decimal("0.90")}


def test_unsupported_index(gerente):
    with pytest.raises(ValueError, match="não suportado"):
        gerente.gerar_tabela_correcao(date(2023, 1, 1), date(2023, 2, 1), "IGP-M")


def test_empty_period(gerente):
    with pytest.raises(ValueError, match="anterior"):
        gerente.gerar_tabela_correcao(date(2023, 5, 1), date(2023, 2, 1))
