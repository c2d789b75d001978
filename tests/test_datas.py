from __future__ import annotations

from datetime import date, datetime

import pytest

from valor_causa.core.datas import (
    DATA_INVALIDA,
    chave_competencia,
    interpretar_competencia,
    interpretar_data,
)


def test_iso_is_tried_before_brazilian_format():
    assert interpretar_data("2021-06-15") == (date(2021, 6, 15), "%Y-%m-%d")
    assert interpretar_data(" 15/06/2021 ") == (date(2021, 6, 15), "%d/%m/%Y")


def test_date_objects_pass_through():
    assert interpretar_data(date(2021, 6, 15)).data == date(2021, 6, 15)
    assert interpretar_data(datetime(2021, 6, 15, 13, 30)).data == date(2021, 6, 15)


@pytest.mark.parametrize("valor", ["31/02/2020", "2020-13-01", "", "   ", None, 15062021, "ontem"])
def test_invalid_values(valor):
    interpretada = interpretar_data(valor)

    assert interpretada == DATA_INVALIDA
    assert not interpretada.valida


@pytest.mark.parametrize(
    "valor, esperado",
    [
        ("03/2019", date(2019, 3, 1)),
        ("2019-03", date(2019, 3, 1)),
        ("17/03/2019", date(2019, 3, 1)),
        ("2019-03-17", date(2019, 3, 1)),
        (date(2019, 3, 17), date(2019, 3, 1)),
        ("13/2019", None),
        ("março", None),
    ],
)
def test_competencia_is_first_day_of_month(valor, esperado):
    assert interpretar_competencia(valor) == esperado


def test_chave_competencia():
    assert chave_competencia(date(2023, 1, 31)) == "01/2023"
