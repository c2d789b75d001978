from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from valor_causa.config import Configuracoes

VARIAVEIS = ("CAMINHO_TABELA_CORRECAO", "EXCLUIR_PRE_PLANO_REAL", "INDICE_CORRECAO", "NIVEL_LOG")


@pytest.fixture()
def ambiente_limpo(monkeypatch, tmp_path):
    # setenv antes do delenv para o monkeypatch restaurar o que o .env vier a carregar
    for nome in VARIAVEIS:
        monkeypatch.setenv(nome, "")
        monkeypatch.delenv(nome)
    return tmp_path


def test_defaults(ambiente_limpo):
    configuracoes = Configuracoes.do_ambiente(ambiente_limpo / ".env")

    assert configuracoes.caminho_tabela_correcao == Path("dados") / "correcao_monetaria.json"
    assert configuracoes.excluir_pre_plano_real is False
    assert configuracoes.indice_correcao == "INPC"
    assert configuracoes.nivel_log == "INFO"


def test_values_from_environment(ambiente_limpo, monkeypatch):
    monkeypatch.setenv("CAMINHO_TABELA_CORRECAO", "/tmp/fatores.json")
    monkeypatch.setenv("EXCLUIR_PRE_PLANO_REAL", "true")
    monkeypatch.setenv("INDICE_CORRECAO", " ipca-e ")
    monkeypatch.setenv("NIVEL_LOG", "debug")

    configuracoes = Configuracoes.do_ambiente(ambiente_limpo / ".env")

    assert configuracoes.caminho_tabela_correcao == Path("/tmp/fatores.json")
    assert configuracoes.excluir_pre_plano_real is True
    assert configuracoes.indice_correcao == "IPCA-E"
    assert configuracoes.nivel_log == "DEBUG"


def test_values_from_dotenv_file(ambiente_limpo):
    arquivo = ambiente_limpo / ".env"
    arquivo.write_text("INDICE_CORRECAO=SELIC\nEXCLUIR_PRE_PLANO_REAL=1\n", encoding="utf-8")

    configuracoes = Configuracoes.do_ambiente(arquivo)

    assert configuracoes.indice_correcao == "SELIC"
    assert configuracoes.excluir_pre_plano_real is True


@pytest.mark.parametrize(
    "variavel, valor",
    [("INDICE_CORRECAO", "IGP-M"), ("NIVEL_LOG", "verboso"), ("EXCLUIR_PRE_PLANO_REAL", "talvez")],
)
def test_invalid_values_fail_at_startup(ambiente_limpo, monkeypatch, variavel, valor):
    monkeypatch.setenv(variavel, valor)

    with pytest.raises(ValidationError):
        Configuracoes.do_ambiente(ambiente_limpo / ".env")
