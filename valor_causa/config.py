"""
Configurações lidas do ambiente (e do arquivo .env, se existir).

Variáveis:
- CAMINHO_TABELA_CORRECAO: JSON da tabela de correção monetária.
- EXCLUIR_PRE_PLANO_REAL: descarta contribuições anteriores a 04/1994.
- INDICE_CORRECAO: índice usado para gerar a tabela (INPC, IPCA-E, SELIC).
- NIVEL_LOG: nível do logging (DEBUG, INFO, WARNING...).
"""

import logging
import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

CAMINHO_TABELA_PADRAO = Path("dados") / "correcao_monetaria.json"


class Configuracoes(BaseModel):
    """Parâmetros da aplicação; valores inválidos falham na inicialização."""

    caminho_tabela_correcao: Path = Field(
        default=CAMINHO_TABELA_PADRAO,
        description="Arquivo JSON {\"MM/AAAA\": fator} com a correção monetária"
    )
    excluir_pre_plano_real: bool = Field(
        default=False,
        description="Se True, contribuições anteriores a 04/1994 não entram na RMI"
    )
    indice_correcao: Literal["INPC", "IPCA-E", "SELIC"] = Field(
        default="INPC",
        description="Índice do BCB usado para gerar a tabela de correção"
    )
    nivel_log: str = Field(default="INFO")

    @field_validator("indice_correcao", mode="before")
    @classmethod
    def normalizar_indice(cls, valor: object) -> object:
        return valor.strip().upper() if isinstance(valor, str) else valor

    @field_validator("nivel_log")
    @classmethod
    def validar_nivel_log(cls, valor: str) -> str:
        nivel = valor.strip().upper()
        if not isinstance(logging.getLevelName(nivel), int):
            raise ValueError(f"Nível de log desconhecido: {valor}")
        return nivel

    @classmethod
    def do_ambiente(cls, arquivo_env: Optional[Path] = None) -> "Configuracoes":
        """
        Monta as configurações a partir das variáveis de ambiente.

        Args:
            arquivo_env: .env a carregar; por padrão procura no diretório atual.

        Raises:
            pydantic.ValidationError: Se alguma variável tiver valor inválido.
        """
        load_dotenv(arquivo_env or find_dotenv(usecwd=True))

        valores = {
            "caminho_tabela_correcao": os.getenv("CAMINHO_TABELA_CORRECAO"),
            "excluir_pre_plano_real": os.getenv("EXCLUIR_PRE_PLANO_REAL"),
            "indice_correcao": os.getenv("INDICE_CORRECAO"),
            "nivel_log": os.getenv("NIVEL_LOG"),
        }
        return cls(**{chave: valor for chave, valor in valores.items() if valor})


def configurar_logging(nivel: str = "INFO") -> None:
    """Configura o logging da aplicação (formato único para CLI e biblioteca)."""
    logging.basicConfig(
        level=nivel,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
