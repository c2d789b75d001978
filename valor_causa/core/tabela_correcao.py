"""
Tabela de correção monetária por competência.

A tabela é carregada uma vez (arquivo JSON {"MM/AAAA": fator}) e não muda
depois disso; pode ser lida por várias requisições ao mesmo tempo.
"""

import json
import logging
import warnings
from collections.abc import Mapping
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Optional, Union

from valor_causa.core.datas import chave_competencia, interpretar_competencia

logger = logging.getLogger(__name__)

FATOR_NEUTRO = Decimal("1")


class TabelaCorrecao(Mapping):
    """
    Mapeamento somente-leitura competência → fator de correção.

    Competências ausentes usam o fator neutro (1), ou seja, sem correção.

    Exemplo:
        >>> tabela = TabelaCorrecao({"01/2023": "1.0512"})
        >>> tabela.fator(date(2023, 1, 1))
        Decimal('1.0512')
        >>> tabela.fator(date(2023, 2, 1))
        Decimal('1')
    """

    def __init__(self, fatores: Optional[Mapping[str, Union[Decimal, float, int, str]]] = None):
        normalizados = {}
        for chave, valor in (fatores or {}).items():
            competencia = interpretar_competencia(chave)
            if competencia is None:
                raise ValueError(f"Competência inválida na tabela de correção: {chave!r}")

            fator = _converter_fator(chave, valor)
            normalizados[chave_competencia(competencia)] = fator

        self._fatores = MappingProxyType(normalizados)

    def __getitem__(self, chave: str) -> Decimal:
        return self._fatores[chave]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fatores)

    def __len__(self) -> int:
        return len(self._fatores)

    def __repr__(self) -> str:
        return f"TabelaCorrecao({len(self)} competências)"

    def fator(self, competencia: date) -> Decimal:
        """Fator da competência exata (mês/ano de `competencia`), ou 1."""
        return self._fatores.get(chave_competencia(competencia), FATOR_NEUTRO)


def _converter_fator(chave: str, valor: object) -> Decimal:
    if isinstance(valor, bool):
        raise ValueError(f"Fator inválido para {chave}: {valor!r}")
    try:
        # str() evita levar o erro binário do float para o Decimal
        fator = Decimal(str(valor))
    except InvalidOperation:
        raise ValueError(f"Fator inválido para {chave}: {valor!r}") from None

    if not fator.is_finite() or fator <= 0:
        raise ValueError(f"Fator de correção deve ser positivo ({chave}: {valor!r})")
    return fator


def carregar_tabela(caminho: Union[str, Path]) -> TabelaCorrecao:
    """
    Carrega a tabela de correção de um arquivo JSON.

    Args:
        caminho: Arquivo no formato {"MM/AAAA": fator, ...}.

    Returns:
        TabelaCorrecao pronta para uso. Se o arquivo não existir, devolve uma
        tabela vazia (todos os fatores 1) e emite um aviso.

    Raises:
        ValueError: Se o JSON for malformado ou tiver competência/fator inválido.
    """
    arquivo = Path(caminho)

    if not arquivo.exists():
        warnings.warn(
            f"Tabela de correção não encontrada em {arquivo}. "
            "Os valores vencidos serão calculados sem correção monetária."
        )
        return TabelaCorrecao()

    try:
        # parse_float mantém a precisão dos fatores publicados
        dados = json.loads(arquivo.read_text(encoding="utf-8"), parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise ValueError(f"Tabela de correção malformada em {arquivo}: {e}") from e

    if not isinstance(dados, dict):
        raise ValueError(f"Tabela de correção em {arquivo} deve ser um objeto JSON")

    tabela = TabelaCorrecao(dados)
    logger.info("Tabela de correção carregada: %d competências (%s)", len(tabela), arquivo)
    return tabela


def salvar_tabela(tabela: Mapping[str, Decimal], caminho: Union[str, Path]) -> Path:
    """
    Grava a tabela no formato lido por `carregar_tabela`, em ordem cronológica.

    Raises:
        ValueError: Se alguma competência ou fator for inválido.
    """
    tabela = TabelaCorrecao(tabela)
    arquivo = Path(caminho)
    arquivo.parent.mkdir(parents=True, exist_ok=True)

    ordenadas = sorted(tabela.items(), key=lambda item: interpretar_competencia(item[0]))
    conteudo = "{\n" + ",\n".join(
        f'  "{chave}": {fator}' for chave, fator in ordenadas
    ) + "\n}\n"

    arquivo.write_text(conteudo, encoding="utf-8")
    return arquivo
