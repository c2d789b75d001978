"""
Extração de contribuições e DIB do texto de um extrato CNIS.

Recebe o texto já extraído do PDF (ver valor_causa.tools.pdf_reader) e
devolve os registros brutos; a validação fica a cargo do cálculo.
"""

import logging
import re
from typing import List, Optional

from valor_causa.core.calculo_previdenciario import converter_valor
from valor_causa.models.schemas import ContribuicaoBruta, DadosCNIS

logger = logging.getLogger(__name__)

# Competência MM/AAAA (que não seja o final de uma data completa) seguida do valor
REGEX_CONTRIBUICAO = re.compile(r"(?<![\d/])(\d{2}/\d{4})\D+(\d{1,3}(?:\.\d{3})*,\d{2})")
REGEX_DATA = re.compile(r"(\d{2}/\d{2}/\d{4})")
REGEX_MARCADOR_BENEFICIO = re.compile(r"NB\s+\d+|(?i:Data In[ií]cio)")
REGEX_NOME = re.compile(r"Nome:\s*(.+)")
REGEX_NIT = re.compile(r"NIT:\s*([\d\.\-/]+)")

# Linhas, a partir do marcador, em que a data da DIB é procurada
JANELA_BUSCA_DIB = 4


def extrair_contribuicoes(texto: str) -> List[ContribuicaoBruta]:
    """
    Encontra todos os pares competência/valor do texto.

    Exemplo:
        >>> extrair_contribuicoes("01/2020  1.234,56")
        [ContribuicaoBruta(data='01/2020', valor=Decimal('1234.56'))]
    """
    contribuicoes = []
    for competencia, valor in REGEX_CONTRIBUICAO.findall(texto):
        contribuicoes.append(
            ContribuicaoBruta(data=competencia, valor=converter_valor(valor))
        )
    return contribuicoes


def extrair_dib(texto: str) -> Optional[str]:
    """
    Procura a DIB perto da identificação do benefício.

    A primeira data DD/MM/AAAA na linha que contém "NB <número>" ou
    "Data Início", ou nas três linhas seguintes, é considerada a DIB.

    Returns:
        A data no formato do documento, ou None.
    """
    linhas = texto.splitlines()

    for i, linha in enumerate(linhas):
        if not REGEX_MARCADOR_BENEFICIO.search(linha):
            continue

        for linha_alvo in linhas[i:i + JANELA_BUSCA_DIB]:
            encontrada = REGEX_DATA.search(linha_alvo)
            if encontrada:
                return encontrada.group(1)

    return None


def extrair_dados_cnis(texto: str) -> DadosCNIS:
    """
    Extrai do texto do CNIS tudo o que o cálculo precisa.

    Args:
        texto: Texto completo do extrato (todas as páginas).

    Returns:
        DadosCNIS com contribuições brutas, DIB textual, nome e NIT.
    """
    nome = REGEX_NOME.search(texto)
    nit = REGEX_NIT.search(texto)

    dados = DadosCNIS(
        nome_segurado=nome.group(1).strip() if nome else None,
        nit=nit.group(1).strip() if nit else None,
        dib=extrair_dib(texto),
        contribuicoes=extrair_contribuicoes(texto),
    )

    logger.info(
        "CNIS extraído: %d contribuições, DIB %s",
        len(dados.contribuicoes),
        dados.dib or "não encontrada",
    )
    return dados
