"""
Pipeline completo: PDF do CNIS → extração → cálculo → relatório.

Toda informação necessária (DIB, data do cálculo, tabela de correção) entra
como parâmetro; nada de uma requisição fica guardado para a próxima.
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional, Union

from valor_causa.config import Configuracoes
from valor_causa.core.calculo_previdenciario import calcular_valor_da_causa
from valor_causa.core.extracao_cnis import extrair_dados_cnis
from valor_causa.core.lookup_data import validar_rmi
from valor_causa.core.relatorio import formatar_relatorio, gerar_texto_valor_causa
from valor_causa.core.tabela_correcao import TabelaCorrecao, carregar_tabela
from valor_causa.models.schemas import DadosCNIS, ResultadoCalculo
from valor_causa.tools.pdf_reader import LeitorCNIS, ler_texto_pdf

logger = logging.getLogger(__name__)


def extrair_cnis(caminho_pdf: Union[str, Path], leitor: Optional[LeitorCNIS] = None) -> DadosCNIS:
    """
    Lê o PDF e extrai contribuições, DIB, nome e NIT.

    Raises:
        FileNotFoundError: Se o PDF não existir.
        ErroLeituraPDF: Se o PDF não puder ser lido.
    """
    if leitor is None:
        texto = ler_texto_pdf(caminho_pdf)
    else:
        texto = leitor.ler_texto(caminho_pdf)
    return extrair_dados_cnis(texto)


def conferir_rmi(resultado: ResultadoCalculo) -> ResultadoCalculo:
    """
    Acrescenta observação quando a RMI foge do piso/teto vigentes na DIB.

    Só informa; a RMI calculada não é alterada.
    """
    if resultado.dib is None or resultado.rmi <= 0:
        return resultado

    try:
        valido, mensagem = validar_rmi(resultado.rmi, resultado.dib)
    except ValueError as e:
        logger.info("Conferência da RMI não realizada: %s", e)
        return resultado

    if valido:
        return resultado

    return resultado.model_copy(
        update={"observacoes": [*resultado.observacoes, f"Aviso: {mensagem}"]}
    )


def processar_cnis(
    caminho_pdf: Union[str, Path],
    dib: Optional[Union[str, date]] = None,
    hoje: Optional[date] = None,
    tabela: Optional[TabelaCorrecao] = None,
    configuracoes: Optional[Configuracoes] = None,
    leitor: Optional[LeitorCNIS] = None,
) -> Dict[str, Any]:
    """
    Processa um extrato CNIS e calcula o valor da causa.

    Args:
        caminho_pdf: Caminho do PDF do CNIS.
        dib: DIB informada pelo advogado; prevalece sobre a DIB do documento.
        hoje: Data do cálculo; padrão é a data atual.
        tabela: Tabela de correção já carregada; se None, carrega do caminho
            configurado.
        configuracoes: Configurações da aplicação; padrão lê do ambiente.
        leitor: Leitor de PDF (substituível em testes).

    Returns:
        Dicionário com os dados extraídos, o resultado do cálculo e os textos
        para a petição e para conferência.

    Raises:
        FileNotFoundError: Se o PDF não existir.
        ErroLeituraPDF: Se o PDF não puder ser lido.
    """
    configuracoes = configuracoes or Configuracoes.do_ambiente()
    if tabela is None:
        tabela = carregar_tabela(configuracoes.caminho_tabela_correcao)
    hoje = hoje or date.today()

    logger.info("Processando: %s", Path(caminho_pdf).name)

    # 1. EXTRAÇÃO
    dados = extrair_cnis(caminho_pdf, leitor)
    dib_utilizada = dib or dados.dib

    if dib and dados.dib and str(dib) != dados.dib:
        logger.info("DIB informada (%s) substitui a DIB do documento (%s)", dib, dados.dib)

    # 2. CÁLCULO
    resultado = calcular_valor_da_causa(
        contribuicoes=dados.contribuicoes,
        dib=dib_utilizada,
        hoje=hoje,
        tabela=tabela,
        excluir_pre_plano_real=configuracoes.excluir_pre_plano_real,
    )
    resultado = conferir_rmi(resultado)

    if not resultado.disponivel:
        logger.warning("Valor da causa indisponível: DIB ausente ou inválida (%r)", dib_utilizada)

    # 3. FORMATAÇÃO
    return {
        "dados_extraidos": dados.model_dump(mode="json"),
        "calculo": resultado,
        "texto_peticao": gerar_texto_valor_causa(resultado),
        "relatorio": formatar_relatorio(resultado, dados.nome_segurado),
    }
