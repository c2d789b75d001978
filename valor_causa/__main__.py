"""
Linha de comando do cálculo do valor da causa.

Uso:
    python -m valor_causa calcular cnis.pdf [--dib 15/06/2021] [--json]
    python -m valor_causa extrair cnis.pdf
    python -m valor_causa tabela --inicio 2015-01 [--fim 2025-06] [--indice INPC] [--saida dados/correcao_monetaria.json]
"""

import argparse
import json
import sys
from datetime import date
from typing import List, Optional

from pydantic import ValidationError

from valor_causa.config import Configuracoes, configurar_logging
from valor_causa.core.datas import interpretar_competencia, interpretar_data
from valor_causa.core.financeiro_bcb import GerenteFinanceiroBCB
from valor_causa.core.tabela_correcao import salvar_tabela
from valor_causa.processador import extrair_cnis, processar_cnis
from valor_causa.tools.pdf_reader import ErroLeituraPDF


def _competencia(valor: str) -> date:
    competencia = interpretar_competencia(valor)
    if competencia is None:
        raise argparse.ArgumentTypeError(f"Competência inválida: {valor} (use AAAA-MM ou MM/AAAA)")
    return competencia


def _data(valor: str) -> date:
    interpretada = interpretar_data(valor)
    if not interpretada.valida:
        raise argparse.ArgumentTypeError(f"Data inválida: {valor} (use DD/MM/AAAA ou AAAA-MM-DD)")
    return interpretada.data


def criar_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="valor_causa",
        description="Cálculo do valor da causa previdenciária a partir do CNIS",
    )
    subparsers = parser.add_subparsers(dest="comando", required=True)

    calcular = subparsers.add_parser("calcular", help="Calcula RMI, vencidas, vincendas e total")
    calcular.add_argument("pdf", help="PDF do extrato CNIS")
    # DIB fica como texto: uma DIB inválida gera resultado indisponível, não erro
    calcular.add_argument("--dib", help="DIB (DD/MM/AAAA ou AAAA-MM-DD); prevalece sobre a do documento")
    calcular.add_argument("--hoje", type=_data, help="Data do cálculo (padrão: hoje)")
    calcular.add_argument("--json", action="store_true", help="Saída estruturada em JSON")

    extrair = subparsers.add_parser("extrair", help="Mostra os dados extraídos do CNIS")
    extrair.add_argument("pdf", help="PDF do extrato CNIS")

    tabela = subparsers.add_parser("tabela", help="Gera a tabela de correção com índices do BCB")
    tabela.add_argument("--inicio", type=_competencia, required=True, help="Primeira competência")
    tabela.add_argument("--fim", type=_data, default=None, help="Data final da correção (padrão: hoje)")
    tabela.add_argument("--indice", default=None, help="INPC, IPCA-E ou SELIC (padrão: configuração)")
    tabela.add_argument("--saida", default=None, help="Arquivo JSON de destino (padrão: configuração)")

    return parser


def _comando_calcular(args: argparse.Namespace, configuracoes: Configuracoes) -> int:
    resultado = processar_cnis(
        args.pdf,
        dib=args.dib,
        hoje=args.hoje,
        configuracoes=configuracoes,
    )

    if args.json:
        saida = {
            "dados_extraidos": resultado["dados_extraidos"],
            "calculo": resultado["calculo"].como_dict(),
        }
        print(json.dumps(saida, indent=2, ensure_ascii=False))
    else:
        print(resultado["relatorio"])
        print()
        print(resultado["texto_peticao"])

    # Sem DIB válida não há valor da causa para a petição
    return 0 if resultado["calculo"].disponivel else 2


def _comando_extrair(args: argparse.Namespace) -> int:
    dados = extrair_cnis(args.pdf)
    print(json.dumps(dados.model_dump(mode="json"), indent=2, ensure_ascii=False))
    return 0


def _comando_tabela(args: argparse.Namespace, configuracoes: Configuracoes) -> int:
    indice = (args.indice or configuracoes.indice_correcao).upper()
    destino = args.saida or configuracoes.caminho_tabela_correcao
    fim = args.fim or date.today()

    tabela = GerenteFinanceiroBCB().gerar_tabela_correcao(args.inicio, fim, indice)
    arquivo = salvar_tabela(tabela, destino)

    print(f"Tabela {indice} gravada em {arquivo} ({len(tabela)} competências)")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Ponto de entrada da linha de comando."""
    args = criar_parser().parse_args(argv)

    try:
        configuracoes = Configuracoes.do_ambiente()
    except ValidationError as e:
        print(f"ERRO: configuração inválida.\n{e}", file=sys.stderr)
        return 1

    configurar_logging(configuracoes.nivel_log)

    try:
        if args.comando == "calcular":
            return _comando_calcular(args, configuracoes)
        if args.comando == "extrair":
            return _comando_extrair(args)
        return _comando_tabela(args, configuracoes)

    except (FileNotFoundError, ErroLeituraPDF, ValueError) as e:
        print(f"ERRO: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
