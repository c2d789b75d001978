"""
Geração da tabela de correção monetária a partir de índices do Banco Central.

Busca as taxas mensais oficiais (INPC, IPCA-E ou SELIC) no SGS/BCB e monta,
para cada competência, o fator acumulado dessa competência até a data final.
O resultado é gravado no JSON lido por `carregar_tabela`.

ATENÇÃO JURÍDICA:
- Parcela antiga acumula TODOS os índices desde seu vencimento até a data final;
  parcela recente acumula menos índices.
- SELIC: o código correto é 4390 (Taxa Selic acumulada no mês %).
"""

import logging
import math
import warnings
from datetime import date
from decimal import Decimal
from typing import Dict

from bcb import sgs
from dateutil.relativedelta import relativedelta

from valor_causa.core.datas import chave_competencia, interpretar_competencia
from valor_causa.core.tabela_correcao import TabelaCorrecao

logger = logging.getLogger(__name__)

# Casas decimais guardadas em cada fator da tabela
PRECISAO_FATOR = Decimal("0.00000001")


class GerenteFinanceiroBCB:
    """
    Monta tabelas de correção com índices oficiais do Banco Central.

    Integra-se com a API do BCB (Sistema Gerenciador de Séries Temporais - SGS).
    """

    # Códigos das séries temporais do SGS/BCB
    CODIGOS_SERIES = {
        "SELIC": 4390,   # Taxa SELIC acumulada no mês (%)
        "INPC": 188,     # INPC mensal (%)
        "IPCA-E": 433,   # IPCA-E mensal (%)
    }

    # Taxas mensais médias (%) usadas quando a API do BCB falhar
    TAXAS_FALLBACK = {
        "INPC": Decimal("0.40"),
        "IPCA-E": Decimal("0.42"),
    }

    def codigo_serie(self, indice: str) -> int:
        """
        Código SGS do índice.

        Raises:
            ValueError: Se o índice não for suportado.
        """
        try:
            return self.CODIGOS_SERIES[indice.upper()]
        except KeyError:
            raise ValueError(
                f"Índice '{indice}' não suportado. Use SELIC, INPC ou IPCA-E."
            ) from None

    def get_taxas_mensais(self, indice: str, data_inicio: date, data_fim: date) -> Dict[str, Decimal]:
        """
        Busca as taxas do índice mês a mês no BCB.

        Args:
            indice: "SELIC", "INPC" ou "IPCA-E".
            data_inicio: Data inicial do período.
            data_fim: Data final do período.

        Returns:
            Dicionário {competência: taxa_percentual}
            Exemplo: {"01/2023": Decimal("0.46"), "02/2023": Decimal("0.77"), ...}
            Em caso de erro na API, retorna taxas estimadas de fallback.
        """
        codigo = self.codigo_serie(indice)
        nome = indice.lower()

        try:
            df_indice = sgs.get({nome: codigo}, start=data_inicio, end=data_fim)
        except Exception as e:
            warnings.warn(
                f"Erro ao buscar {indice.upper()} no BCB: {type(e).__name__} - {str(e)}. "
                "Usando taxas de fallback."
            )
            return self._taxas_mensais_fallback(indice, data_inicio, data_fim)

        if df_indice is None or df_indice.empty:
            warnings.warn(
                f"Nenhum dado {indice.upper()} encontrado para {data_inicio} a {data_fim}. "
                "Usando taxas de fallback."
            )
            return self._taxas_mensais_fallback(indice, data_inicio, data_fim)

        taxas: Dict[str, Decimal] = {}
        for index, row in df_indice.iterrows():
            taxa = float(row[nome])
            if math.isnan(taxa):
                continue
            taxas[index.strftime("%m/%Y")] = Decimal(str(taxa))

        return taxas

    def _taxas_mensais_fallback(self, indice: str, data_inicio: date, data_fim: date) -> Dict[str, Decimal]:
        """
        Taxas mensais estimadas quando a API do BCB falhar.

        SELIC: médias históricas aproximadas por ano (2023: ~1,08% a.m.;
        2024: ~0,92% a.m.; depois 0,90% a.m.). INPC e IPCA-E: média fixa.
        """
        taxas: Dict[str, Decimal] = {}
        data_atual = data_inicio.replace(day=1)

        while data_atual <= data_fim:
            if indice.upper() == "SELIC":
                if data_atual.year <= 2023:
                    taxa = Decimal("1.08")
                elif data_atual.year == 2024:
                    taxa = Decimal("0.92")
                else:
                    taxa = Decimal("0.90")
            else:
                taxa = self.TAXAS_FALLBACK[indice.upper()]

            taxas[chave_competencia(data_atual)] = taxa
            data_atual = data_atual + relativedelta(months=1)

        return taxas

    def gerar_tabela_correcao(
        self,
        data_inicio: date,
        data_fim: date,
        indice: str = "INPC",
    ) -> TabelaCorrecao:
        """
        Monta a tabela de fatores acumulados até `data_fim`.

        O fator da competência M é o produto de (1 + taxa/100) de M até o
        último mês do período. Meses sem taxa publicada contam como 0%.

        Args:
            data_inicio: Primeira competência da tabela.
            data_fim: Data final da correção (normalmente a data do cálculo).
            indice: "INPC" (padrão), "IPCA-E" ou "SELIC".

        Returns:
            TabelaCorrecao com uma entrada por competência do período.

        Raises:
            ValueError: Se o índice não for suportado ou o período for vazio.

        Exemplo:
            >>> from valor_causa.core.tabela_correcao import salvar_tabela
            >>> gerente = GerenteFinanceiroBCB()
            >>> tabela = gerente.gerar_tabela_correcao(date(2023, 1, 1), date(2023, 12, 31))
            >>> salvar_tabela(tabela, "dados/correcao_monetaria.json")
        """
        self.codigo_serie(indice)

        if data_inicio > data_fim:
            raise ValueError("Data de início deve ser anterior à data final.")

        taxas = self.get_taxas_mensais(indice, data_inicio, data_fim)

        competencias = []
        data_atual = data_inicio.replace(day=1)
        while data_atual <= data_fim:
            competencias.append(chave_competencia(data_atual))
            data_atual = data_atual + relativedelta(months=1)

        # Acumula de trás para frente: a competência mais antiga recebe todos os índices
        fatores: Dict[str, Decimal] = {}
        fator = Decimal("1")
        for competencia in reversed(competencias):
            fator *= 1 + taxas.get(competencia, Decimal("0")) / 100
            fatores[competencia] = fator.quantize(PRECISAO_FATOR)

        ordenados = dict(sorted(fatores.items(), key=lambda item: interpretar_competencia(item[0])))

        logger.info(
            "Tabela %s gerada: %d competências (%s a %s)",
            indice.upper(), len(ordenados), competencias[0], competencias[-1],
        )
        return TabelaCorrecao(ordenados)
