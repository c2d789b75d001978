"""
Cálculo do valor da causa previdenciária a partir do extrato CNIS.

RMI, parcelas vencidas com correção monetária mês a mês, parcelas vincendas e
valor total da causa.
"""

from valor_causa.core.calculo_previdenciario import calcular_valor_da_causa
from valor_causa.core.tabela_correcao import TabelaCorrecao, carregar_tabela
from valor_causa.models.schemas import ResultadoCalculo

__version__ = "0.1.0"

__all__ = [
    "calcular_valor_da_causa",
    "carregar_tabela",
    "ResultadoCalculo",
    "TabelaCorrecao",
]
