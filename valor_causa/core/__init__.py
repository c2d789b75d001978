"""Cálculos determinísticos: filtro, RMI, vencidas, vincendas e total."""
