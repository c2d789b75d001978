"""Schemas Pydantic dos dados do CNIS e do resultado do cálculo."""
