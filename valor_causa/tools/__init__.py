"""Leitura de documentos (PDF do CNIS)."""
