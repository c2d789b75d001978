"""
Leitura do texto de extratos CNIS em PDF.

A extração em si é feita pelo pypdf; aqui só se concatenam as páginas e se
traduzem as falhas em exceções para o chamador decidir o que mostrar.
"""

from pathlib import Path
from typing import Union

from pypdf import PdfReader
from pypdf.errors import PdfReadError


class ErroLeituraPDF(Exception):
    """O PDF existe, mas não pôde ser lido ou não contém texto extraível."""


class LeitorCNIS:
    """
    Extrai o texto de um extrato CNIS em PDF.

    Exemplo:
        >>> leitor = LeitorCNIS()
        >>> texto = leitor.ler_texto("cnis.pdf")
        >>> print(texto[:100])
    """

    def ler_texto(self, pdf_path: Union[str, Path]) -> str:
        """
        Extrai todo o texto de um arquivo PDF.

        Args:
            pdf_path: Caminho completo ou relativo para o arquivo PDF.

        Returns:
            Texto de todas as páginas, separadas por linha em branco.

        Raises:
            FileNotFoundError: Se o arquivo não existir.
            ErroLeituraPDF: Se o PDF for inválido, não for um arquivo, ou não
                tiver texto (PDF digitalizado sem OCR).
        """
        file_path = Path(pdf_path)

        if not file_path.exists():
            raise FileNotFoundError(f"O arquivo '{pdf_path}' não foi encontrado.")

        if not file_path.is_file():
            raise ErroLeituraPDF(f"'{pdf_path}' não é um arquivo válido.")

        try:
            reader = PdfReader(file_path)
            paginas = [page.extract_text() or "" for page in reader.pages]
        except PdfReadError as e:
            raise ErroLeituraPDF(f"Erro ao processar o PDF '{pdf_path}': {e}") from e

        texto_completo = [texto for texto in paginas if texto.strip()]

        if not texto_completo:
            raise ErroLeituraPDF(
                f"O PDF '{pdf_path}' foi lido, mas não contém texto extraível. "
                "Pode ser um PDF digitalizado sem OCR."
            )

        return "\n\n".join(texto_completo)


def ler_texto_pdf(pdf_path: Union[str, Path]) -> str:
    """Atalho para `LeitorCNIS().ler_texto(pdf_path)`."""
    return LeitorCNIS().ler_texto(pdf_path)
