import io
import logging
from pathlib import Path
from typing import BinaryIO, Union

import docx
import fitz  # PyMuPDF
from PyPDF2 import PdfReader

from errors import UnsupportedFileFormat

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ('.pdf', '.docx', '.txt')
TEXT_ENCODINGS = ['utf-8', 'cp1252', 'latin-1']


class ResumeTextExtractor:
    """Plain-text extraction for uploaded resumes (PDF, DOCX, TXT)"""

    def read_pdf(self, data: bytes) -> str:
        """Extract text from PDF bytes using PyMuPDF, falling back to PyPDF2."""
        text = ""

        try:
            with fitz.open(stream=data, filetype="pdf") as doc:
                for page in doc:
                    text += (page.get_text("text") or "") + "\n"
            if text.strip():
                logger.info(f"Extracted {len(text)} characters via PyMuPDF")
                return text
        except Exception as e:
            logger.warning(f"PyMuPDF extraction failed: {e}")

        try:
            reader = PdfReader(io.BytesIO(data))
            for page in reader.pages:
                text += (page.extract_text() or "") + "\n"
            if text.strip():
                logger.info(f"Extracted {len(text)} characters via PyPDF2 fallback")
                return text
        except Exception as e:
            logger.error(f"PyPDF2 extraction failed: {e}")

        logger.warning("No text extracted from PDF")
        return text

    def read_docx(self, data: bytes) -> str:
        """Extract paragraph and table text from DOCX bytes"""
        text = ""
        try:
            document = docx.Document(io.BytesIO(data))
        except Exception as e:
            logger.error(f"Error reading DOCX: {e}")
            raise ValueError(f"Unreadable DOCX file: {e}") from e
        for para in document.paragraphs:
            text += para.text + "\n"

        for table in document.tables:
            for row in table.rows:
                for cell in row.cells:
                    text += cell.text + " "
            text += "\n"
        return text

    def read_txt(self, data: bytes) -> str:
        for encoding in TEXT_ENCODINGS:
            try:
                return data.decode(encoding)
            except UnicodeDecodeError:
                continue
        raise ValueError("Unable to decode file with supported encodings")

    def extract_bytes(self, file_name: str, data: Union[bytes, BinaryIO]) -> str:
        """
        Extract text from an in-memory upload.

        Args:
            file_name: Original file name; its extension selects the reader
            data: Raw bytes or a readable binary file object

        Returns:
            Extracted text (may be empty for image-only PDFs)
        """
        if not isinstance(data, bytes):
            data = data.read()

        extension = Path(file_name or "").suffix.lower()
        logger.info(f"Extracting {file_name} ({extension or 'no extension'})")
        if extension == '.pdf':
            return self.read_pdf(data)
        elif extension == '.docx':
            return self.read_docx(data)
        elif extension == '.txt':
            return self.read_txt(data)
        raise UnsupportedFileFormat(f"Unsupported file format: {extension or file_name}")

    def extract_text(self, file_path: str) -> str:
        """Extract text from a file on disk based on its extension"""
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")
        if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileFormat(f"Unsupported file format: {path.suffix.lower()}")
        return self.extract_bytes(path.name, path.read_bytes())
