"""
Resume text extraction tests for TXT, DOCX and PDF uploads.
"""

import io

import docx
import fitz
import pytest

from errors import UnsupportedFileFormat
from parsers.extract import ResumeTextExtractor


@pytest.fixture
def extractor():
    return ResumeTextExtractor()


def _docx_bytes():
    document = docx.Document()
    document.add_paragraph("Jane Doe")
    document.add_paragraph("Python developer with Docker experience")
    table = document.add_table(rows=1, cols=2)
    table.cell(0, 0).text = "Skills"
    table.cell(0, 1).text = "Kubernetes"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


def _pdf_bytes():
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((72, 72), "React developer with 6 years experience")
    data = doc.tobytes()
    doc.close()
    return data


def test_extract_txt(extractor):
    assert extractor.extract_bytes("resume.txt", "Python developer".encode("utf-8")) == "Python developer"


def test_extract_txt_latin1(extractor):
    text = extractor.extract_bytes("cv.TXT", "Résumé: José".encode("latin-1"))
    assert text == "Résumé: José"


def test_extract_txt_windows_punctuation(extractor):
    data = "“Team player” – 5 years…".encode("cp1252")
    assert extractor.extract_bytes("cv.txt", data) == "“Team player” – 5 years…"


def test_extract_txt_bytes_outside_cp1252_fall_back_to_latin1(extractor):
    # 0x81 has no cp1252 mapping
    assert extractor.extract_bytes("cv.txt", b"caf\xe9 \x81") == "caf\xe9 \x81"


def test_extract_docx_paragraphs_and_tables(extractor):
    text = extractor.extract_bytes("resume.docx", _docx_bytes())
    assert "Python developer with Docker experience" in text
    assert "Kubernetes" in text


def test_extract_pdf(extractor):
    text = extractor.extract_bytes("resume.pdf", _pdf_bytes())
    assert "React developer" in text


def test_extract_from_file_object(extractor):
    assert extractor.extract_bytes("a.txt", io.BytesIO(b"hello")) == "hello"


@pytest.mark.parametrize("name", ["photo.png", "resume.doc", "resume"])
def test_unsupported_format(extractor, name):
    with pytest.raises(UnsupportedFileFormat):
        extractor.extract_bytes(name, b"data")


def test_unsupported_format_is_a_value_error():
    assert issubclass(UnsupportedFileFormat, ValueError)


def test_corrupt_docx(extractor):
    with pytest.raises(ValueError, match="Unreadable DOCX"):
        extractor.extract_bytes("resume.docx", b"not a zip")


def test_extract_text_from_path(extractor, tmp_path):
    path = tmp_path / "resume.txt"
    path.write_text("Go and Rust engineer", encoding="utf-8")
    assert extractor.extract_text(str(path)) == "Go and Rust engineer"


def test_extract_text_missing_file(extractor, tmp_path):
    with pytest.raises(FileNotFoundError):
        extractor.extract_text(str(tmp_path / "missing.pdf"))


def test_extract_text_unsupported_path(extractor, tmp_path):
    path = tmp_path / "resume.rtf"
    path.write_text("{\\rtf1}", encoding="utf-8")
    with pytest.raises(UnsupportedFileFormat):
        extractor.extract_text(str(path))
