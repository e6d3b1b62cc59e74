"""Unit tests for script upload extraction"""

import io

import pytest

from cinemind.ingestion.extractor import ExtractionError, extract_text


class TestExtractText:
    def test_plain_text(self):
        assert extract_text("scene.txt", "INT. DINER - NIGHT".encode("utf-8")) == "INT. DINER - NIGHT"

    def test_unknown_extension_decoded_as_text(self):
        assert extract_text("scene.fountain", b"EXT. ROOF - DAY") == "EXT. ROOF - DAY"

    def test_invalid_utf8_is_replaced(self):
        assert extract_text("scene.txt", b"caf\xe9") == "caf�"

    def test_pdf_pages_joined(self):
        fitz = pytest.importorskip("fitz")
        doc = fitz.open()
        for text in ("Page one text", "Page two text"):
            page = doc.new_page()
            page.insert_text((72, 72), text)
        data = doc.tobytes()
        doc.close()

        result = extract_text("script.pdf", data)
        assert "Page one text" in result
        assert "Page two text" in result
        assert result.index("Page one text") < result.index("Page two text")
        assert "\n\n" in result

    def test_pdf_detected_by_mime_type(self):
        fitz = pytest.importorskip("fitz")
        doc = fitz.open()
        doc.new_page().insert_text((72, 72), "Mime detected")
        data = doc.tobytes()
        doc.close()

        assert "Mime detected" in extract_text("upload", data, "application/pdf")

    def test_docx_paragraphs(self):
        docx = pytest.importorskip("docx")
        document = docx.Document()
        document.add_paragraph("FADE IN:")
        document.add_paragraph("A lighthouse at dusk.")
        buffer = io.BytesIO()
        document.save(buffer)

        assert extract_text("script.docx", buffer.getvalue()) == "FADE IN:\nA lighthouse at dusk."

    def test_corrupt_pdf_raises(self):
        pytest.importorskip("fitz")
        with pytest.raises(ExtractionError, match="broken.pdf"):
            extract_text("broken.pdf", b"not a pdf at all")

    def test_corrupt_docx_raises(self):
        pytest.importorskip("docx")
        with pytest.raises(ExtractionError):
            extract_text("broken.docx", b"not a zip archive")
