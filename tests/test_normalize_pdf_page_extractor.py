from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import pypdfium2
from PIL import Image
from pypdf import PdfWriter

from normalize_pdf.contracts import ColorMode, NormalizePdfConfig
from normalize_pdf.engines.pypdfium2_engine import _PDFIUM_LOCK, Pypdfium2Document
from normalize_pdf.module import PageExtractor, compute_doc_tmp_id, page_image_name, safe_pdf_stem


def _write_blank_pdf(path: Path, *, pages: int) -> None:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=72, height=144)
    with open(path, "wb") as f:
        writer.write(f)


class TestPageExtractorPypdfium2(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.pdf = self.root / "scan.2024.pdf"
        _write_blank_pdf(self.pdf, pages=2)
        self.extractor = PageExtractor(config=NormalizePdfConfig(dpi=72, color_mode=ColorMode.GRAY))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_page_count_and_render_to_png(self) -> None:
        document, err = self.extractor.open_document(pdf_file=self.pdf)
        self.assertIsNone(err)
        assert document is not None
        with document:
            self.assertEqual(document.page_count, 2)
            out_file = self.root / "tmp" / page_image_name(pdf_file=self.pdf, page_num=2)
            rendered, render_err = self.extractor.render_page_to_file(
                document=document, page_num=2, out_file=out_file
            )

        self.assertIsNone(render_err)
        assert rendered is not None
        self.assertEqual(rendered.page_num, 2)
        self.assertEqual(rendered.image_file.name, "scan_2.png")
        self.assertTrue(out_file.exists())
        self.assertEqual((rendered.width_px, rendered.height_px), (72, 144))
        self.assertEqual(out_file.read_bytes()[:8], b"\x89PNG\r\n\x1a\n")

    def test_out_of_range_page_is_a_render_error(self) -> None:
        document, _ = self.extractor.open_document(pdf_file=self.pdf)
        assert document is not None
        with document:
            rendered, err = self.extractor.render_page_to_file(
                document=document, page_num=3, out_file=self.root / "x.png"
            )
        self.assertIsNone(rendered)
        assert err is not None
        self.assertEqual(err.code, "PAGE_RENDER_FAILED")

    def test_unreadable_pdf_is_an_open_error(self) -> None:
        bad = self.root / "broken.pdf"
        bad.write_bytes(b"this is not a pdf")
        document, err = self.extractor.open_document(pdf_file=bad)
        self.assertIsNone(document)
        assert err is not None
        self.assertEqual(err.code, "PDF_OPEN_FAILED")


class TestPypdfium2Document(unittest.TestCase):
    def test_bitmap_and_page_are_released_while_holding_the_pdfium_lock(self) -> None:
        released: list[tuple[str, bool]] = []
        bitmap = MagicMock()
        bitmap.to_pil.return_value = Image.new("RGBA", (3, 2))
        bitmap.close.side_effect = lambda: released.append(("bitmap", _PDFIUM_LOCK.locked()))
        page = MagicMock()
        page.render.return_value = bitmap
        page.close.side_effect = lambda: released.append(("page", _PDFIUM_LOCK.locked()))
        doc = MagicMock()
        doc.__len__.return_value = 1
        doc.__getitem__.return_value = page

        image = Pypdfium2Document(doc).render_page(page_num=1, dpi=144, color_mode=ColorMode.GRAY)

        self.assertEqual(image.mode, "L")
        self.assertEqual(image.size, (3, 2))
        page.render.assert_called_once_with(scale=2.0)
        self.assertEqual(released, [("bitmap", True), ("page", True)])
        self.assertFalse(_PDFIUM_LOCK.locked())

    def test_backend_version_is_reported(self) -> None:
        extractor = PageExtractor(config=NormalizePdfConfig())
        self.assertEqual(extractor.backend_id, "pypdfium2")
        self.assertEqual(extractor.backend_version, getattr(pypdfium2, "__version__", None))


class TestTempArtifactNaming(unittest.TestCase):
    def test_page_image_name_uses_stem_before_first_dot(self) -> None:
        self.assertEqual(page_image_name(pdf_file=Path("a/b/folha.março.pdf"), page_num=7), "folha_7.png")

    def test_doc_tmp_id_differs_for_same_stem_in_different_folders(self) -> None:
        a = compute_doc_tmp_id(pdf_file=Path("jan/payroll.pdf"))
        b = compute_doc_tmp_id(pdf_file=Path("feb/payroll.pdf"))
        self.assertNotEqual(a, b)
        self.assertTrue(a.startswith("payroll_"))
        self.assertEqual(a, compute_doc_tmp_id(pdf_file=Path("jan/payroll.pdf")))

    def test_safe_pdf_stem(self) -> None:
        self.assertEqual(safe_pdf_stem(Path("x/Folha de Pagamento (1).PDF")), "Folha_de_Pagamento_1")


if __name__ == "__main__":
    unittest.main()
