from __future__ import annotations

import io
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from contracts.errors import SourceUnavailable
from contracts.layout import Baseline, Level, Orientation, WritingDirection
from layout_export.config import OutputFormat, TraversalConfig
from layout_export.module import run_layout_export
from layout_source.contracts import SourceConfig
from layout_source.engines.tesseract_hocr import TesseractHocrEngine, build_tesseract_command
from layout_source.hocr import parse_hocr, parse_title

HOCR = b"""<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html PUBLIC "-//W3C//DTD XHTML 1.0 Transitional//EN"
    "http://www.w3.org/TR/xhtml1/DTD/xhtml1-transitional.dtd">
<html xmlns="http://www.w3.org/1999/xhtml" xml:lang="en" lang="en">
 <head>
  <title></title>
  <meta http-equiv="Content-Type" content="text/html;charset=utf-8"/>
  <meta name='ocr-system' content='tesseract 5.3.0' />
 </head>
 <body>
  <div class='ocr_page' id='page_1' title='image "page.png"; bbox 0 0 1200 900; ppageno 0; scan_res 300 300'>
   <div class='ocr_carea' id='block_1_1' title="bbox 100 200 600 300">
    <p class='ocr_par' id='par_1_1' lang='ara' dir='rtl' title="bbox 100 200 600 300">
     <span class='ocr_line' id='line_1_1' title="bbox 100 200 600 240; baseline 0.01 -5; x_size 30; x_descenders 6; x_ascenders 8">
      <span class='ocrx_word' id='word_1_1' title='bbox 100 205 300 240; x_wconf 91'>
       <span class='ocrx_cinfo' title='x_bboxes 100 205 150 240; x_conf 99.1'>a</span>
       <span class='ocrx_cinfo' title='x_bboxes 160 210 200 240; x_conf 98.7'>b</span>
      </span>
      <span class='ocrx_word' id='word_1_2' title='bbox 350 205 600 240; x_wconf 90'>cd</span>
     </span>
     <span class='ocr_header' id='line_1_2' title="bbox 100 250 600 300; baseline 0 -4">
      <span class='ocrx_word' id='word_1_3' title='bbox 100 250 600 300; x_wconf 95'>
       <span class='ocrx_cinfo' title='x_bboxes 100 250 600 300; x_conf 95'>e</span>
      </span>
     </span>
    </p>
   </div>
   <div class='ocr_photo' id='block_1_2' title="bbox 700 100 1100 500"></div>
   <div class='ocr_carea' id='block_1_3' title="bbox 100 600 500 800">
    <p class='ocr_par' id='par_1_2' lang='eng' title="bbox 100 600 500 800">
     <span class='ocr_line' id='line_1_3' title="bbox 100 600 500 640; baseline 0 -3; textangle 270; x_size 25; x_descenders 5; x_ascenders 5.5">
      <span class='ocrx_word' id='word_1_4' title='bbox 100 600 500 640; x_wconf 80'>f</span>
     </span>
    </p>
   </div>
  </div>
 </body>
</html>
"""


class TestHocrParsing(unittest.TestCase):
    def test_parse_title(self) -> None:
        self.assertEqual(
            parse_title('image "p.png"; bbox 0 0 10 20; baseline 0.01 -3'),
            {"image": ['"p.png"'], "bbox": ["0", "0", "10", "20"], "baseline": ["0.01", "-3"]},
        )

    def test_page_size_and_text_blocks(self) -> None:
        page = parse_hocr(HOCR)
        self.assertEqual((page.width, page.height), (1200, 900))
        # The photo area is not a text block.
        self.assertEqual(len(page.blocks), 2)
        self.assertEqual(page.blocks[1].box.top, 600)

    def test_line_metrics(self) -> None:
        page = parse_hocr(HOCR)
        first_line, header_line = page.blocks[0].children[0].children
        self.assertEqual(first_line.baseline, Baseline(100, 235, 600, 240))
        self.assertEqual(first_line.x_height, 16.0)
        self.assertEqual(header_line.baseline, Baseline(100, 296, 600, 296))
        self.assertIsNone(header_line.x_height)

    def test_block_orientation_and_direction(self) -> None:
        page = parse_hocr(HOCR)
        first, second = page.blocks
        self.assertEqual(first.orientation.writing_direction, WritingDirection.RIGHT_TO_LEFT)
        self.assertEqual(first.orientation.orientation, Orientation.PAGE_UP)
        self.assertEqual(second.orientation.writing_direction, WritingDirection.LEFT_TO_RIGHT)
        self.assertEqual(second.orientation.orientation, Orientation.PAGE_RIGHT)

    def test_words_without_char_boxes_get_one_glyph(self) -> None:
        page = parse_hocr(HOCR)
        words = page.blocks[0].children[0].children[0].children
        self.assertEqual(len(words[0].children), 2)
        self.assertEqual(len(words[1].children), 1)
        self.assertEqual(words[1].children[0].level, Level.GLYPH)
        self.assertEqual(words[1].children[0].box, words[1].box)

    def test_first_paragraph_decides_block_direction(self) -> None:
        # tesseract writes no `dir` on left-to-right paragraphs.
        data = b"""<html><body>
  <div class='ocr_page' title='bbox 0 0 800 600'>
   <div class='ocr_carea' title='bbox 0 0 800 300'>
    <p class='ocr_par' title='bbox 0 0 800 100'>
     <span class='ocr_line' title='bbox 0 0 800 40; baseline 0 -2'></span>
    </p>
    <p class='ocr_par' dir='rtl' title='bbox 0 100 800 200'>
     <span class='ocr_line' title='bbox 0 100 800 140; baseline 0 -2'></span>
    </p>
   </div>
   <div class='ocr_carea' title='bbox 0 300 800 600'>
    <p class='ocr_par' dir='rtl' title='bbox 0 300 800 400'>
     <span class='ocr_line' title='bbox 0 300 800 340; baseline 0 -2'></span>
    </p>
    <p class='ocr_par' title='bbox 0 400 800 500'>
     <span class='ocr_line' title='bbox 0 400 800 440; baseline 0 -2'></span>
    </p>
   </div>
  </div>
</body></html>"""
        first, second = parse_hocr(data).blocks
        self.assertEqual(first.orientation.writing_direction, WritingDirection.LEFT_TO_RIGHT)
        self.assertEqual(second.orientation.writing_direction, WritingDirection.RIGHT_TO_LEFT)
        # Lines without words still reach the glyph level.
        self.assertEqual(first.children[0].children[0].children[0].children[0].level, Level.GLYPH)

    def test_output_without_page_is_unavailable(self) -> None:
        for data in (
            b"<html><body>",
            b"<html><body><div class='ocr_carea'/></body></html>",
            b"<html><body><div class='ocr_page' title='ppageno 0'></div></body></html>",
        ):
            with self.subTest(data=data):
                with self.assertRaises(SourceUnavailable) as cm:
                    parse_hocr(data)
                self.assertEqual(cm.exception.code, "SOURCE_HOCR_UNPARSEABLE")

    def test_ascii_export_of_parsed_page(self) -> None:
        engine = TesseractHocrEngine()
        with tempfile.TemporaryDirectory() as tmp:
            image = Path(tmp) / "page.png"
            image.write_bytes(b"")
            done = subprocess.CompletedProcess(args=[], returncode=0, stdout=HOCR, stderr=b"")
            with patch("layout_source.engines.tesseract_hocr.subprocess.run", return_value=done):
                source = engine.analyse_image_file(config=SourceConfig(), image_file=image)

        out = io.StringIO()
        run_layout_export(
            config=TraversalConfig(output_format=OutputFormat.ASCII, max_level=5),
            image_path=Path("page.png"),
            out=out,
            source=source,
        )
        self.assertEqual(
            out.getvalue().splitlines()[:6],
            [
                "block 1 : 500x100+100+200",
                "paragraph 1 : 500x100+100+200",
                "line 1 : 100,235 600,240 500x40+100+200 16",
                "word 1 : 200x35+100+205",
                "glyph 1 : 50x35+100+205",
                "glyph 2 : 40x30+160+210",
            ],
        )


class TestTesseractHocrEngine(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.image = Path(self._tmp.name) / "page.png"
        self.image.write_bytes(b"")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_command_forwards_segmentation_mode_and_language(self) -> None:
        cmd = build_tesseract_command(
            config=SourceConfig(segmentation_mode=6, language="deu"), image_file=self.image
        )
        self.assertEqual(
            cmd,
            [
                "tesseract",
                str(self.image),
                "stdout",
                "-l",
                "deu",
                "--psm",
                "6",
                "-c",
                "hocr_char_boxes=1",
                "hocr",
            ],
        )
        self.assertNotIn("--psm", build_tesseract_command(config=SourceConfig(), image_file=self.image))

    def test_missing_input(self) -> None:
        with self.assertRaises(SourceUnavailable) as cm:
            TesseractHocrEngine().analyse_image_file(
                config=SourceConfig(), image_file=Path(self._tmp.name) / "nope.png"
            )
        self.assertEqual(cm.exception.code, "SOURCE_INPUT_NOT_FOUND")

    def test_backend_failures_map_to_codes(self) -> None:
        cases = [
            (FileNotFoundError("tesseract"), "SOURCE_BACKEND_NOT_INSTALLED"),
            (subprocess.TimeoutExpired(cmd="tesseract", timeout=1.0), "SOURCE_TIMEOUT"),
        ]
        for exc, code in cases:
            with self.subTest(code=code):
                with patch("layout_source.engines.tesseract_hocr.subprocess.run", side_effect=exc):
                    with self.assertRaises(SourceUnavailable) as cm:
                        TesseractHocrEngine().analyse_image_file(
                            config=SourceConfig(timeout_s=1.0), image_file=self.image
                        )
                self.assertEqual(cm.exception.code, code)

    def test_non_zero_exit(self) -> None:
        failed = subprocess.CompletedProcess(
            args=[], returncode=1, stdout=b"", stderr=b"Error in pixReadStream: Unknown format"
        )
        with patch("layout_source.engines.tesseract_hocr.subprocess.run", return_value=failed):
            with self.assertRaises(SourceUnavailable) as cm:
                TesseractHocrEngine().analyse_image_file(config=SourceConfig(), image_file=self.image)
        self.assertEqual(cm.exception.code, "SOURCE_BACKEND_ERROR")
        self.assertEqual(cm.exception.detail["returncode"], 1)
        self.assertIn("Unknown format", cm.exception.detail["stderr"])


if __name__ == "__main__":
    unittest.main()
