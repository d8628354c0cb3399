# -*- coding: utf-8 -*-
import os
import pickle
import shutil
import tempfile
import unittest

from ufofmt.codec import UFOCodec
from ufofmt.errors import ErrorKind, UFOFormatError, describeException
from ufofmt.formatter import FormatOptions, JobOutcome, formatUFO

from testsupport import (
    makeUFO, readText, snapshot, failingWrites, deeplyNestedGlif, FONT_FILES,
    FONTINFO_GUIDELINES_NOT_A_LIST, EXPECTED_GLIF_A_TAB)

SINGLE_QUOTE_DECLARATION = "<?xml version='1.0' encoding='UTF-8'?>"
DOUBLE_QUOTE_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


class NoQuoteCharCodec(UFOCodec):

    supportsQuoteChar = False


class FormatOptionsTest(unittest.TestCase):

    def test_defaults(self):
        options = FormatOptions()
        self.assertEqual(options.whitespace, "\t\t")
        self.assertEqual(options.quoteChar, '"')
        self.assertEqual(options.floatPrecision, 10)
        self.assertIsNone(options.uniqueFileName)
        self.assertIsNone(options.uniqueExtension)

    def test_whitespace(self):
        self.assertEqual(FormatOptions(indentNumber=1).whitespace, "\t")
        self.assertEqual(
            FormatOptions(indentWithSpace=True, indentNumber=4).whitespace, "    ")

    def test_quoteChar(self):
        self.assertEqual(FormatOptions(singleQuotes=True).quoteChar, "'")

    def test_indentNumber_range(self):
        for value in (0, 5, -1):
            with self.assertRaisesRegex(ValueError, "between 1 - 4"):
                FormatOptions(indentNumber=value)

    def test_floatPrecision(self):
        self.assertIsNone(FormatOptions(floatPrecision=None).floatPrecision)
        with self.assertRaises(ValueError):
            FormatOptions(floatPrecision=-1)

    def test_pickle(self):
        options = FormatOptions(uniqueFileName="-fmt", singleQuotes=True)
        self.assertEqual(pickle.loads(pickle.dumps(options)), options)


class ErrorTest(unittest.TestCase):

    def test_str(self):
        error = UFOFormatError(ErrorKind.READ, "a.ufo", "broken")
        self.assertEqual(str(error), "read error: a.ufo: broken")

    def test_pickle(self):
        error = UFOFormatError(ErrorKind.WRITE, "a.ufo", "broken")
        copy = pickle.loads(pickle.dumps(error))
        self.assertEqual(copy.kind, ErrorKind.WRITE)
        self.assertEqual(copy.path, "a.ufo")
        self.assertEqual(str(copy), str(error))

    def test_describeException(self):
        try:
            try:
                raise OSError("disk full")
            except OSError as e:
                raise ValueError("could not save") from e
        except ValueError as e:
            self.assertEqual(describeException(e),
                             "could not save; caused by: disk full")
        self.assertEqual(describeException(KeyError()), "KeyError")


class FormatUFOTest(unittest.TestCase):

    def setUp(self):
        self.directory = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.directory)

    def test_in_place(self):
        ufoPath = makeUFO(self.directory)
        outcome = formatUFO(ufoPath, FormatOptions(indentNumber=1))
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome, JobOutcome.success(ufoPath, ufoPath))
        self.assertEqual(readText(ufoPath, "glyphs/A_.glif"), EXPECTED_GLIF_A_TAB)

    def test_unique_output_path(self):
        ufoPath = makeUFO(self.directory)
        before = snapshot(ufoPath)
        options = FormatOptions(uniqueFileName="-fmt", uniqueExtension="ufoz",
                                indentNumber=1)
        outcome = formatUFO(ufoPath, options)
        expected = os.path.join(self.directory, "Test-fmt.ufoz")
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.outputPath, expected)
        self.assertEqual(snapshot(ufoPath), before)
        self.assertEqual(readText(expected, "glyphs/A_.glif"), EXPECTED_GLIF_A_TAB)

    def test_invalid_path(self):
        path = os.path.join(self.directory, "totally", "bogus", "path", "test.ufo")
        outcome = formatUFO(path)
        self.assertFalse(outcome.ok)
        self.assertIsNone(outcome.outputPath)
        self.assertEqual(outcome.error.kind, ErrorKind.INVALID_PATH)
        self.assertEqual(outcome.error.path, path)
        self.assertFalse(os.path.exists(os.path.join(self.directory, "totally")))

    def test_file_is_not_a_ufo(self):
        path = os.path.join(self.directory, "test.ufo")
        with open(path, "w") as f:
            f.write("")
        outcome = formatUFO(path)
        self.assertEqual(outcome.error.kind, ErrorKind.INVALID_PATH)

    def test_missing_metainfo(self):
        files = dict(FONT_FILES)
        del files["metainfo.plist"]
        ufoPath = makeUFO(self.directory, files=files)
        before = snapshot(ufoPath)
        outcome = formatUFO(ufoPath)
        self.assertEqual(outcome.error.kind, ErrorKind.READ)
        self.assertIn("metainfo.plist", outcome.error.message)
        self.assertEqual(snapshot(ufoPath), before)

    def test_malformed_glif(self):
        files = dict(FONT_FILES)
        files["glyphs/B_.glif"] = "<glyph name='B' format='2'>"
        ufoPath = makeUFO(self.directory, files=files)
        outcome = formatUFO(ufoPath)
        self.assertEqual(outcome.error.kind, ErrorKind.READ)
        self.assertIn("Invalid GLIF XML: glyphs/B_.glif; caused by: ",
                      outcome.error.message)

    def test_output_path_is_a_file(self):
        ufoPath = makeUFO(self.directory)
        outputPath = os.path.join(self.directory, "Test.out")
        with open(outputPath, "w") as f:
            f.write("")
        outcome = formatUFO(ufoPath, FormatOptions(uniqueExtension="out"))
        self.assertEqual(outcome.error.kind, ErrorKind.WRITE)
        self.assertEqual(outcome.error.path, outputPath)
        self.assertIn("caused by", outcome.error.message)

    def test_single_quotes(self):
        ufoPath = makeUFO(self.directory)
        outcome = formatUFO(ufoPath, FormatOptions(singleQuotes=True))
        self.assertTrue(outcome.ok)
        for relativePath in ("metainfo.plist", "fontinfo.plist", "glyphs/A_.glif"):
            firstLine = readText(ufoPath, relativePath).splitlines()[0]
            self.assertEqual(firstLine, SINGLE_QUOTE_DECLARATION)
        self.assertIn('<glyph name="A" format="2">',
                      readText(ufoPath, "glyphs/A_.glif"))

    def test_double_quotes(self):
        ufoPath = makeUFO(self.directory)
        formatUFO(ufoPath)
        firstLine = readText(ufoPath, "metainfo.plist").splitlines()[0]
        self.assertEqual(firstLine, DOUBLE_QUOTE_DECLARATION)

    def test_quote_post_pass(self):
        nativePath = makeUFO(self.directory, "Native.ufo")
        postPassPath = makeUFO(self.directory, "PostPass.ufo")
        formatUFO(nativePath, FormatOptions(singleQuotes=True))
        formatUFO(postPassPath, FormatOptions(singleQuotes=True, quotePostPass=True))
        self.assertEqual(snapshot(postPassPath), snapshot(nativePath))

    def test_codec_without_quote_char(self):
        nativePath = makeUFO(self.directory, "Native.ufo")
        postPassPath = makeUFO(self.directory, "PostPass.ufo")
        formatUFO(nativePath, FormatOptions(singleQuotes=True))
        outcome = formatUFO(postPassPath, FormatOptions(singleQuotes=True),
                            codec=NoQuoteCharCodec())
        self.assertTrue(outcome.ok)
        self.assertEqual(snapshot(postPassPath), snapshot(nativePath))

    def test_resource_files_are_not_patched(self):
        ufoPath = makeUFO(self.directory)
        formatUFO(ufoPath, FormatOptions(singleQuotes=True, quotePostPass=True))
        self.assertEqual(readText(ufoPath, "data/com.example.tool/settings.plist"),
                         FONT_FILES["data/com.example.tool/settings.plist"])

    def test_quote_post_pass_patches_data_files(self):
        dataPlist = DOUBLE_QUOTE_DECLARATION + "\n<plist/>\n"
        files = dict(FONT_FILES)
        files["data/com.example.tool/layout.plist"] = dataPlist
        nativePath = makeUFO(self.directory, "Native.ufo", files)
        postPassPath = makeUFO(self.directory, "PostPass.ufo", files)
        formatUFO(nativePath, FormatOptions(singleQuotes=True))
        formatUFO(postPassPath, FormatOptions(singleQuotes=True, quotePostPass=True))
        self.assertEqual(readText(nativePath, "data/com.example.tool/layout.plist"),
                         dataPlist)
        self.assertEqual(readText(postPassPath, "data/com.example.tool/layout.plist"),
                         SINGLE_QUOTE_DECLARATION + "\n<plist/>\n")

    def test_quote_post_pass_failure(self):
        ufoPath = makeUFO(self.directory)
        attempts = []
        with failingWrites(attempts):
            outcome = formatUFO(
                ufoPath, FormatOptions(singleQuotes=True, quotePostPass=True))
        self.assertFalse(outcome.ok)
        self.assertEqual(outcome.error.kind, ErrorKind.WRITE)
        self.assertEqual(attempts, [outcome.error.path])

    def test_guidelines_not_a_list(self):
        files = dict(FONT_FILES)
        files["fontinfo.plist"] = FONTINFO_GUIDELINES_NOT_A_LIST
        ufoPath = makeUFO(self.directory, files=files)
        outcome = formatUFO(ufoPath)
        self.assertTrue(outcome.ok)
        self.assertIn("<integer>5</integer>", readText(ufoPath, "fontinfo.plist"))

    def test_undecodable_glif(self):
        files = dict(FONT_FILES)
        files["glyphs/B_.glif"] = deeplyNestedGlif()
        ufoPath = makeUFO(self.directory, files=files)
        outcome = formatUFO(ufoPath)
        self.assertEqual(outcome.error.kind, ErrorKind.READ)
        self.assertIn("Could not decode glyphs/B_.glif; caused by: ",
                      outcome.error.message)

    def test_trailing_current_directory(self):
        ufoPath = makeUFO(self.directory)
        outcome = formatUFO(os.path.join(ufoPath, os.curdir),
                            FormatOptions(uniqueFileName="-fmt"))
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.outputPath,
                         os.path.join(self.directory, "Test-fmt.ufo"))
        self.assertTrue(os.path.isdir(outcome.outputPath))

    def test_outcome_pickle(self):
        outcome = formatUFO(os.path.join(self.directory, "missing.ufo"))
        copy = pickle.loads(pickle.dumps(outcome))
        self.assertEqual(copy.ufoPath, outcome.ufoPath)
        self.assertEqual(str(copy.error), str(outcome.error))


if __name__ == "__main__":
    unittest.main()
