"""
Unit tests for core Notionpage components.

Tests configuration management, data models, rich-text parsing, property
extraction, URL normalization, format decoding, block resolution and
mutation helpers.
"""

import json
import os
import tempfile
import unittest
from pathlib import Path

from pydantic import ValidationError

from notionpage.config import ConfigManager
from notionpage.decoding import (
    FormatRegistry,
    decode_format,
    get_first_inline,
    get_first_inline_block,
    get_prop,
    inline_to_plain_text,
    lookup_prop,
    make_image_url,
    parse_inline_blocks,
    resolve_block,
    with_width,
)
from notionpage.errors import (
    FormatDecodeError,
    InlineParseError,
    InvalidRequestError,
    PropertyDecodeError,
)
from notionpage.models import (
    Block,
    BlockType,
    FormatColumn,
    FormatImage,
    FormatPage,
    FormatText,
    InlineToken,
    Page,
)
from notionpage.mutations import (
    RecordingClient,
    build_set_page_format_op,
    build_set_title_op,
)


COVER_PATH = "/images/page-cover/met_vincent_van_gogh_cradle.jpg"
COVER_URL = (
    "https://www.notion.so/image/"
    "https%3A%2F%2Fwww.notion.so%2Fimages%2Fpage-cover%2Fmet_vincent_van_gogh_cradle.jpg"
)


def make_block(block_type: str, properties=None, fmt=None, **fields) -> Block:
    format_raw = json.dumps(fmt).encode("utf-8") if fmt is not None else b""
    return Block(
        id="b7e1c2d4-0000-4000-8000-000000000001",
        type=block_type,
        properties=properties or {},
        format_raw=format_raw,
        **fields
    )


class TestConfigManager(unittest.TestCase):
    """Test configuration management functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = Path(self.temp_dir) / "test_config.yaml"

    def tearDown(self):
        """Clean up test fixtures."""
        if self.config_path.exists():
            self.config_path.unlink()
        os.rmdir(self.temp_dir)

    def test_config_creation_with_defaults(self):
        """Test config manager falls back to defaults when file missing."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.max_workers, 1)
        self.assertFalse(config.fail_fast)
        self.assertEqual(config.output_indent, 2)
        self.assertEqual(config.log_filename, "notionpage.log")

    def test_config_loading_from_file(self):
        """Test loading configuration from YAML file."""
        test_config = """
decoding:
  max_workers: 8
  fail_fast: true

output:
  indent: 4
"""
        with open(self.config_path, 'w') as f:
            f.write(test_config)

        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.max_workers, 8)
        self.assertTrue(config.fail_fast)
        self.assertEqual(config.output_indent, 4)
        # Keys missing from the file use the property defaults
        self.assertEqual(config.log_filename, "notionpage.log")

    def test_dot_notation_access(self):
        """Test accessing config values with dot notation."""
        config = ConfigManager(str(self.config_path))

        self.assertEqual(config.get("logging.level"), "INFO")
        self.assertEqual(config.get("decoding.max_workers"), 1)
        self.assertEqual(config.get("nonexistent.key", "default"), "default")
        self.assertIn("indent", config.get_section("output"))

    def test_config_reload(self):
        """Test configuration reloading."""
        with open(self.config_path, 'w') as f:
            f.write("decoding:\n  max_workers: 2")

        config = ConfigManager(str(self.config_path))
        self.assertEqual(config.max_workers, 2)

        with open(self.config_path, 'w') as f:
            f.write("decoding:\n  max_workers: 3")

        config.reload()
        self.assertEqual(config.max_workers, 3)


class TestDataModels(unittest.TestCase):
    """Test data model creation and helpers."""

    def test_block_defaults(self):
        """Test a raw block has empty decoded fields."""
        block = Block(id="b1", type="text")

        self.assertEqual(block.title, "")
        self.assertEqual(block.source, "")
        self.assertFalse(block.is_checked)
        self.assertEqual(block.inline_content, [])
        self.assertIsNone(block.format)
        self.assertEqual(block.format_raw, b"")

    def test_block_walk(self):
        """Test depth-first traversal of a block tree."""
        grandchild = Block(id="c", type="text")
        child = Block(id="b", type="toggle", children=[grandchild])
        sibling = Block(id="d", type="divider")
        root = Block(id="a", type="page", children=[child, sibling])

        self.assertEqual([b.id for b in root.walk()], ["a", "b", "c", "d"])

    def test_format_accessors_match_variant(self):
        """Test typed format accessors only return the matching variant."""
        block = Block(id="b1", type="page", format=FormatPage(page_full_width=True))

        self.assertIsNotNone(block.format_page)
        self.assertTrue(block.format_page.page_full_width)
        self.assertIsNone(block.format_image)
        self.assertIsNone(block.format_text)

    def test_format_variant_must_match_type(self):
        """Test a block rejects a format variant of another recognized type."""
        with self.assertRaises(ValidationError):
            Block(id="b1", type="text", format=FormatPage())

        block = Block(id="b1", type="text", format=FormatText(block_color="red"))
        self.assertEqual(block.format_text.block_color, "red")
        # Types without a default schema may carry a custom registry's format
        self.assertIsNotNone(Block(id="b1", type="callout", format=FormatText()).format_text)

    def test_image_predicate(self):
        """Test only image blocks are image-bearing."""
        self.assertTrue(Block(id="b1", type="image").is_image())
        self.assertFalse(Block(id="b1", type="bookmark").is_image())
        self.assertFalse(Block(id="b1", type="video").is_image())

    def test_inline_token_is_plain(self):
        """Test plain-run detection."""
        self.assertTrue(InlineToken(text="plain").is_plain())
        self.assertFalse(InlineToken(text="bold", bold=True).is_plain())
        self.assertFalse(InlineToken(text="x", comment_ids=["c1"]).is_plain())


class TestInlineRunParser(unittest.TestCase):
    """Test rich-text run parsing."""

    def test_empty_input(self):
        """Test empty rich text gives no tokens and no error."""
        self.assertEqual(parse_inline_blocks(None), [])
        self.assertEqual(parse_inline_blocks([]), [])

    def test_plain_runs(self):
        """Test runs without attributes."""
        tokens = parse_inline_blocks([["Hello "], ["world"]])

        self.assertEqual([t.text for t in tokens], ["Hello ", "world"])
        self.assertTrue(all(t.is_plain() for t in tokens))

    def test_attributes(self):
        """Test formatting flags and annotation arguments."""
        tokens = parse_inline_blocks([
            ["link", [["b"], ["i"], ["a", "https://example.com"]]],
            ["‣", [["u", "user-1"]]],
            ["‣", [["p", "page-1"]]],
            ["‣", [["d", {"type": "date", "start_date": "2024-05-22"}]]],
            ["x^2", [["e", "x^2"], ["h", "red_background"], ["m", "c1"], ["m", "c2"]]],
            ["old", [["s"], ["c"], ["_"]]],
        ])

        self.assertTrue(tokens[0].bold)
        self.assertTrue(tokens[0].italic)
        self.assertEqual(tokens[0].link, "https://example.com")
        self.assertEqual(tokens[1].user_id, "user-1")
        self.assertEqual(tokens[2].page_id, "page-1")
        self.assertEqual(tokens[3].date["start_date"], "2024-05-22")
        self.assertEqual(tokens[4].equation, "x^2")
        self.assertEqual(tokens[4].highlight, "red_background")
        self.assertEqual(tokens[4].comment_ids, ["c1", "c2"])
        self.assertTrue(tokens[5].strikethrough)
        self.assertTrue(tokens[5].code)
        self.assertTrue(tokens[5].underline)

    def test_unknown_attribute_is_ignored(self):
        """Test unknown attribute codes do not fail the parse."""
        tokens = parse_inline_blocks([["text", [["zz", "whatever"]]]])

        self.assertEqual(len(tokens), 1)
        self.assertTrue(tokens[0].is_plain())

    def test_malformed_input(self):
        """Test malformed rich text raises InlineParseError."""
        for value in ("text", [["ok"], "bad"], [[1]], [[]], [["x", "b"]], [["x", [["a"]]]], [["x", [[5]]]]):
            with self.subTest(value=value):
                with self.assertRaises(InlineParseError):
                    parse_inline_blocks(value)

    def test_first_inline_reduction(self):
        """Test scalar reduction keeps only the first run's text."""
        self.assertEqual(get_first_inline([]), "")
        self.assertEqual(get_first_inline_block([["first", [["b"]]], ["second"]]), "first")
        self.assertEqual(get_first_inline_block(None), "")

    def test_plain_text(self):
        """Test concatenating all runs."""
        tokens = parse_inline_blocks([["a"], ["b", [["b"]]], ["c"]])
        self.assertEqual(inline_to_plain_text(tokens), "abc")


class TestPropertyExtractor(unittest.TestCase):
    """Test scalar property extraction."""

    def test_absent_property(self):
        """Test a missing property is reported as not found."""
        block = make_block("text")

        self.assertEqual(get_prop(block, "description"), ("", False))
        self.assertIsNone(lookup_prop(block, "description"))

    def test_present_property(self):
        """Test the first run of a property is returned."""
        block = make_block("bookmark", {"link": [["https://example.com"], ["ignored"]]})

        self.assertEqual(get_prop(block, "link"), ("https://example.com", True))
        self.assertEqual(lookup_prop(block, "link"), "https://example.com")

    def test_malformed_property(self):
        """Test a malformed property is not found for get_prop but raises for lookup_prop."""
        block = make_block("bookmark", {"link": {"not": "runs"}})

        self.assertEqual(get_prop(block, "link"), ("", False))
        with self.assertRaises(InlineParseError):
            lookup_prop(block, "link")


class TestURLNormalizer(unittest.TestCase):
    """Test image URL normalization."""

    def test_relative_source(self):
        """Test a host-relative path is made absolute and proxied."""
        self.assertEqual(make_image_url(COVER_PATH), COVER_URL)

    def test_absolute_source(self):
        """Test an absolute https URL is proxied as is."""
        self.assertEqual(
            make_image_url("https://img.example.com/a.png"),
            "https://www.notion.so/image/https%3A%2F%2Fimg.example.com%2Fa.png"
        )

    def test_empty_source(self):
        """Test empty input is returned unchanged."""
        self.assertEqual(make_image_url(""), "")

    def test_idempotent(self):
        """Test normalizing a proxied URL again changes nothing."""
        for source in (COVER_PATH, "https://img.example.com/a.png", "http://insecure.example.com/a.png"):
            with self.subTest(source=source):
                once = make_image_url(source)
                self.assertEqual(make_image_url(once), once)

    def test_non_https_source_is_treated_as_relative(self):
        """Test sources without https:// are prefixed with the document host."""
        self.assertEqual(
            make_image_url("/a b.png"),
            "https://www.notion.so/image/https%3A%2F%2Fwww.notion.so%2Fa%20b.png"
        )

    def test_with_width(self):
        """Test adding the resize argument."""
        self.assertEqual(with_width(COVER_URL, 3290), COVER_URL + "?width=3290")
        self.assertEqual(with_width(COVER_URL + "?table=block", 100), COVER_URL + "?table=block&width=100")
        self.assertEqual(with_width("", 100), "")


class TestFormatDecoder(unittest.TestCase):
    """Test format payload decoding."""

    def test_empty_payload(self):
        """Test an empty payload decodes to no format."""
        self.assertIsNone(decode_format("page", b""))

    def test_unknown_type(self):
        """Test unregistered types decode to no format, even with a payload."""
        self.assertIsNone(decode_format("callout", b'{"block_color": "red"}'))
        self.assertIsNone(decode_format("something_new", b"not even json"))

    def test_page_format_normalizes_cover(self):
        """Test page cover URLs are normalized."""
        fmt = decode_format("page", json.dumps({"page_cover": COVER_PATH, "page_small_text": True}).encode())

        self.assertIsInstance(fmt, FormatPage)
        self.assertTrue(fmt.page_small_text)
        self.assertEqual(fmt.page_cover_url, COVER_URL)

    def test_page_format_without_cover(self):
        """Test a page without a cover has an empty cover URL."""
        fmt = decode_format("page", b'{"page_full_width": true}')
        self.assertEqual(fmt.page_cover_url, "")

    def test_image_format_normalizes_display_source(self):
        """Test image display sources are normalized."""
        fmt = decode_format("image", b'{"display_source": "https://img.example.com/a.png", "block_width": 240}')

        self.assertIsInstance(fmt, FormatImage)
        self.assertEqual(fmt.block_width, 240.0)
        self.assertEqual(fmt.image_url, "https://www.notion.so/image/https%3A%2F%2Fimg.example.com%2Fa.png")

    def test_unknown_keys_are_ignored(self):
        """Test keys outside the schema do not fail decoding."""
        fmt = decode_format("text", b'{"block_color": "blue", "copied_from_pointer": {"id": "x"}}')

        self.assertIsInstance(fmt, FormatText)
        self.assertEqual(fmt.block_color, "blue")

    def test_malformed_payload(self):
        """Test payloads that do not match the schema raise FormatDecodeError."""
        cases = [
            ("page", b'{"page_full_width": "maybe"}'),
            ("column", b'{"column_ratio": "wide"}'),
            ("image", b"{not json"),
            ("table", b'[1, 2, 3]'),
            ("page", b'{"page_full_width": "yes"}'),
            ("page", b'{"page_cover_position": "0.5"}'),
            ("column", b'{"column_ratio": "0.5"}'),
            ("image", b'{"block_width": "240"}'),
            ("text", b'{"block_color": 5}'),
        ]
        for block_type, raw in cases:
            with self.subTest(block_type=block_type):
                with self.assertRaises(FormatDecodeError) as ctx:
                    decode_format(block_type, raw)
                self.assertEqual(ctx.exception.block_type, block_type)
                self.assertEqual(ctx.exception.raw, raw)
                self.assertIn(block_type, str(ctx.exception))

    def test_json_null_payload(self):
        """Test a JSON null payload decodes to no format."""
        self.assertIsNone(decode_format("page", b"null"))
        self.assertIsNone(decode_format("image", b" null\n"))

    def test_integer_for_float_field(self):
        """Test JSON integers are accepted for float fields."""
        fmt = decode_format("column", b'{"column_ratio": 1}')
        self.assertEqual(fmt.column_ratio, 1.0)

    def test_custom_registry(self):
        """Test registering a schema for another block type."""
        registry = FormatRegistry()
        registry.register("callout", FormatText)

        self.assertIn("callout", registry.list_types())
        fmt = registry.decode("callout", b'{"block_color": "red"}')
        self.assertIsInstance(fmt, FormatText)
        # The global registry is unaffected
        self.assertIsNone(decode_format("callout", b'{"block_color": "red"}'))

    def test_default_registry_types(self):
        """Test the default registry covers the recognized types."""
        registry = FormatRegistry()
        self.assertEqual(
            sorted(registry.list_types()),
            sorted(["page", "bookmark", "image", "column", "table", "text", "video", "embed"])
        )


class TestBlockPropertyResolver(unittest.TestCase):
    """Test decoding of a whole block."""

    def test_page_title(self):
        """Test page blocks get a scalar title."""
        block = resolve_block(make_block("page", {"title": [["My page"], [" more", [["b"]]]]}))

        self.assertEqual(block.title, "My page")
        self.assertEqual(block.inline_content, [])

    def test_code_title(self):
        """Test code blocks store their title as code."""
        block = resolve_block(make_block("code", {
            "title": [["x = 1"]],
            "language": [["Python"]],
        }))

        self.assertEqual(block.code, "x = 1")
        self.assertEqual(block.code_language, "Python")
        self.assertEqual(block.title, "")

    def test_other_title_is_inline_content(self):
        """Test other blocks keep every run of their title."""
        block = resolve_block(make_block("text", {"title": [["a"], ["b", [["i"]]]]}))

        self.assertEqual(len(block.inline_content), 2)
        self.assertTrue(block.inline_content[1].italic)
        self.assertEqual(block.title, "")

    def test_malformed_title_is_fatal(self):
        """Test a malformed title aborts decoding before the format step."""
        block = make_block("page", {"title": "not runs"}, fmt={"page_cover": COVER_PATH})

        with self.assertRaises(PropertyDecodeError) as ctx:
            resolve_block(block)
        self.assertEqual(ctx.exception.field, "title")
        self.assertEqual(ctx.exception.block_type, "page")
        self.assertIsNone(block.format)

    def test_todo_checked(self):
        """Test the checked flag is set only for a case-insensitive 'Yes'."""
        cases = [
            ([["Yes"]], True),
            ([["yes"]], True),
            ([["YES"]], True),
            ([["No"]], False),
            ([], False),
            ("malformed", False),
        ]
        for checked, expected in cases:
            with self.subTest(checked=checked):
                block = resolve_block(make_block("to_do", {"title": [["task"]], "checked": checked}))
                self.assertEqual(block.is_checked, expected)

        block = resolve_block(make_block("to_do", {"title": [["task"]]}))
        self.assertFalse(block.is_checked)

    def test_checked_ignored_for_other_types(self):
        """Test only to_do blocks read the checked property."""
        block = resolve_block(make_block("text", {"checked": [["Yes"]]}))
        self.assertFalse(block.is_checked)

    def test_bookmark_fields(self):
        """Test description and link are extracted."""
        block = resolve_block(make_block("bookmark", {
            "description": [["About it"]],
            "link": [["https://example.com"]],
            "source": [["https://example.com"]],
        }))

        self.assertEqual(block.description, "About it")
        self.assertEqual(block.link, "https://example.com")
        self.assertEqual(block.source, "https://example.com")
        self.assertEqual(block.image_url, "")

    def test_structured_source_is_not_overwritten(self):
        """Test a source set from structured record data beats the property bag."""
        block = make_block("bookmark", {"source": [["https://example.com/stale"]]})
        block.source = "https://example.com/structured"

        resolve_block(block)
        self.assertEqual(block.source, "https://example.com/structured")

    def test_image_url_from_source(self):
        """Test image blocks get a proxied image URL from their source."""
        block = resolve_block(make_block("image", {"source": [[COVER_PATH]]}))

        self.assertEqual(block.source, COVER_PATH)
        self.assertEqual(block.image_url, COVER_URL)

    def test_no_image_url_for_other_types(self):
        """Test non-image blocks with a source get no image URL."""
        block = resolve_block(make_block("embed", {"source": [["https://example.com/widget"]]}))

        self.assertEqual(block.source, "https://example.com/widget")
        self.assertEqual(block.image_url, "")

    def test_file_size(self):
        """Test size is only extracted for file blocks."""
        file_block = resolve_block(make_block("file", {"size": [["12KB"]]}))
        text_block = resolve_block(make_block("text", {"size": [["12KB"]]}))

        self.assertEqual(file_block.file_size, "12KB")
        self.assertEqual(text_block.file_size, "")

    def test_malformed_scalar_is_soft_failure(self):
        """Test malformed non-critical properties leave fields at default."""
        block = resolve_block(make_block("bookmark", {
            "description": 42,
            "link": [["https://example.com"]],
        }))

        self.assertEqual(block.description, "")
        self.assertEqual(block.link, "https://example.com")

    def test_page_cover(self):
        """Test a page format with a cover gets a normalized cover URL."""
        block = resolve_block(make_block("page", {"title": [["p"]]}, fmt={"page_cover": COVER_PATH}))

        self.assertIsNotNone(block.format_page)
        self.assertEqual(block.format_page.page_cover_url, COVER_URL)

    def test_format_error_leaves_format_unset(self):
        """Test a malformed format raises and leaves block.format empty."""
        block = make_block("column", fmt={"column_ratio": "wide"})

        with self.assertRaises(FormatDecodeError):
            resolve_block(block)
        self.assertIsNone(block.format)
        self.assertIsNone(block.format_column)

    def test_unknown_type_decodes(self):
        """Test unknown block types decode without a format."""
        block = resolve_block(make_block("synced_block", {"title": [["x"]]}, fmt={"anything": 1}))

        self.assertIsNone(block.format)
        self.assertEqual(block.inline_content[0].text, "x")

    def test_column_format(self):
        """Test column format decoding."""
        block = resolve_block(make_block(BlockType.COLUMN.value, fmt={"column_ratio": 0.25}))

        self.assertIsInstance(block.format, FormatColumn)
        self.assertEqual(block.format_column.column_ratio, 0.25)


class TestMutations(unittest.TestCase):
    """Test page edit operations."""

    def setUp(self):
        """Set up a page with a recording client."""
        self.client = RecordingClient()
        self.page = Page(id="p1", root=Block(id="p1", type="page")).attach_client(self.client)

    def test_build_set_title_op(self):
        """Test the title operation shape."""
        op = build_set_title_op("p1", "Hello")

        self.assertEqual(op.id, "p1")
        self.assertEqual(op.table, "block")
        self.assertEqual(op.path, ["properties", "title"])
        self.assertEqual(op.command, "set")
        self.assertEqual(op.args, [["Hello"]])

    def test_build_set_page_format_op(self):
        """Test the format operation shape."""
        op = build_set_page_format_op("p1", {"page_full_width": True})

        self.assertEqual(op.path, ["format"])
        self.assertEqual(op.command, "update")
        self.assertEqual(op.args, {"page_full_width": True})

    def test_set_title_submits(self):
        """Test set_title submits one transaction addressed by root ID."""
        self.page.set_title("New title")

        self.assertEqual(len(self.client.transactions), 1)
        self.assertEqual(self.client.operations[0].id, "p1")
        self.assertEqual(self.client.operations[0].args, [["New title"]])
        # Decoded fields are not touched
        self.assertEqual(self.page.root.title, "")

    def test_set_format_submits(self):
        """Test set_format submits valid keys."""
        self.page.set_format({"page_full_width": True, "page_small_text": False})

        self.assertEqual(len(self.client.operations), 1)
        self.assertEqual(self.client.operations[0].args, {"page_full_width": True, "page_small_text": False})

    def test_set_format_rejects_empty(self):
        """Test empty format args are rejected before submission."""
        with self.assertRaises(InvalidRequestError):
            self.page.set_format({})
        self.assertEqual(self.client.transactions, [])

    def test_set_format_rejects_unknown_key(self):
        """Test unknown format keys are rejected before submission."""
        with self.assertRaises(InvalidRequestError) as ctx:
            self.page.set_format({"page_full_width": True, "page_font": "serif"})
        self.assertIn("page_font", str(ctx.exception))
        self.assertEqual(self.client.transactions, [])

    def test_invalid_request_is_value_error(self):
        """Test InvalidRequestError can be caught as ValueError."""
        with self.assertRaises(ValueError):
            self.page.set_format({})

    def test_no_client(self):
        """Test edits need an attached client."""
        page = Page(id="p2", root=Block(id="p2", type="page"))
        with self.assertRaises(InvalidRequestError):
            page.set_title("x")


if __name__ == '__main__':
    unittest.main()
