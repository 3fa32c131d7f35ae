"""
Tests for block models, registry and factory.

Covers:
1. BlockTypeDefinition validation at definition time
2. Catalog snapshots and registry lifecycle
3. Attribute precedence and fallback creation
"""

import logging
import sys
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from post_blocks.blocks import (
    Block,
    BlockTypeCatalog,
    BlockTypeDefinition,
    BlockTypeRegistry,
    SequentialUidGenerator,
    UuidGenerator,
    create_block,
    create_block_with_fallback,
    get_block_attributes,
)
from post_blocks.exceptions import BlockTypeError
from post_blocks.matchers import WholeContentFunction, attr, text


def save_fruit(attributes):
    return attributes.get("fruit")


def make_block_type(name="core/test-block", **settings):
    settings.setdefault("attributes", {"fruit": str})
    settings.setdefault("save", save_fruit)
    return BlockTypeDefinition(name=name, **settings)


# =============================================================================
# BlockTypeDefinition
# =============================================================================

@pytest.mark.parametrize("name", ["test-block", "Core/test", "core/Test", "1core/test", "core/test/extra", ""])
def test_block_type_rejects_invalid_names(name):
    with pytest.raises(ValueError):
        make_block_type(name=name)


def test_block_type_rejects_unknown_matchers():
    with pytest.raises(ValueError):
        make_block_type(attributes={"ignored": {"matcher": lambda node: node.decode_contents()}})


def test_block_type_resolves_whole_content_function():
    block_type = make_block_type(attributes=lambda raw: {"raw": raw})

    assert isinstance(block_type.attributes, WholeContentFunction)
    assert block_type.defaults == {}


def test_block_type_defaults_merge_source_and_static_defaults():
    block_type = make_block_type(
        attributes={
            "topic": {"type": str, "default": "none"},
            "align": {"type": str, "default": "left"},
        },
        default_attributes={"align": "center", "size": 2},
    )

    assert block_type.defaults == {"topic": "none", "align": "center", "size": 2}


def test_block_type_wrapper_props():
    plain = make_block_type()
    wide = make_block_type(get_edit_wrapper_props=lambda attributes: {"data-align": attributes.get("align")})

    assert plain.get_wrapper_props({"align": "wide"}) == {}
    assert wide.get_wrapper_props({"align": "wide"}) == {"data-align": "wide"}


def test_block_type_is_frozen():
    block_type = make_block_type()

    with pytest.raises(ValueError):
        block_type.name = "core/other"


# =============================================================================
# Catalog & Registry
# =============================================================================

def test_catalog_lookup():
    block_type = make_block_type()
    catalog = BlockTypeCatalog([block_type])

    assert catalog.lookup("core/test-block") is block_type
    assert catalog.lookup("core/unknown") is None
    assert catalog.lookup(None) is None
    assert len(catalog) == 1
    assert list(catalog) == ["core/test-block"]


def test_catalog_coerce():
    block_type = make_block_type()
    catalog = BlockTypeCatalog([block_type])

    assert BlockTypeCatalog.coerce(catalog) is catalog
    assert BlockTypeCatalog.coerce({"x": block_type}).lookup("core/test-block") is block_type
    assert BlockTypeCatalog.coerce([block_type]).lookup("core/test-block") is block_type
    assert len(BlockTypeCatalog.coerce(None)) == 0


def test_registry_register_and_unregister():
    registry = BlockTypeRegistry()
    block_type = registry.register("core/test-block", attributes={"fruit": str}, save=save_fruit)

    assert registry.get("core/test-block") is block_type
    assert "core/test-block" in registry
    assert registry.get_all() == [block_type]

    assert registry.unregister("core/test-block") is block_type
    assert len(registry) == 0


def test_registry_rejects_duplicates():
    registry = BlockTypeRegistry()
    registry.register(make_block_type())

    with pytest.raises(BlockTypeError, match="already registered"):
        registry.register(make_block_type())


def test_registry_unregister_unknown_logs_error(caplog):
    registry = BlockTypeRegistry()

    with caplog.at_level(logging.ERROR, logger="post_blocks.blocks.registry"):
        assert registry.unregister("core/missing") is None

    assert 'Block "core/missing" is not registered.' in caplog.text


def test_registry_snapshot_is_isolated():
    registry = BlockTypeRegistry()
    registry.register(make_block_type())
    snapshot = registry.snapshot()

    registry.register(make_block_type(name="core/later"))
    registry.unregister("core/test-block")

    assert list(snapshot) == ["core/test-block"]
    assert list(registry.snapshot()) == ["core/later"]


def test_registry_unknown_type_handler():
    registry = BlockTypeRegistry()
    assert registry.get_unknown_type_handler() is None

    registry.set_unknown_type_handler("core/freeform")
    assert registry.get_unknown_type_handler() == "core/freeform"


# =============================================================================
# uid generation
# =============================================================================

def test_sequential_uids():
    generator = SequentialUidGenerator("block")

    assert [generator.next() for _ in range(3)] == ["block-1", "block-2", "block-3"]


def test_uids_are_unique_across_threads():
    generators = [SequentialUidGenerator(), UuidGenerator()]

    for generator in generators:
        with ThreadPoolExecutor(max_workers=8) as pool:
            uids = list(pool.map(lambda _: generator.next(), range(500)))
        assert len(set(uids)) == 500


# =============================================================================
# Factory
# =============================================================================

def test_create_block():
    block = create_block(make_block_type(), {"fruit": "Bananas"}, uid_generator=SequentialUidGenerator("t"))

    assert block == Block(name="core/test-block", attributes={"fruit": "Bananas"}, uid="t-1")


def test_get_block_attributes_merges_parsed_and_default_attributes():
    block_type = make_block_type(attributes={
        "content": text("div"),
        "number": {"type": int, "matcher": attr("div", "data-number")},
        "align": str,
        "topic": {"type": str, "default": "none"},
    })
    raw_content = '<div data-number="10">Ribs</div>'

    assert get_block_attributes(block_type, raw_content, {"align": "left"}) == {
        "content": "Ribs",
        "number": 10,
        "align": "left",
        "topic": "none",
    }


def test_get_block_attributes_precedence():
    block_type = make_block_type(
        attributes={"a": {"type": int, "matcher": attr("div", "data-a")}},
        default_attributes={"a": 1},
    )

    assert get_block_attributes(block_type, '<div data-a="4"></div>', {"a": 2, "b": 3}) == {"a": 4, "b": 3}


def test_get_block_attributes_without_block_type():
    assert get_block_attributes(None, "Ribs", {"a": 1}) == {"a": 1}


def test_get_block_attributes_drops_null_values():
    block_type = make_block_type(default_attributes={"a": None, "b": 1})

    assert get_block_attributes(block_type, "", {"fruit": None, "c": 2}) == {"b": 1, "c": 2}
    assert get_block_attributes(None, "", {"fruit": None}) == {}


def test_blocks_do_not_share_mutable_defaults():
    block_type = make_block_type(
        attributes={"tags": {"type": list, "default": []}},
        default_attributes={"items": []},
    )
    generator = SequentialUidGenerator()

    first = create_block_with_fallback(block_type, None, "", uid_generator=generator)
    second = create_block_with_fallback(block_type, None, "", uid_generator=generator)
    first.attributes["items"].append("x")
    first.attributes["tags"].append("y")

    assert second.attributes == {"items": [], "tags": []}
    assert block_type.defaults == {"items": [], "tags": []}


def test_create_block_with_fallback_uses_requested_type():
    block_type = make_block_type()

    block = create_block_with_fallback(block_type, None, "Bananas", {"fruit": "Bananas"})

    assert block.name == "core/test-block"
    assert block.attributes == {"fruit": "Bananas"}
    assert block.is_valid
    assert block.original_content is None
    assert isinstance(block.uid, str) and block.uid


def test_create_block_with_fallback_without_attributes():
    block = create_block_with_fallback(make_block_type(), None, "content")

    assert block.name == "core/test-block"
    assert block.attributes == {}


def test_create_block_with_fallback_uses_unknown_type_handler():
    fallback = make_block_type(name="core/unknown-block")

    block = create_block_with_fallback(None, fallback, "content", {"fruit": "Bananas"})

    assert block.name == "core/unknown-block"
    assert block.attributes == {"fruit": "Bananas"}


def test_create_block_with_fallback_without_handler():
    assert create_block_with_fallback(None, None, "content") is None


def test_create_block_with_fallback_drops_empty_fallback_content():
    fallback = make_block_type(name="core/unknown-block")

    assert create_block_with_fallback(None, fallback, "") is None
    assert create_block_with_fallback(fallback, fallback, "") is None
    assert create_block_with_fallback(make_block_type(), fallback, "") is not None


def test_create_block_with_fallback_preserves_invalid_content():
    block = create_block_with_fallback(make_block_type(), None, "<p>Ribs</p>", {"fruit": "Bananas"})

    assert not block.is_valid
    assert block.original_content == "<p>Ribs</p>"
    assert block.to_dict()["original_content"] == "<p>Ribs</p>"


def test_create_block_with_fallback_propagates_extraction_errors():
    def explode(raw):
        raise RuntimeError("matcher failed")

    with pytest.raises(RuntimeError, match="matcher failed"):
        create_block_with_fallback(make_block_type(attributes=explode), None, "Ribs")
