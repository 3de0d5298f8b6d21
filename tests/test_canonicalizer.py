import pytest

from canvasapi.canonicalizer import canonicalize_blocks
from canvasapi.errors import BlockConstructionError, InvalidBlockType
from canvasapi.models import Block


def _shape(blocks):
    return [(block.type, block.content) for block in blocks]


def test_empty_list_gets_title_and_paragraph():
    blocks = canonicalize_blocks([])
    assert _shape(blocks) == [("title", ""), ("paragraph", "")]


def test_none_is_treated_as_empty():
    assert _shape(canonicalize_blocks(None)) == [("title", ""), ("paragraph", "")]


def test_paragraph_only_gets_title_prepended():
    blocks = canonicalize_blocks([{"type": "paragraph", "content": "hi"}])
    assert _shape(blocks) == [("title", ""), ("paragraph", "hi")]


def test_title_only_gets_paragraph_appended():
    blocks = canonicalize_blocks([{"type": "title", "content": "T"}])
    assert _shape(blocks) == [("title", "T"), ("paragraph", "")]


def test_leading_title_is_kept_without_duplicate():
    blocks = canonicalize_blocks([
        {"type": "title", "content": "T"},
        {"type": "paragraph", "content": "a"},
        {"type": "paragraph", "content": "b"},
    ])
    assert _shape(blocks) == [("title", "T"), ("paragraph", "a"), ("paragraph", "b")]


def test_canonical_list_is_unchanged():
    canonical = canonicalize_blocks([{"type": "paragraph", "content": "hi"}])
    again = canonicalize_blocks(canonical)

    assert again == canonical
    assert [block.id for block in again] == [block.id for block in canonical]
    assert _shape(again) == _shape(canonical)


def test_supplied_ids_are_kept():
    blocks = canonicalize_blocks([{"id": "abc", "type": "title", "content": "T"}])
    assert blocks[0].id == "abc"


def test_missing_ids_are_assigned():
    blocks = canonicalize_blocks([{"id": None, "type": "paragraph"}])
    assert all(block.id for block in blocks)


def test_supplied_blocks_are_copied():
    supplied = [Block(type="title", content="T"), Block(type="list", blocks=[Block(type="unordered-list-item")])]
    blocks = canonicalize_blocks(supplied)

    assert [block.id for block in blocks] == [block.id for block in supplied]
    assert all(copy is not original for copy, original in zip(blocks, supplied))
    assert blocks[1].blocks[0] is not supplied[1].blocks[0]

    blocks[1].blocks[0].content = "changed"
    assert supplied[1].blocks[0].content == ""


def test_missing_child_ids_are_assigned():
    blocks = canonicalize_blocks([{"type": "list", "blocks": [{"id": None, "type": "unordered-list-item"}]}])
    assert blocks[1].blocks[0].id


def test_input_list_is_not_modified():
    supplied = [Block(type="paragraph", content="hi")]
    canonicalize_blocks(supplied)
    assert len(supplied) == 1


def test_title_further_down_is_not_hoisted():
    # Known edge case: only the first position is checked, so two titles result
    blocks = canonicalize_blocks([
        {"type": "paragraph", "content": "body"},
        {"type": "title", "content": "Late title"},
    ])
    assert _shape(blocks) == [("title", ""), ("paragraph", "body"), ("title", "Late title")]


@pytest.mark.parametrize("supplied", [
    [],
    [{"type": "paragraph"}],
    [{"type": "title"}],
    [{"type": "list", "blocks": [{"type": "unordered-list-item"}]}, {"type": "code"}],
])
def test_title_and_minimum_length_invariants(supplied):
    blocks = canonicalize_blocks(supplied)
    assert blocks[0].type == "title"
    assert len(blocks) >= 2


def test_empty_type_fails():
    with pytest.raises(InvalidBlockType):
        canonicalize_blocks([{"type": "paragraph"}, {"type": ""}])


def test_empty_child_type_fails():
    with pytest.raises(InvalidBlockType):
        canonicalize_blocks([{"type": "list", "blocks": [{"type": "unordered-list-item"}, {"type": " "}]}])


def test_missing_type_fails_construction():
    with pytest.raises(BlockConstructionError) as excinfo:
        canonicalize_blocks([{"content": "no type"}])
    assert "blocks" in excinfo.value.errors


def test_non_mapping_block_fails_construction():
    with pytest.raises(BlockConstructionError):
        canonicalize_blocks(["just a string"])
