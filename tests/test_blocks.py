from postmatter.blocks import Block, Link, code_blocks, headings, links, outline, split_info

BODY = """# Functional patterns

Intro with a [link](https://example.com) and *emphasis*.

```dart {1,3}
void main() {}
```

## Next

> quoted

---

- one
- two
"""


def test_outline_kinds_in_order():
    kinds = [block.kind for block in outline(BODY)]
    assert kinds == ["heading", "paragraph", "code", "heading", "quote", "rule", "list"]


def test_outline_heading_and_paragraph_text():
    blocks = outline(BODY)
    assert blocks[0] == Block(kind="heading", text="Functional patterns", level=1)
    assert blocks[1].text == "Intro with a link and emphasis."
    assert blocks[3].level == 2
    assert blocks[4].text == "quoted"
    assert blocks[6].text == "one\ntwo"


def test_code_block_language_and_annotation():
    (code,) = code_blocks(BODY)
    assert code.language == "dart"
    assert code.annotation == "{1,3}"
    assert code.text == "void main() {}\n"


def test_code_block_without_info():
    (code,) = code_blocks("```\nplain\n```\n")
    assert code.language is None
    assert code.annotation is None


def test_headings_filter():
    assert [h.text for h in headings(BODY)] == ["Functional patterns", "Next"]


def test_links_in_document_order():
    body = "See [docs](https://docs.example.com \"Docs\").\n\n- [one](/one)\n\n![img](pic.png)\n"
    assert links(body) == [
        Link(text="docs", url="https://docs.example.com", title="Docs"),
        Link(text="one", url="/one"),
    ]
    assert links(BODY) == [Link(text="link", url="https://example.com")]


def test_split_info():
    assert split_info("dart {1,3}") == ("dart", "{1,3}")
    assert split_info("python") == ("python", None)
    assert split_info("  ") == (None, None)
    assert split_info(None) == (None, None)
    assert split_info("{linenos=true}") == (None, "{linenos=true}")


def test_outline_empty_body():
    assert outline("") == []
