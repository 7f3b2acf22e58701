"""Property-based tests for email autolinking using Hypothesis."""

from hypothesis import given, settings
from hypothesis import strategies as st

from sobre import Link, Markdown, Text
from sobre.autoemail.matcher import match_email
from sobre.autoemail.rule import AutoEmailRule
from sobre.nodes import Document, Emphasis, Paragraph, Strikethrough, Strong
from sobre.parsing.cursor import TextCursor
from sobre.parsing.inline import InlineProcessor, create_rule_builder_with_defaults

local_parts = st.from_regex(r"[A-Za-z0-9][A-Za-z0-9._-]{0,15}", fullmatch=True)
domain_labels = st.from_regex(r"[a-z0-9-]{1,10}", fullmatch=True)
top_level = st.from_regex(r"[a-z]{1,6}", fullmatch=True)


@st.composite
def addresses(draw: st.DrawFn) -> str:
    labels = draw(st.lists(domain_labels, min_size=1, max_size=3))
    return f"{draw(local_parts)}@{'.'.join(labels)}.{draw(top_level)}"


markdown_text = st.text(
    alphabet="ab1@.-_<>*~[]()` \nmailto:/",
    max_size=60,
)


def iter_links(doc: Document):
    stack = list(doc.children)
    while stack:
        node = stack.pop()
        if isinstance(node, Link):
            yield node
        if isinstance(node, (Paragraph, Emphasis, Strong, Strikethrough, Link)):
            stack.extend(node.children)


class TestMatcherProperties:
    @given(address=addresses())
    @settings(max_examples=100)
    def test_bare_address_fully_consumed(self, address: str) -> None:
        found = match_email(address, 0)
        assert found is not None
        assert found.email_address == address
        assert found.consumed_length == len(address)
        assert found.address_offset == 0

    @given(address=addresses())
    @settings(max_examples=100)
    def test_bracketed_address_consumes_brackets(self, address: str) -> None:
        found = match_email(f"<{address}> tail", 0)
        assert found is not None
        assert found.email_address == address
        assert found.consumed_length == len(address) + 2
        assert found.was_bracketed

    @given(text=markdown_text, data=st.data())
    @settings(max_examples=200)
    def test_match_covers_its_address(self, text: str, data: st.DataObject) -> None:
        start = data.draw(st.integers(min_value=0, max_value=len(text)))
        found = match_email(text, start)
        if found is None:
            return
        address = found.email_address
        assert start + found.consumed_length <= len(text)
        assert text[start + found.address_offset :].startswith(address)
        assert "<" not in address and not address.lower().startswith("mailto:")


class TestRuleProperties:
    @given(text=markdown_text, data=st.data())
    @settings(max_examples=200)
    def test_decline_leaves_state_untouched(self, text: str, data: st.DataObject) -> None:
        if not text:
            return
        start = data.draw(st.integers(min_value=0, max_value=len(text) - 1))
        rule = AutoEmailRule()
        builder = create_rule_builder_with_defaults()
        builder.insert(0, rule)
        processor = InlineProcessor(text, builder.build())
        processor.process(0, start)
        before = processor.tree.snapshot()
        cursor = TextCursor(text, start, origin=0)

        if rule.match(processor, cursor):
            assert cursor.start > start
            assert processor.inline is not None
            assert processor.inline.token.url.startswith("mailto:")
        else:
            assert cursor.start == start
            assert processor.inline is None
        assert processor.tree.snapshot() == before


class TestPipelineProperties:
    @given(address=addresses(), prefix=st.sampled_from(["", " ", "Ask ", "*", "(", "~", "_"]))
    @settings(max_examples=100)
    def test_address_after_valid_boundary_is_linked(self, address: str, prefix: str) -> None:
        md = Markdown()
        doc = md.parse(prefix + address)
        links = list(iter_links(doc))
        assert len(links) == 1
        assert links[0].url == f"mailto:{address}"
        assert links[0].children == (Text(location=links[0].location, content=address),)

    @given(
        local=st.from_regex(r"[A-Za-z0-9][A-Za-z0-9.-]{0,15}", fullmatch=True),
        domain=domain_labels,
        tld=top_level,
        prefix=st.sampled_from(["=", "/", "[x", ":", "x="]),
    )
    @settings(max_examples=100)
    def test_address_after_invalid_boundary_is_text(
        self, local: str, domain: str, tld: str, prefix: str
    ) -> None:
        source = f"{prefix}{local}@{domain}.{tld}"
        doc = Markdown().parse(source)
        assert list(iter_links(doc)) == []

    @given(text=markdown_text)
    @settings(max_examples=300)
    def test_autolink_spans_point_at_link_text(self, text: str) -> None:
        doc = Markdown(plugins=["all"]).parse(text)
        for link in iter_links(doc):
            if not link.is_autolink:
                continue
            (child,) = link.children
            assert isinstance(child, Text)
            assert text[link.location.offset : link.location.end_offset] == child.content
            assert link.url in (child.content, "mailto:" + child.content)

    @given(text=markdown_text)
    @settings(max_examples=100)
    def test_parsing_is_deterministic(self, text: str) -> None:
        md = Markdown(plugins=["all"])
        assert md(text) == md(text)
