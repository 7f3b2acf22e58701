"""Tests for the anchored email matcher."""

import pytest

from sobre.autoemail.matcher import EmailMatch, match_email


class TestBareAddresses:
    """Addresses written without decoration."""

    def test_simple_address(self) -> None:
        found = match_email("someone@example.com", 0)
        assert found == EmailMatch(
            email_address="someone@example.com",
            consumed_length=19,
            was_bracketed=False,
            address_offset=0,
        )

    @pytest.mark.parametrize(
        "address",
        [
            "someone.else@example.com",
            "a-b_c.d@sub-domain.example.org",
            "123@example.com",
            "x@a.b.c.io",
            "user@host-1.example.museum",
        ],
    )
    def test_accepted_shapes(self, address: str) -> None:
        found = match_email(address, 0)
        assert found is not None
        assert found.email_address == address
        assert found.consumed_length == len(address)

    def test_case_insensitive_domain(self) -> None:
        found = match_email("Someone@Example.COM", 0)
        assert found is not None
        assert found.email_address == "Someone@Example.COM"

    def test_trailing_text_not_consumed(self) -> None:
        found = match_email("someone@example.com is here", 0)
        assert found is not None
        assert found.consumed_length == 19

    def test_trailing_period_excluded(self) -> None:
        found = match_email("someone@example.com.", 0)
        assert found is not None
        assert found.email_address == "someone@example.com"

    def test_closing_angle_not_consumed_without_opening(self) -> None:
        found = match_email("someone@example.com>", 0)
        assert found is not None
        assert found.consumed_length == 19
        assert found.was_bracketed is False


class TestDecoratedAddresses:
    """``<...>`` and ``mailto:`` forms."""

    def test_bracketed(self) -> None:
        found = match_email("<someone@example.com>", 0)
        assert found == EmailMatch("someone@example.com", 21, True, 1)

    def test_mailto_prefix(self) -> None:
        found = match_email("mailto:someone@example.com", 0)
        assert found == EmailMatch("someone@example.com", 26, False, 7)

    def test_mailto_prefix_any_case(self) -> None:
        found = match_email("MailTo:someone@example.com", 0)
        assert found is not None
        assert found.email_address == "someone@example.com"
        assert found.address_offset == 7

    def test_bracketed_mailto(self) -> None:
        found = match_email("<mailto:someone@example.com>", 0)
        assert found == EmailMatch("someone@example.com", 28, True, 8)

    def test_unterminated_bracket_rejected(self) -> None:
        assert match_email("<someone@example.com", 0) is None

    def test_bracket_closed_late_rejected(self) -> None:
        assert match_email("<someone@example.com x>", 0) is None

    def test_closing_bracket_outside_end_rejected(self) -> None:
        text = "<someone@example.com>"
        assert match_email(text, 0, len(text) - 1) is None


class TestAnchoring:
    """The match starts exactly at the given offset."""

    def test_no_forward_search(self) -> None:
        assert match_email("mail me@example.com", 0) is None

    def test_match_at_offset(self) -> None:
        found = match_email("mail me@example.com", 5)
        assert found is not None
        assert found.email_address == "me@example.com"
        assert found.consumed_length == 14

    def test_bracketed_at_offset(self) -> None:
        found = match_email("Hi <a@b.io>!", 3)
        assert found == EmailMatch("a@b.io", 8, True, 1)

    def test_end_bound_limits_match(self) -> None:
        assert match_email("someone@example.com", 0, 12) is None


class TestRejected:
    """Text that is not email-shaped."""

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "someone",
            "someone@example",
            "someone@@example.com",
            "some one@example.com",
            "@example.com",
            "someone@.com",
            "someone@example.123",
            "<>",
        ],
    )
    def test_not_an_address(self, text: str) -> None:
        assert match_email(text, 0) is None

    @pytest.mark.parametrize(
        "text",
        [
            "josé@example.com",
            "someone@exämple.com",
            "\u212aelvin@example.com",
        ],
    )
    def test_non_ascii_rejected(self, text: str) -> None:
        assert match_email(text, 0) is None
