"""Tests for gopkg directive parsing."""

import pytest
from govanity.core.directives import parse_directives
from govanity.core.registration import PackageRegistration, Submodule
from govanity.errors import DirectiveError


class TestParseDirectives:
    """Tests for parse_directives()."""

    def test__path_and_uri__uses_default_vcs(self) -> None:
        """Parse the two-argument form."""
        result = parse_directives("gopkg /caddy/gopkg https://github.com/org/gopkg\n")

        assert result == [
            PackageRegistration(path="/caddy/gopkg", url="https://github.com/org/gopkg")
        ]
        assert result[0].provision().vcs == "git"

    def test__path_vcs_and_uri__sets_vcs(self) -> None:
        """Parse the three-argument form."""
        result = parse_directives("gopkg /tools hg https://hg.example.com/tools")

        assert result[0].vcs == "hg"
        assert result[0].url == "https://hg.example.com/tools"

    def test__block__parses_submodules(self) -> None:
        """Collect submodules from the block in order."""
        text = """
gopkg /pkg https://host/a {
    submodule /sub https://host/b
    submodule /inherit
}
"""
        result = parse_directives(text)

        assert result == [
            PackageRegistration(
                path="/pkg",
                url="https://host/a",
                submodules=(Submodule("/sub", "https://host/b"), Submodule("/inherit")),
            )
        ]

    def test__multiple_directives__keep_order(self) -> None:
        """Return registrations in declaration order."""
        text = """
# vanity packages
gopkg /b https://host/b
gopkg /a svn https://host/a {
}
"""
        result = parse_directives(text)

        assert [r.path for r in result] == ["/b", "/a"]
        assert result[1].submodules == ()

    def test__quoted_and_commented_tokens__are_handled(self) -> None:
        """Follow shell quoting and comment rules."""
        result = parse_directives('gopkg "/my pkg" https://host/a  # trailing comment')

        assert result[0].path == "/my pkg"
        assert result[0].url == "https://host/a"

    @pytest.mark.parametrize(
        ("text", "message", "line"),
        [
            ("gopkg /pkg", "usage: gopkg", 1),
            ("gopkg /pkg git https://host/a extra", "usage: gopkg", 1),
            ("\nserve /pkg https://host/a", "unrecognized directive 'serve'", 2),
            (
                "gopkg /pkg https://host/a {\n    module /x\n}",
                "unrecognized subdirective 'module'",
                2,
            ),
            ("gopkg /pkg https://host/a {\n    submodule\n}", "usage: submodule", 2),
            ("gopkg /pkg https://host/a {\n    submodule /x\n", "unclosed block", 1),
            ('gopkg "/pkg https://host/a', "No closing quotation", 1),
        ],
    )
    def test__malformed_input__raises_error(
        self, text: str, message: str, line: int
    ) -> None:
        """Reject malformed directives with the offending line."""
        with pytest.raises(DirectiveError, match=message) as exc_info:
            parse_directives(text)

        assert exc_info.value.line == line
        assert str(exc_info.value).startswith(f"line {line}:")
