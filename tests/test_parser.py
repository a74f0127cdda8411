"""Tests for the invocation tokenizer (core/parser.py).

Coverage:
* Command name, options and positional arguments are separated.
* Aliases normalise to one canonical key.
* Flag / value arity errors raise ``MalformedInvocationError``.
* Unknown options are kept for later validation.
* ``GlobalOptions`` typed view.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from bee.core.models import OptionSpec
from bee.core.parser import (
    GLOBAL_OPTION_NAMES,
    global_options,
    normalize_options,
    parse_invocation,
)
from bee.exceptions import MalformedInvocationError


# ---------------------------------------------------------------------------
# Basic shape
# ---------------------------------------------------------------------------

class TestShape:
    def test_command_option_and_argument(self) -> None:
        parsed = parse_invocation(["cmd", "--opt=v", "arg1"])
        assert parsed.command_name == "cmd"
        assert parsed.options["opt"] == "v"
        assert parsed.positional_args == ("arg1",)

    def test_empty_invocation(self) -> None:
        parsed = parse_invocation([])
        assert parsed.command_name is None
        assert parsed.positional_args == ()
        assert dict(parsed.options) == {}

    def test_positional_order_is_preserved(self) -> None:
        parsed = parse_invocation(["cmd", "a", "--x", "b", "c"])
        assert parsed.positional_args == ("a", "b", "c")

    def test_global_options_before_command(self) -> None:
        parsed = parse_invocation(["--drush", "-y", "legacy-cmd", "one"])
        assert parsed.command_name == "legacy-cmd"
        assert parsed.options["drush"] is True
        assert parsed.options["yes"] is True
        assert parsed.positional_args == ("one",)

    def test_double_dash_ends_options(self) -> None:
        parsed = parse_invocation(["config-set", "--", "system.core", "--weird", "-1"])
        assert parsed.command_name == "config-set"
        assert parsed.positional_args == ("system.core", "--weird", "-1")
        assert "weird" not in parsed.options

    def test_negative_number_is_positional(self) -> None:
        parsed = parse_invocation(["config-set", "system.core", "theme_debug", "-1"])
        assert parsed.positional_args == ("system.core", "theme_debug", "-1")
        assert dict(parsed.options) == {}

    def test_lone_dash_is_positional(self) -> None:
        parsed = parse_invocation(["cmd", "-"])
        assert parsed.positional_args == ("-",)

    def test_value_may_contain_equals(self) -> None:
        parsed = parse_invocation(["cmd", "--filter=a=b"])
        assert parsed.options["filter"] == "a=b"

    def test_options_are_read_only(self) -> None:
        parsed = parse_invocation(["cmd", "--x"])
        with pytest.raises(TypeError):
            parsed.options["y"] = True  # type: ignore[index]


# ---------------------------------------------------------------------------
# Aliases
# ---------------------------------------------------------------------------

class TestAliases:
    @pytest.mark.parametrize(
        ("short", "long", "key"),
        [("-y", "--yes", "yes"), ("-d", "--debug", "debug"), ("-V", "--version", "version")],
    )
    def test_alias_pairs_share_canonical_key(self, short: str, long: str, key: str) -> None:
        assert dict(parse_invocation([short]).options) == {key: True}
        assert dict(parse_invocation([long]).options) == {key: True}

    def test_both_spellings_together_are_fine(self) -> None:
        parsed = parse_invocation(["-y", "--yes", "status"])
        assert dict(parsed.options) == {"yes": True}

    def test_extra_option_aliases(self) -> None:
        parsed = parse_invocation(
            ["cmd", "-f=json"],
            extra_options=[OptionSpec("format", aliases=("f",), takes_value=True)],
        )
        assert dict(parsed.options) == {"format": "json"}

    def test_conflicting_values_raise(self) -> None:
        with pytest.raises(MalformedInvocationError, match="conflicts"):
            parse_invocation(["--root=/a", "--root=/b", "status"])

    def test_conflicting_alias_values_raise(self) -> None:
        spec = OptionSpec("format", aliases=("f",), takes_value=True)
        with pytest.raises(MalformedInvocationError):
            parse_invocation(["cmd", "-f=json", "--format=csv"], extra_options=[spec])


# ---------------------------------------------------------------------------
# Arity
# ---------------------------------------------------------------------------

class TestArity:
    @pytest.mark.parametrize("token", ["--debug=1", "--debug=true", "--yes=on", "-y=yes"])
    def test_flag_accepts_truthy_value(self, token: str) -> None:
        parsed = parse_invocation([token])
        assert set(parsed.options.values()) == {True}

    @pytest.mark.parametrize("token", ["--debug=verbose", "--drush=0", "-y=no", "--yes="])
    def test_flag_rejects_other_values(self, token: str) -> None:
        with pytest.raises(MalformedInvocationError, match="flag"):
            parse_invocation([token, "status"])

    def test_root_requires_value(self) -> None:
        with pytest.raises(MalformedInvocationError, match="requires a value"):
            parse_invocation(["status", "--root"])

    def test_root_empty_value(self) -> None:
        with pytest.raises(MalformedInvocationError):
            parse_invocation(["--root=", "status"])

    def test_root_spaced_value(self) -> None:
        parsed = parse_invocation(["--root", "/var/www", "status"])
        assert parsed.options["root"] == "/var/www"
        assert parsed.command_name == "status"

    def test_root_spaced_value_does_not_swallow_options(self) -> None:
        with pytest.raises(MalformedInvocationError):
            parse_invocation(["--root", "--debug", "status"])


# ---------------------------------------------------------------------------
# Unknown options
# ---------------------------------------------------------------------------

class TestUnknownOptions:
    def test_unknown_long_option_kept(self) -> None:
        parsed = parse_invocation(["cmd", "--colour=red", "--verbose"])
        assert dict(parsed.options) == {"colour": "red", "verbose": True}

    def test_unknown_short_option_kept(self) -> None:
        parsed = parse_invocation(["cmd", "-q"])
        assert dict(parsed.options) == {"q": True}

    def test_global_option_names(self) -> None:
        assert GLOBAL_OPTION_NAMES == {"root", "drush", "yes", "debug", "version"}


# ---------------------------------------------------------------------------
# GlobalOptions
# ---------------------------------------------------------------------------

class TestGlobalOptions:
    def test_defaults(self) -> None:
        options = global_options(parse_invocation(["status"]))
        assert options.root is None
        assert not (options.drush or options.yes or options.debug or options.version)

    def test_all_set(self) -> None:
        options = global_options(
            parse_invocation(["--root=/srv/site", "--drush", "-y", "-d", "status"]),
        )
        assert options.root == Path("/srv/site")
        assert options.drush and options.yes and options.debug


# ---------------------------------------------------------------------------
# Command option normalisation
# ---------------------------------------------------------------------------

_FORMAT = OptionSpec("format", aliases=("f",), takes_value=True)
_STRING = OptionSpec("string", aliases=("s",))


class TestNormalizeOptions:
    def test_alias_becomes_canonical(self) -> None:
        parsed = normalize_options(parse_invocation(["cmd", "-s", "-f=csv"]), [_FORMAT, _STRING])
        assert dict(parsed.options) == {"string": True, "format": "csv"}

    @pytest.mark.parametrize("token", ["--string=no", "--string=0", "-s=maybe"])
    def test_flag_with_value_is_malformed(self, token: str) -> None:
        with pytest.raises(MalformedInvocationError, match="flag"):
            normalize_options(parse_invocation(["cmd", token]), [_STRING])

    def test_flag_with_truthy_value(self) -> None:
        parsed = normalize_options(parse_invocation(["cmd", "--string=yes"]), [_STRING])
        assert parsed.options["string"] is True

    def test_value_option_without_value(self) -> None:
        with pytest.raises(MalformedInvocationError, match="requires a value"):
            normalize_options(parse_invocation(["cmd", "-f"]), [_FORMAT])

    def test_conflicting_alias_values(self) -> None:
        with pytest.raises(MalformedInvocationError, match="conflicts"):
            normalize_options(parse_invocation(["cmd", "-f=json", "--format=csv"]), [_FORMAT])

    def test_undeclared_and_global_keys_kept(self) -> None:
        parsed = normalize_options(parse_invocation(["-y", "cmd", "--other=1", "a"]), [_FORMAT])
        assert dict(parsed.options) == {"yes": True, "other": "1"}
        assert parsed.positional_args == ("a",)
        assert parsed.command_name == "cmd"

    def test_arity_check_can_be_skipped(self) -> None:
        parsed = normalize_options(
            parse_invocation(["cmd", "-s=anything"]), [_STRING], check_arity=False,
        )
        assert dict(parsed.options) == {"string": "anything"}
