from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from twitch_irc.constants import ZERO_TIME
from twitch_irc.irc.decoders import (
    parse_badges,
    parse_emotes,
    parse_int,
    parse_msg_params,
    parse_time,
    parse_user,
    split_action,
)
from twitch_irc.irc.framing import frame_line
from twitch_irc.irc.models import Emote

# Longer than the interpreter's default int() digit limit (4300)
HUGE = "9" * 5000


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("10", 10), ("-1", -1), ("+3", 3), ("abc", 0), ("", 0), (None, 0), (" 1", 0), ("1.5", 0)],
)
def test_parse_int(raw, expected):  # type: ignore[no-untyped-def]
    assert parse_int(raw) == expected


def test_parse_int_custom_default():  # type: ignore[no-untyped-def]
    assert parse_int("x", default=-1) == -1


def test_parse_int_beyond_digit_limit_gives_default():  # type: ignore[no-untyped-def]
    assert parse_int(HUGE) == 0
    assert parse_int(HUGE, default=-1) == -1


class TestParseTime:
    def test_milliseconds_since_epoch(self):  # type: ignore[no-untyped-def]
        parsed = parse_time("1490382457309")
        assert parsed.tzinfo is UTC
        assert parsed.year == 2017
        assert parsed.microsecond == 309000
        assert parsed.timestamp() == 1490382457.309

    def test_zero_is_epoch(self):  # type: ignore[no-untyped-def]
        assert parse_time("0") == datetime(1970, 1, 1, tzinfo=UTC)

    @pytest.mark.parametrize("raw", [None, "", "abc", "12.5", "99999999999999999999", HUGE])
    def test_invalid_values_give_zero_time(self, raw):  # type: ignore[no-untyped-def]
        assert parse_time(raw) == ZERO_TIME


class TestParseBadges:
    def test_pairs(self):  # type: ignore[no-untyped-def]
        assert parse_badges("subscriber/6,premium/1") == {"subscriber": 6, "premium": 1}

    def test_pair_without_level_is_skipped(self):  # type: ignore[no-untyped-def]
        assert parse_badges("broken,subscriber/3") == {"subscriber": 3}

    def test_non_numeric_level_is_zero(self):  # type: ignore[no-untyped-def]
        assert parse_badges("bits/abc") == {"bits": 0}

    def test_oversized_level_is_zero(self):  # type: ignore[no-untyped-def]
        assert parse_badges(f"subscriber/{HUGE},premium/1") == {"subscriber": 0, "premium": 1}

    def test_empty(self):  # type: ignore[no-untyped-def]
        assert parse_badges("") == {}

    def test_skipped_pair_is_logged_at_debug(self, caplog):  # type: ignore[no-untyped-def]
        caplog.set_level(logging.DEBUG, logger="twitch_irc")
        parse_badges("broken")
        assert "Skipped malformed badge 'broken'" in caplog.text


class TestParseUser:
    def test_from_tags_and_source(self):  # type: ignore[no-untyped-def]
        framed = frame_line(
            "@badges=moderator/1;color=#0000FF;display-name=Gempir;user-id=77829817 "
            ":gempir!gempir@gempir.tmi.twitch.tv PRIVMSG #c :hi"
        )
        user = parse_user(framed)
        assert user.id == "77829817"
        assert user.name == "gempir"
        assert user.display_name == "Gempir"
        assert user.color == "#0000FF"
        assert user.badges == {"moderator": 1}

    def test_name_derived_from_display_name(self):  # type: ignore[no-untyped-def]
        framed = frame_line(r"@display-name=Some\sLong\sName :tmi.twitch.tv USERSTATE #c")
        assert parse_user(framed).name == "somelong name"

    def test_missing_tags_give_empty_user(self):  # type: ignore[no-untyped-def]
        user = parse_user(frame_line(":tmi.twitch.tv USERSTATE #c"))
        assert user.name == ""
        assert user.badges == {}


class TestParseEmotes:
    def test_groups_and_counts(self):  # type: ignore[no-untyped-def]
        emotes = parse_emotes("25:0-4,12-16/1902:6-10", "Kappa Keepo Kappa")
        assert emotes == (
            Emote(name="Kappa", id="25", count=2),
            Emote(name="Keepo", id="1902", count=1),
        )

    def test_offsets_count_code_points(self):  # type: ignore[no-untyped-def]
        assert parse_emotes("25:2-6", "😀 Kappa") == (Emote("Kappa", "25", 1),)

    def test_empty_tag(self):  # type: ignore[no-untyped-def]
        assert parse_emotes("", "Kappa") == ()

    @pytest.mark.parametrize("raw", ["25", "25:", ":0-4", "25:abc", "25:4"])
    def test_malformed_groups_are_skipped(self, raw):  # type: ignore[no-untyped-def]
        assert parse_emotes(raw, "Kappa") == ()

    def test_valid_groups_survive_malformed_neighbours(self):  # type: ignore[no-untyped-def]
        emotes = parse_emotes("25:x-y/1902:6-10", "Kappa Keepo")
        assert emotes == (Emote("Keepo", "1902", 1),)

    def test_oversized_range_is_skipped(self, caplog):  # type: ignore[no-untyped-def]
        caplog.set_level(logging.DEBUG, logger="twitch_irc")
        emotes = parse_emotes(f"25:{HUGE}-{HUGE}/1902:0-4", "Keepo")
        assert emotes == (Emote("Keepo", "1902", 1),)
        assert "Skipped malformed emote group" in caplog.text

    def test_range_past_end_of_text(self):  # type: ignore[no-untyped-def]
        assert parse_emotes("25:3-99", "Kappa") == (Emote("pa", "25", 1),)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("\x01ACTION waves\x01", ("waves", True)),
        ("\x01ACTION\x01", ("", True)),
        ("hello", ("hello", False)),
        ("\x01ACTION waves", ("\x01ACTION waves", False)),
        ("", ("", False)),
    ],
)
def test_split_action(text, expected):  # type: ignore[no-untyped-def]
    assert split_action(text) == expected


def test_parse_msg_params_coercion():  # type: ignore[no-untyped-def]
    params = parse_msg_params(
        {
            "msg-param-cumulative-months": "6",
            "msg-param-months": "0",
            "msg-param-streak-months": "2",
            "msg-param-viewerCount": "abc",
            "msg-param-should-share-streak": "1",
            "msg-param-sub-plan-name": "Channel Subscription (xqcow)",
            "login": "ronni",
        }
    )
    assert params == {
        "msg-param-cumulative-months": 6,
        "msg-param-months": 0,
        "msg-param-streak-months": 2,
        "msg-param-viewerCount": 0,
        "msg-param-should-share-streak": True,
        "msg-param-sub-plan-name": "Channel Subscription (xqcow)",
    }


def test_should_share_streak_only_true_for_literal_one():  # type: ignore[no-untyped-def]
    assert parse_msg_params({"msg-param-should-share-streak": "true"}) == {
        "msg-param-should-share-streak": False
    }
