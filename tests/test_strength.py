import math

import pytest

from generator import GenerationOptions, generate
from strength import (
    alphabet_size,
    entropy_bits,
    estimate_crack_time,
    format_crack_time,
    score,
    seconds_to_break,
)

ALL = GenerationOptions(include_uppercase=True, include_lowercase=True,
                        include_numbers=True, include_symbols=True)
TWO = GenerationOptions(include_uppercase=True, include_lowercase=True,
                        include_numbers=False, include_symbols=False)


def test_score_twelve_chars_all_classes():
    result = score("Ab3!xxxxxxxx", ALL)
    assert result.score == 2
    assert result.label == "good"
    assert result.description == "Buena"
    assert result.feedback == []


@pytest.mark.parametrize("length,options,expected", [
    (8, TWO, 0),
    (8, ALL, 1),
    (12, TWO, 1),
    (16, TWO, 2),
    (16, ALL, 3),
    (20, TWO, 2),
    (20, ALL, 4),
])
def test_score_table(length, options, expected):
    assert score("a" * length, options).score == expected


def test_scores_three_and_four_share_label():
    three = score("a" * 16, ALL)
    four = score("a" * 20, ALL)
    assert (three.score, four.score) == (3, 4)
    assert three.label == four.label == "strong"
    assert three.description == four.description == "Fuerte"


def test_feedback():
    result = score("short", TWO)
    assert result.label == "weak"
    assert result.description == "Débil"
    assert result.feedback == ["Use at least 12 characters", "Include more character types"]


def test_alphabet_size():
    assert alphabet_size("") == 0
    assert alphabet_size("abc") == 26
    assert alphabet_size("aB") == 52
    assert alphabet_size("aB3") == 62
    assert alphabet_size("aB3!") == 94
    assert alphabet_size("ñ") == 32


def test_entropy():
    assert entropy_bits("") == 0.0
    assert entropy_bits("abcd") == pytest.approx(4 * math.log2(26))


def test_seconds_to_break():
    assert seconds_to_break(41) == pytest.approx(2 ** 40 / 1e12)
    assert seconds_to_break(5000) == math.inf


@pytest.mark.parametrize("seconds,expected", [
    (0, "under a minute"),
    (45, "under a minute"),
    (60, "1 minute"),
    (90, "2 minutes"),
    (200, "3 minutes"),
    (3600, "1 hour"),
    (5 * 3600, "5 hours"),
    (86400 * 2.5, "3 days"),
    (31536000 * 12, "12 years"),
    (31536000 * 1000, "over 1000 years"),
    (math.inf, "over 1000 years"),
])
def test_format_crack_time(seconds, expected):
    assert format_crack_time(seconds) == expected


def test_crack_time_of_empty_password():
    assert estimate_crack_time("") == "under a minute"


def test_crack_time_grows_with_length():
    for chars in ("a", "aZ", "aZ9", "aZ9!"):
        times = [seconds_to_break(entropy_bits(chars * n)) for n in range(1, 40)]
        assert times == sorted(times)


def test_very_long_password():
    assert estimate_crack_time("aZ9!" * 500) == "over 1000 years"


def test_generated_passwords_always_score(rng):
    for length in (1, 4, 12, 16, 20, 64):
        for bits in range(1, 16):
            flags = [bool(bits & (1 << i)) for i in range(4)]
            options = GenerationOptions(length, *flags, exclude_ambiguous=length % 2 == 0)
            result = score(generate(options, rng), options)
            assert 0 <= result.score <= 4
            assert result.crack_time
