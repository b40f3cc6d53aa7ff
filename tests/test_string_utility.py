import pytest

from snitchkit.string_utility import find_first_not_escaped, is_match, replace_all


@pytest.mark.parametrize(
    "string, pattern, replacement",
    [
        ("hello world", "o", "0"),
        ("aaaa", "aa", "b"),
        ("abcabc", "abc", "x"),
        ("no match here", "zz", "yyy"),
        ("a.b.c", ".", "\\."),
        ("", "a", "bb"),
    ],
)
def test_replace_all_without_capacity_matches_str_replace(string, pattern, replacement):
    result, ok = replace_all(string, pattern, replacement)
    assert result == string.replace(pattern, replacement)
    assert ok is True


def test_replace_all_same_size_does_not_change_length():
    result, ok = replace_all("abcabc", "b", "x", capacity=6)
    assert len(result) == 6
    assert result == "abcabc".replace("b", "x")
    assert ok is True


def test_replace_all_overflow_truncates_to_capacity():
    result, ok = replace_all("aaa", "a", "bb", capacity=4)
    assert ok is False
    assert len(result) == 4
    assert "bbbbbb".startswith(result)


def test_replace_all_overflow_keeps_prefix_of_full_result():
    string = "x.y.z.w"
    full = string.replace(".", "\\.")
    result, ok = replace_all(string, ".", "\\.", capacity=len(string) + 1)
    assert ok is False
    assert len(result) == len(string) + 1
    assert full.startswith(result)


def test_replace_all_rejects_empty_pattern():
    with pytest.raises(ValueError):
        replace_all("abc", "", "x")


def test_replace_all_rejects_string_longer_than_capacity():
    with pytest.raises(ValueError):
        replace_all("abcdef", "a", "bb", capacity=3)


def test_find_first_not_escaped_plain():
    string = "abc,def"
    assert find_first_not_escaped(string, ",") == string.index(",")


def test_find_first_not_escaped_skips_escaped():
    string = r"a\,b,c"
    assert find_first_not_escaped(string, ",") == string.rindex(",")


def test_find_first_not_escaped_all_escaped():
    assert find_first_not_escaped(r"a\,b\,c", ",") == -1


def test_find_first_not_escaped_trailing_backslash():
    assert find_first_not_escaped("abc\\", ",") == -1


def test_find_first_not_escaped_escaped_backslash():
    string = "a\\\\,b"
    assert find_first_not_escaped(string, ",") == string.index(",")


def test_find_first_not_escaped_requires_single_char():
    with pytest.raises(ValueError):
        find_first_not_escaped("abc", "ab")


@pytest.mark.parametrize(
    "string, pattern",
    [
        ("anything", ""),
        ("", ""),
        ("how are you", "*are you"),
        ("how many lights", "*lights*"),
        ("how many lights", "how*"),
        ("abc", "abc"),
        ("abc", "a*c"),
        ("abc", "*"),
        ("", "*"),
        ("", "***"),
        ("a", "a**"),
        ("a*c", "a\\*c"),
        ("[tag]", "*tag]"),
        ("ab", "*b*"),
    ],
)
def test_is_match_positive(string, pattern):
    assert is_match(string, pattern) is True


@pytest.mark.parametrize(
    "string, pattern",
    [
        ("abc", "abd"),
        ("abc", "ab"),
        ("ab", "abc"),
        ("", "a"),
        ("abc", "a\\"),
        ("abc", "a\\*c"),
        ("ab", "ab*c"),
        ("how many lights", "*are you"),
    ],
)
def test_is_match_negative(string, pattern):
    assert is_match(string, pattern) is False