import pytest

from blogcore.utils import calculate_reading_time, slug_from_path, slugify_segment


@pytest.mark.parametrize(
    "path, expected",
    [
        ("hello-world.md", "hello-world"),
        ("2024/Hello World.mdx", "2024/hello-world"),
        ("ddd/index.md", "ddd"),
        ("DDD.md", "ddd"),
        ("index.md", "index"),
        ("nested\\win\\post.md", "nested/win/post"),
        ("notes/v1.2-release.md", "notes/v1.2-release"),
        ("!!!.md", ""),
    ],
)
def test_slug_from_path(path, expected):
    assert slug_from_path(path) == expected


def test_slugify_segment_drops_punctuation():
    assert slugify_segment("  What's New?  ") == "whats-new"


def test_calculate_reading_time_has_minimum_of_one_minute():
    assert calculate_reading_time("") == "1 min"
    assert calculate_reading_time("word " * 200) == "1 min"
    assert calculate_reading_time("word " * 201) == "2 min"
