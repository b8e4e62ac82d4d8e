import pytest

from scenedex.extension import (
    KEY_ALLOW_EXTENSIONS,
    KEY_DENY_EXTENSIONS,
    KEY_EXTENSION_ORDERALLOW,
    ExtensionFilter,
    default_allow,
    default_deny,
    get_extension,
    string_list_to_string,
)


def test_default_allow_contents():
    exts = default_allow()
    assert ".mp4" in exts
    assert ".mkv" in exts
    assert all(e.startswith(".") for e in exts)
    assert exts == sorted(exts)
    assert len(set(exts)) == len(exts)


def test_default_allow_returns_copy():
    exts = default_allow()
    exts.clear()
    assert default_allow()


def test_default_deny_is_empty():
    assert default_deny() == []


def test_string_list_to_string():
    assert string_list_to_string([".a", ".b"]) == ".a\n.b"
    assert string_list_to_string([]) == ""
    assert string_list_to_string([" .a ", ""]) == ".a"


@pytest.mark.parametrize(
    "file, expected",
    [
        ("movie.MP4", ".mp4"),
        ("dir.x/movie", ""),
        ("dir.x\\movie", ""),
        ("noext", ""),
        ("/a/b.c.avi", ".avi"),
        ("file.", "."),
    ],
)
def test_get_extension(file, expected):
    assert get_extension(file) == expected


def test_allow_order_defaults():
    f = ExtensionFilter()
    assert f.is_movie_extension("/v/clip.mp4")
    assert f.is_movie_extension("/v/CLIP.MKV")
    assert not f.is_movie_extension("/v/notes.txt")
    assert not f.is_movie_extension("/v/noext")


def test_allow_star_allows_everything():
    f = ExtensionFilter(True, ["*"], [])
    assert f.is_movie_extension("a.txt")
    assert f.is_movie_extension("noext")


def test_allow_noext():
    f = ExtensionFilter(True, ["noext", ".mp4"], [])
    assert f.is_movie_extension("movie")
    assert f.is_movie_extension("m.mp4")
    assert not f.is_movie_extension("m.avi")


def test_deny_order_star_denies_everything():
    f = ExtensionFilter(False, [".mp4"], ["*"])
    assert not f.is_movie_extension("m.mp4")
    assert not f.is_movie_extension("m.txt")


def test_deny_order_noext():
    assert ExtensionFilter(False, [], []).is_movie_extension("movie")
    assert not ExtensionFilter(False, [], ["noext"]).is_movie_extension("movie")


def test_deny_order_excludes_allow_set_extensions():
    f = ExtensionFilter(False, [".txt"], [".avi"])
    assert not f.is_movie_extension("notes.txt")
    assert f.is_movie_extension("clip.avi")


def test_setters_and_strings():
    f = ExtensionFilter()
    f.set_allow([".a", ".b"])
    f.set_deny(["*"])
    assert f.allow == [".a", ".b"]
    assert f.deny == ["*"]
    assert f.allow_as_string() == ".a\n.b"
    assert f.deny_as_string() == "*"
    assert f.is_movie_extension("x.a")
    assert not f.is_movie_extension("x.mp4")


def test_allow_property_is_copy():
    f = ExtensionFilter(True, [".a"], [])
    f.allow.append(".b")
    assert f.allow == [".a"]


def test_load_defaults_from_empty_settings():
    f = ExtensionFilter(False, [".x"], [".y"])
    f.load({})
    assert f.order_allow is True
    assert f.allow == default_allow()
    assert f.deny == default_deny()


def test_load_values():
    f = ExtensionFilter()
    f.load(
        {
            KEY_EXTENSION_ORDERALLOW: False,
            KEY_ALLOW_EXTENSIONS: [".q"],
            KEY_DENY_EXTENSIONS: "noext",
        }
    )
    assert f.order_allow is False
    assert f.allow == [".q"]
    assert f.deny == ["noext"]
    assert not f.is_movie_extension("movie")


def test_save_load_round_trip():
    source = ExtensionFilter(False, [".a", "*"], ["noext"])
    settings = {}
    source.save(settings)
    restored = ExtensionFilter()
    restored.load(settings)
    assert restored.order_allow == source.order_allow
    assert restored.allow == source.allow
    assert restored.deny == source.deny