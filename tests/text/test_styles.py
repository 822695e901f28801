import logging
from types import SimpleNamespace

from pytest import raises

from fontwrap import StyleKey, Posture
from fontwrap.text import (
    style_from_full_name,
    style_from_weight,
    style_for_face,
    resolve_styles,
    LoadingError,
)

from fontstubs import StubFontFile


def test_style_from_full_name():
    assert style_from_full_name("Foo Sans ExtraLight") == StyleKey.EXTRA_LIGHT
    assert style_from_full_name("Foo Sans Light") == StyleKey.LIGHT
    assert style_from_full_name("Foo Sans Medium") == StyleKey.MEDIUM
    assert style_from_full_name("Foo Sans Regular") == StyleKey.REGULAR
    assert style_from_full_name("Foo Sans SemiBold") == StyleKey.SEMI_BOLD
    assert style_from_full_name("Foo Sans Bold") == StyleKey.BOLD

    # Case insensitive
    assert style_from_full_name("FOO SANS BOLD") == StyleKey.BOLD

    # The first keyword in priority order wins
    assert style_from_full_name("Foo Sans Light Italic") == StyleKey.LIGHT
    assert style_from_full_name("Foo Sans Bold Italic") == StyleKey.BOLD
    assert style_from_full_name("Foo Sans ExtraBold") == StyleKey.BOLD

    # No keyword
    assert style_from_full_name("Foo Sans") is None
    assert style_from_full_name("Foo Sans Thin") is None
    assert style_from_full_name("Foo Sans Black") is None
    assert style_from_full_name("Foo Sans Italic") is None


def test_style_from_weight():
    assert style_from_weight(100) == StyleKey.THIN
    assert style_from_weight(150) == StyleKey.THIN
    assert style_from_weight(200) == StyleKey.EXTRA_LIGHT
    assert style_from_weight(300) == StyleKey.LIGHT
    assert style_from_weight(399) == StyleKey.LIGHT
    assert style_from_weight(400) == StyleKey.REGULAR
    assert style_from_weight(500) == StyleKey.MEDIUM
    assert style_from_weight(600) == StyleKey.SEMI_BOLD
    assert style_from_weight(700) == StyleKey.BOLD
    assert style_from_weight(800) == StyleKey.EXTRA_BOLD
    assert style_from_weight(900) == StyleKey.BLACK
    assert style_from_weight(950) == StyleKey.BLACK
    # Out of range weights are black
    assert style_from_weight(1000) == StyleKey.BLACK
    assert style_from_weight(50) == StyleKey.BLACK


def test_style_for_face():
    def face(full_name, posture=Posture.NORMAL, weight=400):
        return SimpleNamespace(full_name=full_name, posture=posture, weight=weight)

    assert style_for_face(face("X Bold", Posture.ITALIC, 700)) == StyleKey.BOLD
    assert style_for_face(face("X", Posture.ITALIC, 700)) == StyleKey.ITALIC
    assert style_for_face(face("X", Posture.NORMAL, 100)) == StyleKey.THIN
    assert style_for_face(face("X", Posture.NORMAL, 800)) == StyleKey.EXTRA_BOLD
    assert style_for_face(face("X", Posture.NORMAL, 400)) == StyleKey.REGULAR
    assert style_for_face(face("X", Posture.OBLIQUE, 400)) is None
    # The name is used even for an oblique face
    assert style_for_face(face("X Medium", Posture.OBLIQUE, 500)) == StyleKey.MEDIUM


def test_resolve_styles():
    files = [
        StubFontFile("Foo Sans", "Thin"),
        StubFontFile("Foo Sans", "ExtraLight"),
        StubFontFile("Foo Sans", "Regular"),
        StubFontFile("Foo Sans", "Medium"),
        StubFontFile("Foo Sans", "Bold"),
        StubFontFile("Foo Sans", "Black"),
        StubFontFile("Foo Sans", "Italic"),
    ]
    faces = resolve_styles(files)
    assert set(faces) == {
        StyleKey.THIN,
        StyleKey.EXTRA_LIGHT,
        StyleKey.REGULAR,
        StyleKey.MEDIUM,
        StyleKey.BOLD,
        StyleKey.BLACK,
        StyleKey.ITALIC,
    }
    assert faces[StyleKey.BOLD].full_name == "Foo Sans Bold"
    assert faces[StyleKey.ITALIC].full_name == "Foo Sans Italic"
    assert faces[StyleKey.REGULAR].font_file is files[2]


def test_resolve_styles_last_wins():
    files = [
        StubFontFile("Foo Sans", "Bold"),
        StubFontFile("Foo Sans", "Bold Italic"),
    ]
    faces = resolve_styles(files)
    assert list(faces) == [StyleKey.BOLD]
    assert faces[StyleKey.BOLD].full_name == "Foo Sans Bold Italic"

    faces = resolve_styles(files[::-1])
    assert faces[StyleKey.BOLD].full_name == "Foo Sans Bold"


def test_resolve_styles_unsupported(caplog):
    files = [
        StubFontFile("Foo Sans", "Regular"),
        StubFontFile("Foo Sans", "Oblique"),
    ]
    faces = resolve_styles(files)
    assert list(faces) == [StyleKey.REGULAR]
    assert "Unsupported font style of 'Foo Sans Oblique'" in caplog.text

    assert resolve_styles([]) == {}


def test_resolve_styles_broken():
    files = [
        StubFontFile("Foo Sans", "Regular"),
        StubFontFile("Foo Sans", "Broken"),
    ]
    with raises(LoadingError):
        resolve_styles(files)


def test_resolve_styles_debug_output(caplog):
    resolve_styles([StubFontFile("Foo Sans", "Regular")], debug=True)
    messages = [r.getMessage() for r in caplog.records]
    assert "font name: 'Foo Sans Regular'" in messages


def test_resolve_styles_debug(caplog):
    files = [StubFontFile("Foo Sans", "Regular")]

    with caplog.at_level(logging.INFO, logger="fontwrap"):
        resolve_styles(files)
    assert "font name" not in caplog.text

    with caplog.at_level(logging.INFO, logger="fontwrap"):
        resolve_styles(files, debug=True)
    assert "font name: 'Foo Sans Regular'" in caplog.text
    assert "posture=normal, weight=400" in caplog.text


if __name__ == "__main__":
    test_style_from_full_name()
    test_style_from_weight()
    test_style_for_face()
    test_resolve_styles()
    test_resolve_styles_last_wins()
    test_resolve_styles_broken()
