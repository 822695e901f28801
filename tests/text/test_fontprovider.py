from pytest import raises

from fontwrap.text import FontProvider, FontFile, SelectionError, _fontfinder

from fontstubs import StubFontFile, make_provider


def test_provider_families():
    provider = FontProvider(
        [
            StubFontFile("Foo Sans", "Regular"),
            StubFontFile("Foo Sans", "Bold"),
            StubFontFile("Bar Serif", "Regular"),
        ]
    )
    assert provider.list_families() == ["Bar Serif", "Foo Sans"]
    fonts = provider.get_fonts()
    assert [ff.name for ff in fonts] == [
        "BarSerif-Regular",
        "FooSans-Regular",
        "FooSans-Bold",
    ]


def test_provider_resolve_family():
    provider = make_provider("Regular", "Bold", "Italic")

    files = provider.resolve_family("Foo Sans")
    assert [ff.variant for ff in files] == ["Regular", "Bold", "Italic"]
    assert all(isinstance(ff, FontFile) for ff in files)

    # Case insensitive fallback
    files = provider.resolve_family("foo sans")
    assert len(files) == 3

    with raises(SelectionError) as err:
        provider.resolve_family("Nope")
    assert str(err.value) == "Font family not found: 'Nope'"

    with raises(TypeError):
        provider.resolve_family(None)


def test_provider_exact_match_first():
    provider = FontProvider(
        [
            StubFontFile("foo", "Regular", "foo lower"),
            StubFontFile("FOO", "Regular", "FOO upper"),
        ]
    )
    assert provider.resolve_family("FOO")[0].full_name == "FOO upper"
    assert provider.resolve_family("foo")[0].full_name == "foo lower"


def test_provider_add_font_file():
    provider = FontProvider([])
    assert provider.list_families() == []

    ff = StubFontFile("Foo Sans", "Regular")
    assert provider.add_font_file(ff) is ff

    # Duplicate variants replace the previous one
    ff2 = StubFontFile("Foo Sans", "Regular")
    provider.add_font_file(ff2)
    assert provider.resolve_family("Foo Sans") == [ff2]

    with raises(TypeError):
        provider.add_font_file(42)


def test_provider_loads_lazily(tmp_path, monkeypatch):
    (tmp_path / "Foo-Regular.ttf").touch()
    (tmp_path / "Foo-Bold.ttf").touch()
    monkeypatch.setenv("FONTWRAP_FONT_DIRS", str(tmp_path))

    class StubFace:
        family_name = b""
        style_name = b""

    monkeypatch.setattr(_fontfinder.FontFile, "_get_face", lambda self: StubFace())

    provider = FontProvider()
    assert provider.list_families() == ["Foo"]
    files = provider.resolve_family("Foo")
    assert {ff.variant for ff in files} == {"Regular", "Bold"}


if __name__ == "__main__":
    test_provider_families()
    test_provider_resolve_family()
    test_provider_exact_match_first()
    test_provider_add_font_file()
