from statusblocks.formatting import Fragment, Metadata


def test_default_metadata_is_default():
    assert Metadata().is_default() is True


def test_metadata_with_instance_not_default():
    assert Metadata(instance="a").is_default() is False


def test_metadata_with_style_not_default():
    assert Metadata(italic=True).is_default() is False
    assert Metadata(underline=True).is_default() is False


def test_plain_fragment_text_unchanged():
    assert Fragment("hello").formatted_text() == "hello"


def test_underline():
    assert Fragment("x", Metadata(underline=True)).formatted_text() == "<u>x</u>"


def test_italic():
    assert Fragment("x", Metadata(italic=True)).formatted_text() == "<i>x</i>"


def test_italic_and_underline():
    fragment = Fragment("x", Metadata(underline=True, italic=True))
    assert fragment.formatted_text() == "<i><u>x</u></i>"


def test_fragment_default_metadata():
    fragment = Fragment("abc")
    assert fragment.metadata.is_default()
    assert fragment.text == "abc"