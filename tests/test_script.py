import pytest

from pixconv.errors import ConfigError, ScriptError
from pixconv.imgtypes import Blur, FlipHorizontal, FlipVertical, Resize
from pixconv.script import parse_script


def test_parse_all_statements():
    script = "resize 100 200; blur 1; flip_horizontal; resize 200 200; flip_vertical"
    assert parse_script(script) == [
        Resize(100, 200),
        Blur(1),
        FlipHorizontal(),
        Resize(200, 200),
        FlipVertical(),
    ]


def test_newlines_and_comments():
    script = """
        # shrink first
        resize 10 20
        blur 3;;  flip_vertical   # then mirror
    """
    assert parse_script(script) == [Resize(10, 20), Blur(3), FlipVertical()]


def test_empty_script():
    assert parse_script("") == []
    assert parse_script(" ; ;\n# nothing\n") == []


def test_names_are_case_insensitive():
    assert parse_script("FLIP_HORIZONTAL; Blur 0") == [FlipHorizontal(), Blur(0)]


@pytest.mark.parametrize(
    "script",
    [
        "rotate90",
        "blur",
        "blur 1 2",
        "blur -1",
        "blur 1.5",
        "resize 10",
        "resize 0 10",
        "resize 10 x",
        "flip_horizontal 1",
    ],
)
def test_invalid_statements(script):
    with pytest.raises(ScriptError):
        parse_script(script)


def test_error_names_statement_number():
    with pytest.raises(ScriptError, match="Statement 3"):
        parse_script("blur 1; flip_vertical; spin 90")


def test_script_error_is_config_error():
    assert issubclass(ScriptError, ConfigError)
