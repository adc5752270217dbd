from pathlib import Path

from streamlit.testing.v1 import AppTest

APP = str(Path(__file__).resolve().parent.parent / "streamlit_app.py")


def test_default_expression_converts():
    at = AppTest.from_file(APP).run()
    assert not at.exception
    at.button(key="convert").click().run()
    assert not at.exception
    assert at.success[0].value == "DFA construit avec succès."
    assert not at.error


def test_malformed_expression_shows_error():
    at = AppTest.from_file(APP).run()
    at.text_input(key="regex").input("a|").run()
    at.button(key="convert").click().run()
    assert not at.exception
    assert "Invalid regular expression" in at.error[0].value


def test_example_button_fills_the_input():
    at = AppTest.from_file(APP).run()
    at.button(key="ex_(a|b)*abb").click().run()
    assert at.text_input(key="regex").value == "(a|b)*abb"
