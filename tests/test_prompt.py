import io

import pytest

from ykcrypt.prompt import prompt_hidden, prompt_passphrase


class _TtyInput(io.StringIO):
    def isatty(self):
        return True


def test_prompt_hidden_reads_piped_word(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("  secret  \n"))
    assert prompt_hidden("PIN: ") == "secret"
    assert capsys.readouterr().err == "PIN: "


def test_prompt_hidden_reads_only_first_line(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("secret\nother\n"))
    assert prompt_hidden("PIN: ") == "secret"


def test_prompt_hidden_empty_line(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("\n"))
    with pytest.raises(ValueError):
        prompt_hidden("PIN: ")


def test_prompt_hidden_two_words(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("secret token\n"))
    with pytest.raises(ValueError):
        prompt_hidden("PIN: ")


def test_prompt_hidden_eof(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO(""))
    with pytest.raises(EOFError):
        prompt_hidden("PIN: ")


def test_prompt_hidden_terminal_uses_getpass(monkeypatch):
    seen = {}

    def fake_getpass(prompt, stream=None):
        seen["prompt"] = prompt
        return " secret phrase "

    monkeypatch.setattr("sys.stdin", _TtyInput(""))
    monkeypatch.setattr("getpass.getpass", fake_getpass)
    assert prompt_hidden("Passphrase: ") == "secret phrase"
    assert seen["prompt"] == "Passphrase: "


def test_prompt_passphrase_returns_value(monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("secret\n"))
    assert prompt_passphrase("Passphrase: ") == "secret"


def test_prompt_passphrase_rejects_empty(monkeypatch):
    monkeypatch.setattr("sys.stdin", _TtyInput(""))
    monkeypatch.setattr("getpass.getpass", lambda prompt, stream=None: "   ")
    with pytest.raises(ValueError, match="empty passphrase not allowed"):
        prompt_passphrase("Passphrase: ")