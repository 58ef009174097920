from cli.chatbot import validate_only
from core.config import DEFAULT_CONFIG_PATH
from core.message_sink import BufferedSink, ConsoleSink


def test_console_sink_prints_with_prefix(capsys):
    ConsoleSink(prefix="bot> ").send_message("hello")
    assert capsys.readouterr().out == "bot> hello\n"


def test_buffered_sink_drains_in_order():
    sink = BufferedSink()
    sink.send_message("one")
    sink.send_message("two")
    assert sink.drain() == ["one", "two"]
    assert sink.drain() == []


def test_cli_validate_only(capsys, tmp_path):
    assert validate_only(DEFAULT_CONFIG_PATH)
    assert "Root node: greeting" in capsys.readouterr().out

    assert not validate_only(str(tmp_path / "missing.json"))


def test_cli_validate_only_rejects_unreadable_paths(tmp_path):
    assert not validate_only(str(tmp_path))

    undecodable = tmp_path / "graph.json"
    undecodable.write_bytes(b"\xff\xfe")
    assert not validate_only(str(undecodable))
