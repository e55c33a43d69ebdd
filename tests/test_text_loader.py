import pytest

from loaders.text_loader import TextLoadError, load_chat_log, load_multiple_logs


def test_load_strips_bom(tmp_path):
    path = tmp_path / "chat.txt"
    path.write_bytes("\ufeff[02/01, 1:15 pm] X: F-15\n".encode("utf-8"))
    assert load_chat_log(str(path)) == "[02/01, 1:15 pm] X: F-15\n"


def test_missing_file(tmp_path):
    with pytest.raises(TextLoadError, match="not found"):
        load_chat_log(str(tmp_path / "missing.txt"))


def test_wrong_extension(tmp_path):
    path = tmp_path / "chat.csv"
    path.write_text("x", encoding="utf-8")
    with pytest.raises(TextLoadError, match="not a text export"):
        load_chat_log(str(path))


def test_empty_file(tmp_path):
    path = tmp_path / "chat.txt"
    path.write_text("  \n", encoding="utf-8")
    with pytest.raises(TextLoadError, match="empty"):
        load_chat_log(str(path))


def test_undecodable_file(tmp_path):
    path = tmp_path / "chat.txt"
    path.write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(TextLoadError, match="UTF-8"):
        load_chat_log(str(path))


def test_load_multiple_skips_failures(tmp_path):
    first = tmp_path / "a.txt"
    first.write_text("[27/10/2025, 9:39 pm] X: F-20\n", encoding="utf-8")
    second = tmp_path / "b.txt"
    second.write_text("[28/10/2025, 9:39 pm] X: F-15", encoding="utf-8")

    text = load_multiple_logs([str(first), str(tmp_path / "missing.txt"), str(second)])
    assert text.splitlines() == [
        "[27/10/2025, 9:39 pm] X: F-20",
        "[28/10/2025, 9:39 pm] X: F-15",
    ]


def test_load_multiple_all_failing(tmp_path):
    with pytest.raises(TextLoadError, match="Failed to load any"):
        load_multiple_logs([str(tmp_path / "missing.txt")])
    with pytest.raises(TextLoadError, match="No chat logs"):
        load_multiple_logs([])
