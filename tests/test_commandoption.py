import os

import pytest

from scenedex.commandoption import CommandOption, parse_command_line


def test_empty_paths_stay_empty():
    option = CommandOption("", "", False)
    assert option.db_dir == ""
    assert option.doc == ""
    assert option.no_recent is False


def test_relative_paths_become_absolute():
    option = CommandOption("dbdir", "doc.sedoc", True)
    assert option.db_dir == os.path.abspath("dbdir")
    assert option.doc == os.path.abspath("doc.sedoc")
    assert option.no_recent is True


def test_absolute_path_kept(tmp_path):
    option = CommandOption(str(tmp_path), "", False)
    assert option.db_dir == str(tmp_path)


def test_parse_no_arguments():
    option = parse_command_line([])
    assert option == CommandOption("", "", False)


def test_parse_short_database_directory():
    option = parse_command_line(["-d", "mydb"])
    assert option.db_dir == os.path.abspath("mydb")
    assert option.doc == ""


def test_parse_long_database_directory():
    option = parse_command_line(["--database-directory", "mydb"])
    assert option.db_dir == os.path.abspath("mydb")


def test_parse_no_recent_flag():
    assert parse_command_line(["-n"]).no_recent is True
    assert parse_command_line([]).no_recent is False


def test_parse_document_takes_first_positional():
    option = parse_command_line(["first.doc", "second.doc"])
    assert option.doc == os.path.abspath("first.doc")


def test_parse_all_together():
    option = parse_command_line(["-n", "-d", "db", "a.doc"])
    assert option == CommandOption("db", "a.doc", True)


def test_slash_question_shows_help(capsys):
    with pytest.raises(SystemExit) as info:
        parse_command_line(["/?"])
    assert info.value.code == 0
    assert "database-directory" in capsys.readouterr().out


def test_help_option_exits(capsys):
    with pytest.raises(SystemExit) as info:
        parse_command_line(["--help"])
    assert info.value.code == 0
    assert "document" in capsys.readouterr().out


def test_version_option_exits():
    with pytest.raises(SystemExit) as info:
        parse_command_line(["--version"])
    assert info.value.code == 0


def test_unknown_option_is_ignored():
    option = parse_command_line(["--bogus", "-n"])
    assert option.no_recent is True