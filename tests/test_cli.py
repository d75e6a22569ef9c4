import json

import pytest

from rkcfgkit.cli import (
    VERSION,
    format_json,
    format_list,
    format_script,
    json_escape,
    main,
    parse_index,
)
from rkcfgkit.rkcfg import (
    HEADER_SIZE,
    ITEM_SIZE,
    Config,
    Entry,
    read_rkcfg,
    write_rkcfg,
)


def _entries():
    first = Entry.new("loader", "MiniLoaderAll.bin")
    second = Entry.new("boot", "boot.img")
    second.selected = 1
    return [first, second]


@pytest.fixture
def cfg_file(tmp_path):
    path = tmp_path / "in.cfg"
    write_rkcfg(path, Config(entries=_entries()))
    return path


def test_parse_index_valid():
    assert parse_index(_entries(), "1") == 1
    assert parse_index(_entries(), "0") == 0


def test_parse_index_minus_one_is_last():
    assert parse_index(_entries(), "-1") == 1
    assert parse_index([], "-1") is None


def test_parse_index_out_of_range():
    assert parse_index(_entries(), "2") is None
    assert parse_index(_entries(), "-2") is None


def test_parse_index_leading_digits():
    assert parse_index(_entries(), "1abc") == 1


def test_parse_index_not_a_number():
    with pytest.raises(ValueError):
        parse_index(_entries(), "abc")


def test_json_escape_specials():
    assert json_escape('a"b\\c') == 'a\\"b\\\\c'
    assert json_escape("x\ny\tz") == "x\\ny\\tz"
    assert json_escape("\x01") == "\\u0001"
    assert json_escape("plain") == "plain"


def test_format_json_empty():
    assert format_json([]) == "[\n\n]\n"


def test_format_json_round_trip():
    items = _entries()
    items[0].set_name('we"ird\\name')
    parsed = json.loads(format_json(items))
    assert parsed == [
        {"index": 0, "name": 'we"ird\\name', "path": "MiniLoaderAll.bin", "enabled": 0},
        {"index": 1, "name": "boot", "path": "boot.img", "enabled": 1},
    ]


def test_format_script():
    assert format_script(_entries()) == (
        "index,enabled,name,path\n0,0,loader,MiniLoaderAll.bin\n1,1,boot,boot.img\n"
    )


def test_format_list():
    text = format_list(_entries())
    assert text.splitlines() == [
        "=== Entry list (2) ===",
        " 0 0 loader MiniLoaderAll.bin",
        " 1 1 boot boot.img",
    ]


def test_version(capsys):
    assert main(["--version"]) == 0
    assert capsys.readouterr().out == f"rkcfgtool {VERSION}\n"


def test_help_without_arguments(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out.startswith("Usage:")


def test_help_anywhere(capsys, cfg_file):
    assert main([str(cfg_file), "--list", "-h"]) == 0
    assert "--set-path" in capsys.readouterr().out


def test_list_does_not_write(capsys, cfg_file):
    before = cfg_file.read_bytes()
    assert main([str(cfg_file)]) == 0
    out = capsys.readouterr().out
    assert out == format_list(_entries())
    assert cfg_file.read_bytes() == before


def test_create_and_add(capsys, tmp_path):
    target = tmp_path / "new.cfg"
    assert main([str(target), "--create", "--add", "kernel", "kernel.img"]) == 0
    out = capsys.readouterr().out
    assert f"Written {target} ({HEADER_SIZE + ITEM_SIZE} bytes)" in out
    config = read_rkcfg(target)
    assert [(e.name, e.path, e.selected) for e in config.entries] == [
        ("kernel", "kernel.img", 0)
    ]


def test_edits_written_in_place(cfg_file):
    rc = main(
        [
            str(cfg_file),
            "--set-name", "0", "uboot",
            "--set-path", "-1", "new_boot.img",
            "--enable", "0", "1",
            "--enable", "1", "0",
        ]
    )
    assert rc == 0
    entries = read_rkcfg(cfg_file).entries
    assert [(e.name, e.path, e.selected) for e in entries] == [
        ("uboot", "MiniLoaderAll.bin", 1),
        ("boot", "new_boot.img", 0),
    ]


def test_delete_to_output_file(cfg_file, tmp_path):
    target = tmp_path / "out.cfg"
    before = cfg_file.read_bytes()
    assert main([str(cfg_file), "--del", "0", "-o", str(target)]) == 0
    assert cfg_file.read_bytes() == before
    entries = read_rkcfg(target).entries
    assert [e.name for e in entries] == ["boot"]
    assert target.stat().st_size == HEADER_SIZE + ITEM_SIZE


def test_json_output(capsys, cfg_file):
    assert main([str(cfg_file), "--json"]) == 0
    parsed = json.loads(capsys.readouterr().out)
    assert [row["name"] for row in parsed] == ["loader", "boot"]


def test_script_output(capsys, cfg_file):
    assert main([str(cfg_file), "--script"]) == 0
    assert capsys.readouterr().out == format_script(_entries())


def test_index_out_of_range(capsys, cfg_file):
    before = cfg_file.read_bytes()
    assert main([str(cfg_file), "--del", "5"]) == 1
    assert capsys.readouterr().err == "Index out of range\n"
    assert cfg_file.read_bytes() == before


def test_unknown_option(capsys, cfg_file):
    assert main([str(cfg_file), "--bogus"]) == 1
    assert capsys.readouterr().err == "Unknown or incomplete option: --bogus\n"


def test_incomplete_option(capsys, cfg_file):
    assert main([str(cfg_file), "--add", "only"]) == 1
    assert "Unknown or incomplete option: --add" in capsys.readouterr().err


def test_missing_file(capsys, tmp_path):
    missing = tmp_path / "missing.cfg"
    assert main([str(missing)]) == 1
    assert f"Cannot open {missing}" in capsys.readouterr().err


def test_bad_magic(capsys, tmp_path):
    bad = tmp_path / "bad.cfg"
    bad.write_bytes(b"XYZ\0" + bytes(HEADER_SIZE - 4))
    assert main([str(bad)]) == 1
    assert "Bad magic number" in capsys.readouterr().err


def test_non_numeric_index(capsys, cfg_file):
    assert main([str(cfg_file), "--del", "abc"]) == 1
    assert capsys.readouterr().err != ""