# rkcfgkit

Read, inspect, edit and write Rockchip `.cfg` files. These binary
configuration files list partition images. Each entry has a name, an image
path, a load address and an enabled flag.

## Installation

```
pip install .
```

To install what the tests need as well:

```
pip install .[test]
```

## Command line

```
rkcfgtool <cfg> [--create] [actions…] [-o <output.cfg>]
rkcfgtool --help | --version
```

The first argument is always the CFG file. The actions run in the order you
give them:

| Option                       | Effect                                     |
|------------------------------|--------------------------------------------|
| `--list`                     | List entries (default)                     |
| `--set-path <idx> <newPath>` | Change the path of entry `<idx>`           |
| `--set-name <idx> <newName>` | Change the name of entry `<idx>`           |
| `--add <name> <path>`        | Append a new entry                         |
| `--del <idx>`                | Delete entry `<idx>`                       |
| `--enable <idx> <1\|0>`      | Set the enabled flag of entry `<idx>`      |
| `--json`                     | Print entries as JSON                      |
| `--script`                   | Print entries as `index,enabled,name,path` |
| `--create`                   | Start a new CFG instead of reading one     |
| `-o, --output <file>`        | Write the result to `<file>`               |
| `-V, --version`              | Show the version                           |
| `-h, --help`                 | Show the help text                         |

- `<idx>` may be `-1` to mean the last entry. Any other index outside the list
  ends the run with `Index out of range` and exit status 1.
- For `--enable`, any non-zero number sets the flag to 1 and zero clears it.
- The entries are printed once, after all actions have run. `--json` takes
  precedence over `--script`, and without either a plain list is printed.
- If an action changed anything, or `--create` was given, and there is no
  `-o`, the input file is overwritten. After a write the tool prints
  `Written <file> (<n> bytes)`.
- An unknown option, or one without enough arguments, ends the run with exit
  status 1.

Examples:

```
rkcfgtool config.cfg --json
rkcfgtool config.cfg --set-path 2 Image/boot.img -o new.cfg
rkcfgtool new.cfg --create --add loader MiniLoaderAll.bin --enable -1 1
```

## Library

The module `rkcfgkit.rkcfg` holds the file format:

```python
from rkcfgkit.rkcfg import Entry, read_rkcfg, write_rkcfg

config = read_rkcfg("config.cfg")
for entry in config.entries:
    print(entry.name, entry.path, hex(entry.address), entry.selected)

config.entries.append(Entry.new("misc", "Image/misc.img"))
written = write_rkcfg("out.cfg", config)  # number of bytes written
```

- `Config.create()` starts an empty configuration.
  `Config.from_bytes()` and `Config.to_bytes()` work on bytes in memory.
- `Entry.set_name()` and `Entry.set_path()` change an entry's text. Each entry
  keeps its on-disk record, so bytes the package does not interpret are
  written back unchanged.
- Names hold at most 39 UTF-16 units and paths at most 259. Longer text is
  cut short when it is stored.
- The entry count is stored in a single byte.
- `RKCfgError` is raised when a file cannot be opened or written, when the
  magic number is wrong, or when the item size is unsupported or does not
  match.

The output helpers used by the command are also importable from
`rkcfgkit.cli`: `format_list`, `format_json`, `format_script`, `json_escape`
and `parse_index`.