# scenedex

The non-visual core of a video thumbnail browser. It decides which files
count as movies, keeps the ordered list of watched directories, records
back/forward navigation over selected movies, parses the command line, and
stores a document (an SQLite file) holding directories, tags, open counts and
the last view position.

## Modules

- `scenedex.commandoption`: `CommandOption` and `parse_command_line(argv)`.
  Accepts a document argument, `-d/--database-directory <directory>`, `-n`
  (do not add to recent documents), `-h/--help` and `-v/--version`. Non-empty
  paths are made absolute; unknown options are ignored.
- `scenedex.extension`: `ExtensionFilter`, which decides by allow or deny
  list whether a file name is a movie, plus `default_allow()`,
  `default_deny()`, `get_extension(file)` and `string_list_to_string(items)`.
  In a list, `"*"` stands for every extension and `"noext"` for files without
  one. `load(settings)` and `save(settings)` work on any mutable mapping.
- `scenedex.history`: `HistoryList`, back and forward navigation over
  `(id, movie)` entries, reporting to a `HistoryListener`.
- `scenedex.directories`: `DirectoryItemType`, `DirectoryItem` and
  `DirectoryEntry`, the ordered list of watched directories with its "show
  all" entry first and "missing" entry last, and `check_directory_async`.
- `scenedex.docstore`: `DocumentStore`, the SQLite document with its settings
  flags, last position and directories; errors raise `DocumentStoreError`.
- `scenedex.tags`: `Tag` and `TagStore`, tags and their attachment to items.
- `scenedex.access`: `AccessStore`, open counts and last access times.

## Examples

Filtering movie files:

```python
from scenedex.extension import ExtensionFilter, default_allow, default_deny

movies = ExtensionFilter(order_allow=True, allow=default_allow(), deny=default_deny())
movies.is_movie_extension("holiday.MP4")  # True
movies.is_movie_extension("notes.txt")    # False
```

Navigating history:

```python
from scenedex.history import HistoryList, HistoryListener

class Printer(HistoryListener):
    def select_item(self, movie):
        print("select", movie)

    def update_tool_button(self):
        pass

history = HistoryList(Printer())
history.on_item_changed(1, "a.mp4")
history.on_item_changed(2, "b.mp4")
history.go_back()          # prints "select a.mp4"
history.can_go_forward()   # True
```

Keeping the directory list in order:

```python
from scenedex.directories import DirectoryEntry, DirectoryItem, DirectoryItemType

entry = DirectoryEntry()
entry.add_item(DirectoryItem(0, DirectoryItemType.ALL))
entry.add_item(DirectoryItem(0, DirectoryItemType.MISSING))
entry.add_item(DirectoryItem(2, DirectoryItemType.NORMAL, "/videos/b"))
entry.add_item(DirectoryItem(1, DirectoryItemType.NORMAL, "/videos/a"))
entry.sort_by_directory()
[item.directory for item in entry.normal_items()]  # ["/videos/a", "/videos/b"]
```

Keeping state in a document:

```python
from scenedex.docstore import DocumentStore
from scenedex.tags import TagStore
from scenedex.access import AccessStore

with DocumentStore("library.sedoc", db_id="library-1") as store:
    store.set_last_pos(3, 1)
    store.last_pos()                     # (3, 1)

    tags = TagStore(store)
    drama = tags.insert("drama", "drama")
    tags.set_tagged(10, drama, True)
    tags.tagged_ids([drama])             # {10}

    access = AccessStore(store)
    access.increment(10, now=1700000000)
    access.open_count(10)                # 1
```

Parsing the command line:

```python
from scenedex.commandoption import parse_command_line

options = parse_command_line(["-n", "-d", "db", "movies.sedoc"])
options.no_recent  # True
```

## What it does not do

There is no user interface and no program to run: the classes are meant to
sit behind one. The package does not probe video files, create thumbnails,
name thumbnail files or format sizes and durations for display, and it keeps
no movie database of its own; `DocumentStore` only records data keyed by the
`db_id` it is given.

## Tests

Install the `test` extra and run pytest from the project root.