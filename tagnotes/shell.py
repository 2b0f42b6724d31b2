"""Interactive command shell for notes.

Usage:
    tagnotes                          # Use NOTES_PATH or the default notes directory
    tagnotes --notes-path ~/my-notes  # Use a specific directory
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, TextIO

from tagnotes.config import configure_logging, settings
from tagnotes.domain.note import Note
from tagnotes.exceptions import NotesError
from tagnotes.notes_app import NotesApp, SearchKind

HELP_TEXT = """Notes App - Commands:
  help                            - Show this help
  create <name>                   - Create a new note
  list                            - List all notes
  search <query>                  - Search notes by content
  search-tag <tag>                - Search notes by tag
  show-tags [note]                - Show all tags or tags for specific note
  set-tags <note> <tag1,tag2>     - Set note tags (replace all)
  add-tags <note> <tag1,tag2>     - Add tags to a note
  remove-tags <note> <tag1,tag2>  - Remove tags from a note
  list-tags                       - List all unique tags
  delete <note>                   - Delete a note
  edit <note>                     - Edit note content
  stats                           - Show index statistics
  refresh                         - Refresh the index
  clear                           - Clear the screen
  quit                            - Exit the application"""

CLEAR_SCREEN = "\033[2J\033[H"


def format_preview(content: str) -> str:
    """Join the first non-empty lines of a note, cut off after three lines or 100 chars."""
    preview = ""
    for i, line in enumerate(content.split("\n")):
        if i >= 3 or len(preview) > 100:
            preview += "..."
            break
        if line:
            preview += line + " "
    return preview


def format_notes(notes: List[Note]) -> str:
    if not notes:
        return "No notes found."

    lines = [f"Found {len(notes)} note(s):", ""]
    for note in notes:
        lines.append(f"Name: {note.name}")
        lines.append(f"Path: {note.path}")
        modified = datetime.fromtimestamp(note.modified).strftime("%Y-%m-%d %H:%M:%S")
        lines.append(f"Modified: {modified}")
        if note.tags:
            lines.append(f"Tags: {', '.join(note.tags)}")
        preview = format_preview(note.content)
        if preview:
            lines.append(f"Preview: {preview}")
        lines.append("---")
    return "\n".join(lines)


def split_tags(parts: List[str]) -> List[str]:
    """Rejoin command words and split them on commas."""
    return " ".join(parts).split(",")


class NotesShell:
    """Line-oriented shell mapping each command onto one NotesApp operation."""

    def __init__(
        self, notes_app: NotesApp, stdin: TextIO = sys.stdin, stdout: TextIO = sys.stdout
    ) -> None:
        self.notes_app = notes_app
        self.stdin = stdin
        self.stdout = stdout

        self._commands: Dict[str, Callable[[List[str]], bool]] = {}
        for names, handler in [
            (("help", "h"), self.do_help),
            (("create", "c"), self.do_create),
            (("list", "l"), self.do_list),
            (("search", "?"), self.do_search),
            (("search-tag",), self.do_search_tag),
            (("show-tags",), self.do_show_tags),
            (("set-tags", "st"), self.do_set_tags),
            (("add-tags", "at"), self.do_add_tags),
            (("remove-tags", "rt"), self.do_remove_tags),
            (("list-tags", "lt"), self.do_list_tags),
            (("delete", "d"), self.do_delete),
            (("edit", "e"), self.do_edit),
            (("stats",), self.do_stats),
            (("refresh",), self.do_refresh),
            (("clear", "cls"), self.do_clear),
            (("quit", "exit", "q"), self.do_quit),
        ]:
            for name in names:
                self._commands[name] = handler

    def print(self, text: str = "", end: str = "\n") -> None:
        self.stdout.write(text + end)
        self.stdout.flush()

    def readline(self) -> str | None:
        """Read one line without its newline, or None at end of input."""
        line = self.stdin.readline()
        if not line:
            return None
        return line.rstrip("\n")

    def read_multiline(self, prompt: str) -> str:
        """Read lines until a lone '.' or end of input."""
        self.print(f"{prompt} (type '.' on a new line to finish):")
        content = []
        while (line := self.readline()) is not None:
            if line == ".":
                break
            content.append(line + "\n")
        return "".join(content)

    def run(self) -> None:
        while True:
            self.print("> ", end="")
            line = self.readline()
            if line is None or not self.handle(line):
                break

    def handle(self, line: str) -> bool:
        """Execute one command line. Returns False when the shell should exit."""
        parts = line.split()
        if not parts:
            return True

        handler = self._commands.get(parts[0])
        if handler is None:
            self.print(f"Unknown command: {parts[0]}")
            self.print("Type 'help' for available commands")
            return True
        return handler(parts[1:])

    def do_help(self, args: List[str]) -> bool:
        self.print(HELP_TEXT)
        return True

    def do_create(self, args: List[str]) -> bool:
        if not args:
            self.print("Usage: create <name>")
            return True
        name = " ".join(args)
        content = self.read_multiline("Enter note content")
        try:
            self.notes_app.create_note(name, content)
        except NotesError as err:
            self.print(f"Error creating note: {err}")
        else:
            self.print(f"Note '{name}' created successfully")
        return True

    def do_list(self, args: List[str]) -> bool:
        self.print(format_notes(self.notes_app.list_all_notes()))
        return True

    def do_search(self, args: List[str]) -> bool:
        if not args:
            self.print("Usage: search <query>")
            return True
        notes = self.notes_app.search_notes(" ".join(args), SearchKind.CONTENT)
        self.print(format_notes(notes))
        return True

    def do_search_tag(self, args: List[str]) -> bool:
        if not args:
            self.print("Usage: search-tag <tag>")
            return True
        self.print(format_notes(self.notes_app.search_notes(args[0], SearchKind.TAG)))
        return True

    def do_show_tags(self, args: List[str]) -> bool:
        if not args:
            return self.do_list_tags(args)
        try:
            note = self.notes_app.get_note(args[0])
        except NotesError as err:
            self.print(f"Error showing tags: {err}")
        else:
            self.print(f"Tags for '{note.name}': {note.tags}")
        return True

    def do_set_tags(self, args: List[str]) -> bool:
        if not args:
            self.print("Usage: set-tags <note-name> [tag1,tag2,tag3]")
            return True
        tags = [tag.strip() for tag in split_tags(args[1:])] if len(args) > 1 else []
        try:
            self.notes_app.update_note_tags(args[0], tags)
        except NotesError as err:
            self.print(f"Error setting tags: {err}")
        else:
            self.print("Tags updated successfully")
        return True

    def do_add_tags(self, args: List[str]) -> bool:
        if len(args) < 2:
            self.print("Usage: add-tags <note-name> <tag1,tag2,tag3>")
            return True
        try:
            self.notes_app.add_tags_to_note(args[0], split_tags(args[1:]))
        except NotesError as err:
            self.print(f"Error adding tags: {err}")
        else:
            self.print("Tags added successfully")
        return True

    def do_remove_tags(self, args: List[str]) -> bool:
        if len(args) < 2:
            self.print("Usage: remove-tags <note-name> <tag1,tag2,tag3>")
            return True
        try:
            self.notes_app.remove_tags_from_note(args[0], split_tags(args[1:]))
        except NotesError as err:
            self.print(f"Error removing tags: {err}")
        else:
            self.print("Tags removed successfully")
        return True

    def do_list_tags(self, args: List[str]) -> bool:
        tags = sorted(self.notes_app.get_all_tags())
        if not tags:
            self.print("No tags found.")
            return True
        self.print(f"All tags ({len(tags)}):")
        for tag in tags:
            self.print(f"  {tag}")
        return True

    def do_delete(self, args: List[str]) -> bool:
        if not args:
            self.print("Usage: delete <note-name>")
            return True
        name = args[0]
        self.print(f"Are you sure you want to delete '{name}'? (y/N): ", end="")
        confirmation = (self.readline() or "").strip().lower()
        if confirmation not in ("y", "yes"):
            self.print("Delete cancelled")
            return True
        try:
            self.notes_app.delete_note(name)
        except NotesError as err:
            self.print(f"Error deleting note: {err}")
        else:
            self.print(f"Note '{name}' deleted successfully")
        return True

    def do_edit(self, args: List[str]) -> bool:
        if not args:
            self.print("Usage: edit <note-name>")
            return True
        name = args[0]
        try:
            current = self.notes_app.get_note(name)
        except NotesError as err:
            self.print(f"Error loading note: {err}")
            return True

        self.print(f"Current content of '{name}':")
        self.print("---")
        self.print(current.content, end="")
        self.print("---")

        content = self.read_multiline("Enter new content")
        try:
            self.notes_app.update_note_content(name, content)
        except NotesError as err:
            self.print(f"Error updating note: {err}")
        else:
            self.print(f"Note '{name}' updated successfully")
        return True

    def do_stats(self, args: List[str]) -> bool:
        stats = self.notes_app.get_stats()
        self.print("Index Statistics:")
        self.print(f"  Total notes: {stats.total_notes}")
        self.print(f"  Unique tags: {stats.unique_tags}")
        return True

    def do_refresh(self, args: List[str]) -> bool:
        try:
            self.notes_app.refresh_index()
        except NotesError as err:
            self.print(f"Error refreshing index: {err}")
            return True
        self.print("Index refreshed successfully")
        return self.do_stats(args)

    def do_clear(self, args: List[str]) -> bool:
        self.print(CLEAR_SCREEN, end="")
        return True

    def do_quit(self, args: List[str]) -> bool:
        self.print("Goodbye!")
        return False


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Plain-text notes with tags")
    parser.add_argument(
        "--notes-path",
        type=Path,
        required=False,
        help="Directory holding the notes (overrides NOTES_PATH)",
        default=settings.notes_path,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        required=False,
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
        default=None,
    )
    args = parser.parse_args(argv)

    run_settings = settings.model_copy(update={"notes_path": args.notes_path})
    if args.log_level:
        run_settings = run_settings.model_copy(update={"log_level": args.log_level, "debug": False})
    configure_logging(run_settings)

    print(f"Notes App - Using directory: {run_settings.notes_path}")
    print("Type 'help' for available commands")

    notes_app = NotesApp.from_path(run_settings.notes_path)
    try:
        notes_app.initialize()
    except NotesError as err:
        print(f"Error initializing app: {err}", file=sys.stderr)
        return 1

    shell = NotesShell(notes_app)
    shell.print(f"Loaded notes from: {run_settings.notes_path}")
    shell.do_stats([])
    shell.print()
    shell.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
