"""
Directory tree tests

Covers listing, ordering, connectors and prefixes, and the error paths that
must not stop the rest of the tree from printing.
"""

import io
import os

import pytest
from rich.console import Console

from ntools.tree import (
    SPACE,
    DirEntry,
    compare_entries,
    list_children,
    print_tree,
    render_tree,
    sort_entries,
)


def make_tree(root, layout):
    """layout maps names to None (empty file) or a nested dict (directory)"""
    for name, children in layout.items():
        path = root / name
        if children is None:
            path.write_text("")
        else:
            path.mkdir()
            make_tree(path, children)


def tree_lines(path: str):
    console = Console(file=io.StringIO(), highlight=False, markup=False)
    print_tree(path, console)
    # split on newlines only, names may hold other line breaking characters
    return console.file.getvalue().split("\n")[:-1]


class TestListChildren:
    """Tests for list_children()"""

    def test_classifies_entries(self, tmp_path):
        make_tree(tmp_path, {"sub": {}, "file.txt": None})
        entries = {e.name: e.is_dir for e in list_children(str(tmp_path))}
        assert entries == {"sub": True, "file.txt": False}

    def test_no_pseudo_entries(self, tmp_path):
        make_tree(tmp_path, {"a": None})
        names = [e.name for e in list_children(str(tmp_path))]
        assert "." not in names and ".." not in names

    def test_symlinked_directory_counts_as_directory(self, tmp_path):
        make_tree(tmp_path, {"real": {}})
        os.symlink(tmp_path / "real", tmp_path / "alias")
        entries = {e.name: e.is_dir for e in list_children(str(tmp_path))}
        assert entries["alias"] is True

    def test_dangling_symlink_is_skipped(self, tmp_path, capsys):
        make_tree(tmp_path, {"ok.txt": None})
        os.symlink(tmp_path / "nowhere", tmp_path / "broken")
        names = [e.name for e in list_children(str(tmp_path))]
        assert names == ["ok.txt"]
        assert "broken" in capsys.readouterr().err

    def test_unopenable_directory(self, tmp_path, capsys):
        missing = str(tmp_path / "missing")
        assert list_children(missing) == []
        err = capsys.readouterr().err
        assert "Cannot open directory" in err
        assert "missing" in err

    def test_many_children(self, tmp_path):
        for i in range(500):
            (tmp_path / f"f{i:03d}").write_text("")
        assert len(list_children(str(tmp_path))) == 500


class TestSortEntries:
    """Tests for the entry ordering"""

    def test_directories_first(self):
        entries = [
            DirEntry("b.txt", False),
            DirEntry("zeta", True),
            DirEntry("a.txt", False),
            DirEntry("alpha", True),
        ]
        assert [e.name for e in sort_entries(entries)] == ["alpha", "zeta", "a.txt", "b.txt"]

    def test_case_sensitive(self):
        entries = [DirEntry("apple", False), DirEntry("Banana", False), DirEntry("_x", False)]
        assert [e.name for e in sort_entries(entries)] == ["Banana", "_x", "apple"]

    def test_compare_entries(self):
        d, f = DirEntry("z", True), DirEntry("a", False)
        assert compare_entries(d, f) == -1
        assert compare_entries(f, d) == 1
        assert compare_entries(DirEntry("a", False), DirEntry("b", False)) == -1
        assert compare_entries(DirEntry("a", True), DirEntry("a", True)) == 0


class TestRenderTree:
    """Tests for the rendered tree"""

    def test_first_line_is_path_verbatim(self, tmp_path):
        assert tree_lines(str(tmp_path)) == [str(tmp_path)]

    def test_connectors_and_prefixes(self, tmp_path):
        make_tree(
            tmp_path,
            {
                "alpha": {"one": None},
                "beta": {"two": {"deep": None}},
                "gamma": {"three": None, "four": None},
            },
        )
        assert tree_lines(str(tmp_path))[1:] == [
            "├── alpha",
            "│   └── one",
            "├── beta",
            "│   └── two",
            "│       └── deep",
            "└── gamma",
            "    ├── four",
            "    └── three",
        ]

    def test_files_after_directories(self, tmp_path):
        make_tree(tmp_path, {"a.txt": None, "z_dir": {}, "B.txt": None})
        assert tree_lines(str(tmp_path))[1:] == [
            "├── z_dir",
            "├── B.txt",
            "└── a.txt",
        ]

    def test_prefix_is_not_shared_between_siblings(self, tmp_path):
        make_tree(tmp_path, {"a": {"x": {"y": None}}, "b": {"z": None}})
        lines = tree_lines(str(tmp_path))
        assert lines[-1] == "    └── z"

    def test_markup_in_names_is_printed_literally(self, tmp_path):
        make_tree(tmp_path, {"[red]x": None, "[bold]y[bold]": None})
        assert tree_lines(str(tmp_path))[1:] == ["├── [bold]y[bold]", "└── [red]x"]

    def test_tabs_and_control_characters_are_kept(self, tmp_path):
        make_tree(tmp_path, {"a\tb": None, "a\rb": None})
        assert tree_lines(str(tmp_path))[1:] == ["├── a\tb", "└── a\rb"]

    def test_start_path_is_kept_verbatim(self, tmp_path):
        start = tmp_path / "tab\there"
        make_tree(start.parent, {start.name: {"f": None}})
        assert tree_lines(str(start)) == [str(start), "└── f"]

    def test_very_deep_tree(self, tmp_path):
        depth = 1100
        path = tmp_path
        for _ in range(depth):
            path = path / "d"
            path.mkdir()
        lines = tree_lines(str(tmp_path))
        assert len(lines) == depth + 1
        assert lines[1:] == [SPACE * level + "└── d" for level in range(depth)]

    def test_symlink_loop_is_not_followed(self, tmp_path, capsys):
        make_tree(tmp_path, {"d": {"f": None}})
        os.symlink(tmp_path, tmp_path / "d" / "up")
        console = Console(file=io.StringIO(), highlight=False, markup=False)
        print_tree(str(tmp_path), console)
        assert console.file.getvalue().splitlines()[1:] == [
            "└── d",
            "    ├── up",
            "    └── f",
        ]
        assert "symbolic link loop" in capsys.readouterr().err

    @pytest.mark.skipif(os.geteuid() == 0, reason="root can read any directory")
    def test_unreadable_subdirectory_is_skipped(self, tmp_path, capsys):
        make_tree(tmp_path, {"locked": {"secret": None}, "open": {"visible": None}})
        (tmp_path / "locked").chmod(0)
        try:
            lines = tree_lines(str(tmp_path))
        finally:
            (tmp_path / "locked").chmod(0o755)
        assert lines[1:] == ["├── locked", "└── open", "    └── visible"]
        assert "locked" in capsys.readouterr().err

    def test_render_tree_on_missing_directory(self, tmp_path, capsys):
        console = Console(file=io.StringIO())
        render_tree(str(tmp_path / "nope"), console)
        assert console.file.getvalue() == ""
        assert "nope" in capsys.readouterr().err
