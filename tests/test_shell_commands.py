"""
Tests for shell command parsing and execution.
"""

import pytest

from memfs.shell.commands import COMMANDS, GOODBYE, HELP_TEXT, execute_command, parse_command


def run(fs, line: str):
    return execute_command(fs, line)


class TestCommandParsing:
    """Test command string parsing."""

    def test_parse_simple_command(self):
        assert parse_command("ls -l /docs") == ("ls", ["-l", "/docs"])

    def test_parse_quoted_content(self):
        cmd, args = parse_command('write notes.txt "hello world"')
        assert cmd == "write"
        assert args == ["notes.txt", "hello world"]

    def test_command_name_is_case_insensitive(self):
        assert parse_command("PWD")[0] == "pwd"

    def test_parse_empty_command_raises(self):
        with pytest.raises(ValueError):
            parse_command("   ")

    def test_unbalanced_quote(self, fs):
        result = run(fs, 'write f "oops')
        assert result.error
        assert result.output.startswith("Error:")


class TestDispatch:
    """Unknown commands, help and exit."""

    def test_unknown_command(self, fs):
        result = run(fs, "format c:")
        assert result.error
        assert result.output == "Unknown command: format. Type 'help' for available commands."

    def test_help_lists_every_command(self, fs):
        result = run(fs, "help")
        assert result.output == HELP_TEXT
        for name in COMMANDS:
            if name != "quit":
                assert name in HELP_TEXT

    @pytest.mark.parametrize("line", ["exit", "quit"])
    def test_exit(self, fs, line):
        result = run(fs, line)
        assert result.exit_requested
        assert result.output == GOODBYE


class TestFileCommands:
    """Create, write, read and delete."""

    def test_write_and_read(self, fs):
        assert run(fs, 'write /notes.txt "hello world"').output == "Successfully written to /notes.txt"
        assert run(fs, "read /notes.txt").output == "Content of /notes.txt: hello world"

    def test_write_content_starting_with_dash(self, fs):
        assert not run(fs, "write /f -x").error
        assert fs.read_file("/f").value == b"-x"

    def test_write_batch(self, fs):
        result = run(fs, "write -n 2 /a one /b two")
        assert not result.error
        assert result.output.splitlines() == [
            "Successfully written to /a",
            "Successfully written to /b",
        ]

    def test_write_count_mismatch(self, fs):
        result = run(fs, "write -n 3 /a one /b two")
        assert result.error
        assert not fs.exists("/a")

    @pytest.mark.parametrize("line", ["write", "write /a", "write /a x /b", "write -n x /a b", "write /a x /b y"])
    def test_write_usage(self, fs, line):
        result = run(fs, line)
        assert result.error
        assert result.output.startswith("Usage: write")

    def test_create_single_and_batch(self, fs):
        assert run(fs, "create /x").output == "File created successfully: /x"
        result = run(fs, "create -n 2 /y /z")
        assert result.output.splitlines() == [
            "File created successfully: /y",
            "File created successfully: /z",
        ]

    def test_create_count_mismatch(self, fs):
        result = run(fs, "create -n 3 /y /z")
        assert result.error
        assert "doesn't match specified count" in result.output
        assert not fs.exists("/y")

    def test_create_existing(self, fs):
        run(fs, "create /x")
        result = run(fs, "create /x")
        assert result.error
        assert result.output == "Error: create: /x: entry with the same path already exists"

    def test_read_missing(self, fs):
        result = run(fs, "read /nope")
        assert result.error
        assert result.output == "Error: read: /nope: does not exist"

    def test_delete_single(self, fs):
        run(fs, "create /x")
        assert run(fs, "delete /x").output == "File deleted successfully: /x"

    def test_delete_refuses_directory(self, fs):
        run(fs, "mkdir /d")
        result = run(fs, "delete /d")
        assert result.error
        assert fs.exists("/d")

    def test_delete_batch_reports_missing(self, fs):
        run(fs, "create -n 2 /a /b")
        result = run(fs, "delete -n 3 /a /ghost /b")
        assert result.error
        lines = result.output.splitlines()
        assert lines[0] == "Some files were not found: /ghost"
        assert lines[-1] == "Remaining files deleted successfully"

    def test_delete_batch_success(self, fs):
        run(fs, "create -n 2 /a /b")
        assert run(fs, "delete -n 2 /a /b").output == "Files deleted successfully"


class TestDirectoryCommands:
    """mkdir, cd, pwd, ls, rmdir, mv, cp."""

    def test_navigation(self, fs):
        assert run(fs, "mkdir /home/user").output == "Directory created successfully: /home/user"
        assert run(fs, "cd /home/user").output == "Changed directory to: /home/user"
        assert run(fs, "pwd").output == "Current directory: /home/user"
        assert run(fs, "cd ..").output == "Changed directory to: /home"

    def test_cd_usage(self, fs):
        assert run(fs, "cd").output == "Usage: cd <directory_path>"

    def test_ls_simple_and_detailed(self, fs):
        run(fs, "mkdir /docs")
        run(fs, "write /notes.txt abc")

        assert run(fs, "ls").output == "docs/\nnotes.txt"

        lines = run(fs, "ls -l /").output.splitlines()
        assert lines[0] == "Type\tSize\tCreated\t\tLast Modified\tName"
        assert lines[1] == "DIR\t0\t15/01/2024\t15/01/2024\tdocs"
        assert lines[2] == "FILE\t3\t15/01/2024\t15/01/2024\tnotes.txt"

    def test_ls_empty(self, fs):
        run(fs, "mkdir /empty")
        assert run(fs, "ls /empty").output == "No entries in directory: /empty"

    def test_ls_usage(self, fs):
        assert run(fs, "ls /a /b").output == "Usage: ls [-l] [directory]"

    def test_rmdir(self, fs):
        run(fs, "write /d/f x")
        result = run(fs, "rmdir /d")
        assert result.error
        assert "rmdir -r" in result.output
        assert run(fs, "rmdir -r /d").output == "Directory deleted successfully: /d"

    def test_mv_and_cp(self, fs):
        run(fs, "write /a.txt x")
        assert run(fs, "mv a.txt b.txt").output == "Successfully moved /a.txt to /b.txt"
        assert run(fs, "cp /b.txt /c.txt").output == "Successfully copied /b.txt to /c.txt"
        assert run(fs, "cp /b.txt /c.txt").output == "Error: cp: /c.txt: destination already exists"


class TestQueryCommands:
    """search, info, stats."""

    def test_search(self, fs):
        run(fs, "write /docs/report.txt x")
        output = run(fs, "search report").output
        assert output == "Search results for pattern: report\nFILE\t/docs/report.txt"

    def test_search_no_match(self, fs):
        assert run(fs, "search zzz").output.endswith("No matching entries found.")

    def test_info(self, fs):
        run(fs, "write /d/f hello")
        assert run(fs, "info /d").output.splitlines() == [
            "Information for: /d",
            "Type: Directory",
            "Size: 0 bytes",
            "Created: 15/01/2024",
            "Modified: 15/01/2024",
            "Direct children: 1",
        ]
        assert "Direct children" not in run(fs, "info /d/f").output

    def test_stats(self, fs):
        run(fs, "write /d/f hello")
        assert run(fs, "stats").output.splitlines() == [
            "System Statistics:",
            "Total Entries: 3",
            "Files: 1",
            "Directories: 2",
            "Total File Size: 5 bytes",
        ]


class TestPersistenceCommands:
    """save and load."""

    def test_save_and_load(self, fs, tmp_path):
        dump = tmp_path / "session.dump"
        run(fs, "write /keep.txt data")
        assert run(fs, f"save '{dump}'").output == f"File system saved to: {dump}"
        run(fs, "delete /keep.txt")
        assert run(fs, f"load '{dump}'").output == f"File system loaded from: {dump}"
        assert run(fs, "read /keep.txt").output == "Content of /keep.txt: data"

    def test_load_missing(self, fs, tmp_path):
        result = run(fs, f"load '{tmp_path / 'missing.dump'}'")
        assert result.error
        assert result.output.startswith("Error: load:")


class TestEndToEnd:
    """The docs/backup scenario typed into the shell."""

    def test_scenario(self, fs):
        assert not run(fs, "mkdir /docs").error
        assert not run(fs, 'write /docs/readme.txt "hello"').error
        assert run(fs, "read /docs/readme.txt").output == "Content of /docs/readme.txt: hello"
        assert not run(fs, "cp /docs /backup").error
        assert run(fs, "read /backup/readme.txt").output == "Content of /backup/readme.txt: hello"
        assert run(fs, "rmdir /docs").error
        assert not run(fs, "rmdir -r /docs").error
        assert run(fs, "ls /").output == "backup/"
