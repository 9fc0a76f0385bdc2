"""
Tests for the interactive menu.
"""

from inventory import Inventory, StorageError, main


class TestMenu:
    """Drives main() with scripted console input."""

    def test_session_saves_on_exit(self, data_file, feed_input, capsys):
        """Add, duplicate add, update and low-stock, then exit and save."""
        feed_input(
            "1", "1", "Widget", "9.99", "3",
            "1", "1",
            "4", "1", "0",
            "7",
            "9",
        )
        main(str(data_file))

        out = capsys.readouterr().out
        assert "No data file found" in out
        assert "Added 'Widget' (ID: 1)" in out
        assert "Product with ID 1 already exists" in out
        assert "Current quantity: 3" in out
        assert "Quantity updated" in out
        assert "Widget" in out.split("Low Stock Alert")[1]
        assert data_file.read_text(encoding="utf-8") == "1,Widget,9.99,0\n"

    def test_end_of_input_still_saves(self, data_file, feed_input):
        """Running out of input behaves like a normal exit."""
        feed_input("1", "5", "Thing", "2.5", "1")
        main(str(data_file))
        assert data_file.read_text(encoding="utf-8") == "5,Thing,2.5,1\n"

    def test_bad_console_input_is_reprompted(self, data_file, feed_input, capsys):
        """Malformed numbers are re-asked; invalid values become messages."""
        feed_input("1", "abc", "7", "Thing", "x", "2", "-1", "42", "9")
        main(str(data_file))

        out = capsys.readouterr().out
        assert "Invalid integer" in out
        assert "Invalid number" in out
        assert "Quantity cannot be negative" in out
        assert "Invalid selection" in out
        assert data_file.read_text(encoding="utf-8") == ""

    def test_search_and_not_found(self, data_file, feed_input, capsys):
        """Search prints a table for hits and a message for misses."""
        data_file.write_text("3,Gizmo,0.5,7\n", encoding="utf-8")
        feed_input("3", "3", "3", "8", "4", "8", "9")
        main(str(data_file))

        out = capsys.readouterr().out
        assert "Inventory loaded" in out
        assert "Gizmo" in out
        assert "Product with ID 8 not found" in out

    def test_startup_reports_skipped_lines(self, data_file, feed_input, capsys):
        """Skipped lines are reported when the file is loaded."""
        data_file.write_text("1,Widget,9.99,3\nbroken\n", encoding="utf-8")
        feed_input("2", "6", "9")
        main(str(data_file))

        out = capsys.readouterr().out
        assert "(1 products)" in out
        assert "1 invalid entries were skipped" in out
        assert "Total Products: 1" in out

    def test_bad_utf8_line_does_not_lose_other_products(self, data_file, feed_input, capsys):
        """One undecodable line is skipped; exiting keeps the remaining products."""
        data_file.write_bytes(b"1,Widget,9.99,3\n2,Caf\xe9,1.0,4\n3,Gizmo,0.5,7\n")
        feed_input("9")
        main(str(data_file))

        out = capsys.readouterr().out
        assert "(2 products)" in out
        assert "1 invalid entries were skipped" in out
        assert data_file.read_text(encoding="utf-8") == "1,Widget,9.99,3\n3,Gizmo,0.5,7\n"

    def test_failed_startup_load_leaves_file_untouched(self, data_file, feed_input, monkeypatch, capsys):
        """If the data file cannot be read it is not overwritten on exit."""
        original = b"1,Widget,9.99,3\n2,Gadget,5.0,10\n"
        data_file.write_bytes(original)

        def unreadable(self, path):
            raise StorageError(f"Unable to load data from '{path}': permission denied")

        monkeypatch.setattr(Inventory, "load", unreadable)
        feed_input("1", "9", "Extra", "1.0", "1", "9")
        main(str(data_file))

        out = capsys.readouterr().out
        assert "Unable to load data" in out
        assert "Not saving" in out
        assert data_file.read_bytes() == original

    def test_failed_startup_load_then_explicit_save(self, data_file, feed_input, monkeypatch):
        """An explicit save after a failed load is honoured, and exit saves again."""
        data_file.write_bytes(b"1,Widget,9.99,3\n")

        def unreadable(self, path):
            raise StorageError("Unable to load data")

        monkeypatch.setattr(Inventory, "load", unreadable)
        feed_input("1", "9", "Extra", "1.0", "1", "5", "4", "9", "2", "9")
        main(str(data_file))

        assert data_file.read_text(encoding="utf-8") == "9,Extra,1.0,2\n"

    def test_export_chart(self, data_file, feed_input, tmp_path, monkeypatch, capsys):
        """Menu option 8 writes the stock chart to the working directory."""
        monkeypatch.chdir(tmp_path)
        feed_input("1", "1", "Widget", "9.99", "3", "8", "9")
        main(str(data_file))

        assert "Stock chart written" in capsys.readouterr().out
        assert (tmp_path / "stock_levels.png").stat().st_size > 0
