"""Tests for the procfs table reader."""

from irq_metrics.procfile import ProcFile


class TestProcFile:
    """Tests for ProcFile word access and re-reading."""

    def test_open_missing_file(self, tmp_path):
        """Test opening a missing file returns None."""
        assert ProcFile.open(str(tmp_path / "missing")) is None

    def test_words_split_on_spaces_and_tabs(self, tmp_path):
        """Test lines are split on runs of spaces and tabs."""
        path = tmp_path / "table"
        path.write_text("  CPU0\t\tCPU1  \n0:  1\t2 timer\n")
        ff = ProcFile.open(str(path)).readall()
        assert ff.lines == 2
        assert ff.words(0) == ["CPU0", "CPU1"]
        assert ff.linewords(1) == 4
        assert ff.lineword(1, 3) == "timer"

    def test_out_of_range_access(self, tmp_path):
        """Test out-of-range line and word access is empty."""
        path = tmp_path / "table"
        path.write_text("CPU0\n")
        ff = ProcFile.open(str(path)).readall()
        assert ff.lineword(0, 5) == ""
        assert ff.lineword(9, 0) == ""
        assert ff.linewords(9) == 0

    def test_readall_rereads_from_start(self, tmp_path):
        """Test readall picks up rewritten file contents."""
        path = tmp_path / "table"
        path.write_text("CPU0\nNMI: 1\n")
        ff = ProcFile.open(str(path))
        assert ff.readall().lineword(1, 1) == "1"
        path.write_text("CPU0\nNMI: 2\nLOC: 3\n")
        assert ff.readall() is ff
        assert ff.lines == 3
        assert ff.lineword(1, 1) == "2"

    def test_readall_after_close_fails(self, tmp_path):
        """Test read failure returns None and drops the file object."""
        path = tmp_path / "table"
        path.write_text("CPU0\n")
        ff = ProcFile.open(str(path))
        ff.src.close()
        assert ff.readall() is None
        assert ff.src is None
