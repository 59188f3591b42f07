"""Tests for nictraffic/source.py"""

import os

import pytest

from nictraffic.exceptions import FatalConfigError
from nictraffic.source import EMPTY_COUNTERS, ProcNetDevSource, parse_net_dev


class TestParseNetDev:
    """Tests for parse_net_dev."""

    def test_extracts_bytes_and_packets_in_order(self, net_dev_text):
        """Fields are (rx_bytes, tx_bytes, rx_packets, tx_packets)."""
        assert parse_net_dev(net_dev_text, "eth0") == ("1000000", "500000", "2000", "1500")

    def test_exact_match_not_prefix(self, net_dev_text):
        """'eth0' does not match the 'eth01' row and vice versa."""
        assert parse_net_dev(net_dev_text, "eth01") == ("77", "99", "88", "111")
        assert parse_net_dev(net_dev_text, "eth") == EMPTY_COUNTERS

    def test_value_glued_to_colon(self, net_dev_text):
        """Large counters may follow the colon without a space."""
        assert parse_net_dev(net_dev_text, "wlan0") == ("12345678", "87654321", "9876", "5432")

    def test_missing_interface_returns_empty_fields(self, net_dev_text):
        """Absent interface is not an error."""
        assert parse_net_dev(net_dev_text, "eth9") == ("", "", "", "")

    def test_short_row_returns_empty_columns(self):
        """Truncated rows leave the missing columns empty."""
        assert parse_net_dev("eth0: 1 2 3\n", "eth0") == ("1", "", "2", "")

    def test_header_lines_ignored(self, net_dev_text):
        """Header rows have no interface key."""
        assert parse_net_dev(net_dev_text, "Inter-") == EMPTY_COUNTERS
        assert parse_net_dev(net_dev_text, "face") == EMPTY_COUNTERS


class TestProcNetDevSource:
    """Tests for ProcNetDevSource."""

    def test_read_from_file(self, net_dev_file):
        """Reads the table from the configured path."""
        source = ProcNetDevSource(net_dev_file)
        assert source.read("lo") == ("104736", "104736", "912", "912")

    def test_read_rereads_on_every_call(self, net_dev_file, net_dev_text):
        """Changes to the table are visible on the next read."""
        source = ProcNetDevSource(net_dev_file)
        assert source.read("eth0")[0] == "1000000"
        net_dev_file.write_text(net_dev_text.replace("1000000", "1000500"))
        assert source.read("eth0")[0] == "1000500"

    def test_read_missing_file_returns_empty(self, tmp_path):
        """Unreadable table on read is not an error."""
        source = ProcNetDevSource(tmp_path / "missing")
        assert source.read("eth0") == EMPTY_COUNTERS

    def test_read_table_with_undecodable_bytes(self, tmp_path, net_dev_text):
        """A non-UTF-8 interface name elsewhere in the table does not break reads."""
        path = tmp_path / "net_dev"
        path.write_bytes(b"w\xfflan: 5 6 0 0 0 0 0 0 7 8 0 0 0 0 0 0\n" + net_dev_text.encode())
        source = ProcNetDevSource(path)
        assert source.read("eth0") == ("1000000", "500000", "2000", "1500")
        assert source.read(os.fsdecode(b"w\xfflan")) == ("5", "7", "6", "8")

    def test_check_readable_accepts_undecodable_bytes(self, tmp_path):
        """Binary noise in the table is not a startup failure."""
        path = tmp_path / "net_dev"
        path.write_bytes(b"\xff\xfe eth0: 1 2\n")
        ProcNetDevSource(path).check_readable()

    def test_check_readable_passes(self, net_dev_file):
        """Readable table passes the startup check."""
        ProcNetDevSource(net_dev_file).check_readable()

    def test_check_readable_missing_file_is_fatal(self, tmp_path):
        """Missing table raises FatalConfigError carrying the path."""
        path = tmp_path / "missing"
        with pytest.raises(FatalConfigError, match="Unable to read the network device status file") as exc_info:
            ProcNetDevSource(path).check_readable()
        assert exc_info.value.path == str(path)

    @pytest.mark.skipif(os.geteuid() == 0, reason="root can read files regardless of mode")
    def test_check_readable_unreadable_file_is_fatal(self, net_dev_file):
        """Permission-denied table raises FatalConfigError."""
        net_dev_file.chmod(0)
        try:
            with pytest.raises(FatalConfigError):
                ProcNetDevSource(net_dev_file).check_readable()
        finally:
            net_dev_file.chmod(0o644)
