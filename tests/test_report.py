"""Tests for report row assembly."""

from envleak.gather import Candidate, CandidateKind
from envleak.reporting.render import render_report_table, rows_to_dicts
from envleak.reporting.report import (
    EXTRAS_HINT,
    Status,
    format_locations,
    run_privacy_scan,
)


class TestFormatLocations:
    """Tests for location truncation."""

    def test_five_or_fewer_joined(self):
        """Test that up to five entries are all shown."""
        locs = [f"f{i}.md:1" for i in range(5)]
        assert format_locations(locs) == " | ".join(locs)

    def test_more_than_five_truncated(self):
        """Test that extra files collapse into a count."""
        locs = [f"f{i}.md:1" for i in range(8)]
        assert format_locations(locs) == " | ".join(locs[:5]) + " | +3 more files"

    def test_empty(self):
        """Test that no locations give an empty string."""
        assert format_locations([]) == ""


class TestRunPrivacyScan:
    """Tests for the end-to-end scan rows."""

    def test_found_and_not_found_rows(self, make_tree, fake_probe):
        """Test candidate rows in gather order followed by the extras row."""
        root = make_tree(
            {
                "a.rs": "\n" * 6 + "// alice was here\n",
                "b.rs": "\n" * 11 + "let h = \"devbox-17\"; // alice\n",
            }
        )
        rows = run_privacy_scan(root, probe=fake_probe)

        assert [(r.category, r.value, r.status) for r in rows] == [
            ("Username", "alice", Status.FOUND),
            ("Username", "bob", Status.NOT_FOUND),
            ("Hostname", "devbox-17", Status.FOUND),
            ("IP", "10.20.30.40", Status.NOT_FOUND),
            ("IP", "2001:db8::5", Status.NOT_FOUND),
            ("Extra scans", "secrets, PEM, leak-files, docs/examples/tests", Status.SKIPPED),
        ]

        alice = rows[0]
        assert alice.details == "2 files, 2 hits"
        assert alice.locations == "a.rs:7 | b.rs:12"

        bob = rows[1]
        assert bob.details == "not found"
        assert bob.locations == ""

        extras = rows[-1]
        assert extras.details == EXTRAS_HINT
        assert extras.locations == ""

    def test_same_line_twice(self, make_tree):
        """Test two hits on one line give a single line number."""
        root = make_tree({"a.rs": "x\ny\nalice alice\n"})
        candidates = [Candidate(CandidateKind.USERNAME, "alice")]
        (row, _extras) = run_privacy_scan(root, candidates=candidates)

        assert row.details == "1 files, 2 hits"
        assert row.locations == "a.rs:3"

    def test_truncates_after_five_files(self, make_tree):
        """Test that a value in seven files shows five plus a marker."""
        root = make_tree({f"f{i}.md": "10.1.2.3\n" for i in range(7)})
        candidates = [Candidate(CandidateKind.IP, "10.1.2.3")]
        (row, _extras) = run_privacy_scan(root, candidates=candidates)

        assert row.details == "7 files, 7 hits"
        assert row.locations.endswith(" | +2 more files")
        assert row.locations.count(" | ") == 5

    def test_no_candidates_sentinel(self, make_tree, probe_factory):
        """Test the single N/A row when nothing could be gathered."""
        root = make_tree({"a.md": "hello\n"})
        rows = run_privacy_scan(root, probe=probe_factory(addresses=[]))

        assert len(rows) == 2
        sentinel, extras = rows
        assert (sentinel.category, sentinel.value, sentinel.status) == (
            "Scan",
            "No candidates",
            Status.NOT_APPLICABLE,
        )
        assert extras.status == Status.SKIPPED

    def test_no_candidates_still_runs_extras(self, make_tree):
        """Test that the extras row follows the sentinel when enabled."""
        root = make_tree({".env": ""})
        rows = run_privacy_scan(root, run_extras=True, candidates=[])

        assert rows[0].value == "No candidates"
        assert rows[1].status == Status.FOUND
        assert rows[1].locations == ".env"

    def test_extras_not_found(self, make_tree):
        """Test the extras row when the tree is clean."""
        root = make_tree({"src/lib.rs": "fn main() {}\n"})
        candidates = [Candidate(CandidateKind.USERNAME, "zed")]
        rows = run_privacy_scan(root, run_extras=True, candidates=candidates)

        assert rows[-1].status == Status.NOT_FOUND
        assert rows[-1].details == "not found"

    def test_idempotent(self, make_tree, fake_probe):
        """Test that two scans of an unchanged tree give identical rows."""
        root = make_tree(
            {
                "docs/a.md": "alice email token\n",
                "src/b.py": "bob = 'devbox-17'\n",
                "x/.env": "",
            }
        )
        first = run_privacy_scan(root, run_extras=True, probe=fake_probe)
        second = run_privacy_scan(root, run_extras=True, probe=fake_probe)

        assert rows_to_dicts(first) == rows_to_dicts(second)


class TestRender:
    """Tests for row rendering."""

    def test_rows_to_dicts(self, make_tree):
        """Test the JSON-ready shape uses plain status strings."""
        root = make_tree({"a.md": "hi\n"})
        rows = run_privacy_scan(root, candidates=[])

        assert rows_to_dicts(rows)[0] == {
            "category": "Scan",
            "value": "No candidates",
            "status": "N/A",
            "details": "0",
            "locations": "",
        }

    def test_table_has_one_row_per_report_row(self, make_tree):
        """Test that the rendered table mirrors the rows."""
        root = make_tree({"a.md": "hi\n"})
        rows = run_privacy_scan(root, candidates=[])
        table = render_report_table(rows)

        assert table.row_count == len(rows)
        assert [c.header for c in table.columns] == [
            "Security/Privacy Check",
            "Value",
            "Status",
            "Details",
            "Locations (file:lines)",
        ]
