from mutex.issuers import BCA, BNI, BRI
from mutex.segmenter import SegmentState, segment_blocks, step


class TestSegmentBlocks:
    """Section markers, noise and continuation handling."""

    def test_continuation_lines_join_the_open_block(self, bni_lines):
        blocks = segment_blocks(bni_lines, BNI)
        assert blocks == [
            ["10 Nov 2025 Transfer", "08:37:35 WIB MANDIRI BUDI +10,000", "128,090"],
            ["12 Nov 2025 Pembelian Pulsa", "14:02:11 WIB -5,000 123,090"],
        ]

    def test_end_marker_closes_anchor_opened_section_for_good(self, bni_lines):
        blocks = segment_blocks(bni_lines, BNI)
        assert not any(block[0].startswith("15 Nov 2025") for block in blocks)

    def test_lines_before_start_marker_are_ignored(self):
        lines = [
            "LAPORAN TRANSAKSI FINANSIAL",
            "01/01/24 - 31/01/24 1.00 2.00 3.00",
            "Transaction Date Transaction Description Teller Debit Credit Balance",
            "02/01/24 PAYMENT 500.00 0.00 4,500.00",
            "Opening Balance Total Debit Total Credit Closing Balance",
            "03/01/24 SUMMARY 1.00 2.00 3.00",
        ]
        assert segment_blocks(lines, BRI) == [["02/01/24 PAYMENT 500.00 0.00 4,500.00"]]

    def test_repeated_header_reopens_marker_section(self):
        lines = [
            "Transaction Date Description Debit Credit Balance",
            "02/01/24 A 1.00 0.00 9.00",
            "Opening Balance",
            "Halaman 1 dari 2",
            "Transaction Date Description Debit Credit Balance",
            "03/01/24 B 2.00 0.00 7.00",
        ]
        blocks = segment_blocks(lines, BRI)
        assert [block[0][:10] for block in blocks] == ["02/01/24 A", "03/01/24 B"]

    def test_noise_inside_section_is_dropped(self):
        lines = [
            "01/10 SALDO AWAL 1,000.00",
            "02/10 TRSF 100.00 DB 900.00",
            "Bersambung ke Halaman berikut",
            "TANGGAL KETERANGAN CBG MUTASI SALDO",
            "KE BUDI",
            "SALDO AKHIR 900.00",
        ]
        assert segment_blocks(lines, BCA) == [["02/10 TRSF 100.00 DB 900.00", "KE BUDI"]]

    def test_block_count_never_exceeds_anchor_lines(self, bni_lines):
        anchors = sum(1 for line in bni_lines if BNI.date_anchor.match(line))
        assert len(segment_blocks(bni_lines, BNI)) <= anchors

    def test_empty_input(self):
        assert segment_blocks([], BNI) == []
        assert segment_blocks(["", "   "], BNI) == []


class TestStep:

    def test_step_returns_new_state(self):
        state = SegmentState()
        after = step(state, "01 Jan 2024 TRANSFER +1,000.00 5,000.00", BNI)
        assert state == SegmentState()
        assert after.in_section
        assert after.current == ("01 Jan 2024 TRANSFER +1,000.00 5,000.00",)

    def test_orphan_continuation_is_ignored(self):
        state = step(SegmentState(in_section=True), "KE BUDI", BCA)
        assert state == SegmentState(in_section=True)
