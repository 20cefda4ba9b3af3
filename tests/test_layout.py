from mutex.layout import PositionedFragment, assemble_document, reconstruct_page_lines


class TestReconstructPageLines:

    def test_fragments_on_one_line_are_ordered_left_to_right(self):
        fragments = [
            PositionedFragment("5,000.00", 500, 700),
            PositionedFragment("01 Jan 2024", 40, 700),
            PositionedFragment("+1,000.00", 400, 700),
            PositionedFragment("TRANSFER", 120, 700),
        ]
        assert reconstruct_page_lines(fragments) == ["01 Jan 2024 TRANSFER +1,000.00 5,000.00"]

    def test_lines_are_ordered_top_of_page_first(self):
        fragments = [
            PositionedFragment("bottom", 10, 100),
            PositionedFragment("top", 10, 800),
            PositionedFragment("middle", 10, 450),
        ]
        assert reconstruct_page_lines(fragments) == ["top", "middle", "bottom"]

    def test_blank_fragments_are_dropped(self):
        fragments = [
            PositionedFragment("  ", 10, 300),
            PositionedFragment("A", 10, 500),
            PositionedFragment("", 50, 500),
            PositionedFragment("B", 90, 500),
        ]
        assert reconstruct_page_lines(fragments) == ["A B"]

    def test_page_without_text_yields_no_lines(self):
        assert reconstruct_page_lines([]) == []
        assert reconstruct_page_lines([PositionedFragment(" ", 1, 1)]) == []


class TestAssembleDocument:

    def test_each_page_ends_with_a_line_break(self):
        assert assemble_document([["a", "b"], ["c"]]) == "a\nb\nc\n"

    def test_empty_page_keeps_page_boundary(self):
        assert assemble_document([["a"], [], ["c"]]) == "a\n\nc\n"

    def test_no_pages(self):
        assert assemble_document([]) == ""
