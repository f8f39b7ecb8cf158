from __future__ import annotations

import re
import unittest

from grouping.contracts import RecognizedPage
from grouping.identifiers import IdentifierParser, field_from_identifier_line, find_identifier_lines


class TestIdentifierParser(unittest.TestCase):
    def setUp(self) -> None:
        self.parser = IdentifierParser()

    def test_company_then_collaborator(self) -> None:
        text = "Payslip\n12.345.678/0001-90 Acme Corp\nsome header\n123.456.789-00 Jane Doe\nTotal 1.234,56\n"
        self.assertEqual(
            self.parser.parse(text),
            RecognizedPage(company="Acme Corp", collaborator_key="Jane Doe"),
        )

    def test_no_identifier_lines_is_empty_not_error(self) -> None:
        self.assertEqual(self.parser.parse(""), RecognizedPage())
        self.assertEqual(self.parser.parse("continued from previous page\n"), RecognizedPage())

    def test_single_match_leaves_both_fields_empty(self) -> None:
        self.assertEqual(self.parser.parse("12.345.678/0001-90 Acme Corp\n"), RecognizedPage())

    def test_matches_beyond_second_are_ignored(self) -> None:
        text = (
            "12.345.678/0001-90 Acme Corp\n"
            "123.456.789-00 Jane Doe\n"
            "987.654.321-00 John Smith\n"
        )
        page = self.parser.parse(text)
        self.assertEqual(page.company, "Acme Corp")
        self.assertEqual(page.collaborator_key, "Jane Doe")

    def test_personal_id_accepts_any_separator(self) -> None:
        text = "12.345.678/0001-90 Acme Corp\n123,456,789-00 Jane Doe\n"
        self.assertEqual(self.parser.parse(text).collaborator_key, "Jane Doe")

    def test_remainder_is_trimmed(self) -> None:
        text = "12.345.678/0001-90   Acme Corp  \n123.456.789-00  Jane Doe\n"
        page = self.parser.parse(text)
        self.assertEqual(page.company, "Acme Corp")
        self.assertEqual(page.collaborator_key, "Jane Doe")

    def test_find_identifier_lines_in_order(self) -> None:
        text = "x 12.345.678/0001-90 A\n123.456.789-00 B\n"
        self.assertEqual(
            find_identifier_lines(text),
            ["12.345.678/0001-90 A", "123.456.789-00 B"],
        )

    def test_non_ascii_digits_are_not_identifiers(self) -> None:
        # Arabic-Indic and fullwidth digits.
        text = "١٢.٣٤٥.٦٧٨/٠٠٠١-٩٠ Acme Corp\n１２３.４５６.７８９-００ Jane Doe\n"
        self.assertEqual(find_identifier_lines(text), [])
        self.assertEqual(self.parser.parse(text), RecognizedPage())

    def test_parser_uses_its_own_pattern(self) -> None:
        parser = IdentifierParser(re.compile(r"ID\d+ (.+)", re.ASCII))
        text = "12.345.678/0001-90 Acme Corp\nID1 Beta Ltda\nID2 Maria\n"
        self.assertEqual(parser.parse(text), RecognizedPage(company="Beta Ltda", collaborator_key="Maria"))


class TestTokenOnlyQuirk(unittest.TestCase):
    """
    A matched line with nothing usable after the token keeps the token (or the
    whole unsplit match) as the field value. Documented quirk, kept on purpose.
    """

    def test_no_space_returns_whole_match(self) -> None:
        self.assertEqual(field_from_identifier_line("123.456.789-00X"), "123.456.789-00X")

    def test_blank_remainder_returns_token(self) -> None:
        self.assertEqual(field_from_identifier_line("123.456.789-00  "), "123.456.789-00")

    def test_tab_separated_line_is_not_split(self) -> None:
        text = "12.345.678/0001-90 Acme\n123.456.789-00\tJane\n"
        self.assertEqual(IdentifierParser().parse(text).collaborator_key, "123.456.789-00\tJane")


if __name__ == "__main__":
    unittest.main()
