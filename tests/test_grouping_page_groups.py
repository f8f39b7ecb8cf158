from __future__ import annotations

import unittest
from pathlib import Path

from grouping.contracts import GrouperState, PageGroup, RecognizedPage
from grouping.page_groups import PageGrouper, group_recognized_pages

SRC = Path("in/payslips.pdf")


def _page(company: str = "", key: str = "") -> RecognizedPage:
    return RecognizedPage(company=company, collaborator_key=key)


class TestPageGrouper(unittest.TestCase):
    def test_three_page_scenario(self) -> None:
        groups = group_recognized_pages(
            source_file=SRC,
            pages=[
                (1, _page("Acme Corp", "Jane Doe")),
                (2, _page()),
                (3, _page("Acme Corp", "John Smith")),
            ],
        )
        self.assertEqual(
            groups,
            [
                PageGroup(source_file=SRC, key="Jane Doe", sub_path="Acme Corp", pages=(1, 2)),
                PageGroup(source_file=SRC, key="John Smith", sub_path="Acme Corp", pages=(3,)),
            ],
        )

    def test_missing_middle_page_does_not_split(self) -> None:
        groups = group_recognized_pages(
            source_file=SRC,
            pages=[(n, _page("Acme", "Jane")) for n in (1, 2, 4, 5)],
        )
        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0].pages, (1, 2, 4, 5))
        self.assertEqual(groups[0].key, "Jane")

    def test_carry_forward_keeps_state_keyed(self) -> None:
        grouper = PageGrouper(source_file=SRC)
        self.assertEqual(grouper.state, GrouperState.EMPTY)
        self.assertIsNone(grouper.feed(page_num=1, page=_page("Acme", "Jane")))
        self.assertEqual(grouper.state, GrouperState.KEYED)
        self.assertIsNone(grouper.feed(page_num=2, page=_page()))
        self.assertIsNone(grouper.feed(page_num=3, page=_page()))
        self.assertEqual(grouper.current_key, "Jane")
        self.assertEqual(grouper.finish().pages, (1, 2, 3))

    def test_key_change_closes_before_new_page_is_added(self) -> None:
        grouper = PageGrouper(source_file=SRC)
        grouper.feed(page_num=1, page=_page("Acme", "Jane"))
        closed = grouper.feed(page_num=2, page=_page("Beta", "John"))
        self.assertEqual(closed, PageGroup(source_file=SRC, key="Jane", sub_path="Acme", pages=(1,)))
        self.assertEqual(
            grouper.finish(), PageGroup(source_file=SRC, key="John", sub_path="Beta", pages=(2,))
        )

    def test_company_last_non_empty_wins_without_splitting(self) -> None:
        groups = group_recognized_pages(
            source_file=SRC,
            pages=[
                (1, _page("Acme", "Jane")),
                (2, _page("Acme Holding", "Jane")),
                (3, _page("", "Jane")),
            ],
        )
        self.assertEqual(groups, [PageGroup(source_file=SRC, key="Jane", sub_path="Acme Holding", pages=(1, 2, 3))])

    def test_new_group_after_split_resets_sub_path(self) -> None:
        groups = group_recognized_pages(
            source_file=SRC,
            pages=[(1, _page("Acme", "Jane")), (2, _page("", "John"))],
        )
        self.assertEqual(groups[1].sub_path, "")
        self.assertEqual(groups[1].key, "John")

    def test_leading_unkeyed_pages_join_first_keyed_group(self) -> None:
        groups = group_recognized_pages(
            source_file=SRC,
            pages=[(1, _page()), (2, _page("Acme", "Jane")), (3, _page())],
        )
        self.assertEqual(groups, [PageGroup(source_file=SRC, key="Jane", sub_path="Acme", pages=(1, 2, 3))])

    def test_document_without_any_key_flushes_one_empty_key_group(self) -> None:
        groups = group_recognized_pages(source_file=SRC, pages=[(1, _page()), (2, _page())])
        self.assertEqual(groups, [PageGroup(source_file=SRC, key="", sub_path="", pages=(1, 2))])

    def test_finish_without_pages_still_emits(self) -> None:
        groups = group_recognized_pages(source_file=SRC, pages=[])
        self.assertEqual(groups, [PageGroup(source_file=SRC, key="", sub_path="", pages=())])

    def test_closed_groups_are_not_mutated_by_later_pages(self) -> None:
        grouper = PageGrouper(source_file=SRC)
        grouper.feed(page_num=1, page=_page("Acme", "Jane"))
        closed = grouper.feed(page_num=2, page=_page("Acme", "John"))
        assert closed is not None
        grouper.feed(page_num=3, page=_page("Other", "John"))
        self.assertEqual(closed.pages, (1,))
        self.assertEqual(closed.sub_path, "Acme")

    def test_pages_must_ascend(self) -> None:
        grouper = PageGrouper(source_file=SRC)
        grouper.feed(page_num=2, page=_page())
        with self.assertRaises(ValueError):
            grouper.feed(page_num=2, page=_page())
        with self.assertRaises(ValueError):
            grouper.feed(page_num=1, page=_page())

    def test_feed_after_finish_raises(self) -> None:
        grouper = PageGrouper(source_file=SRC)
        grouper.finish()
        with self.assertRaises(RuntimeError):
            grouper.feed(page_num=1, page=_page())
        with self.assertRaises(RuntimeError):
            grouper.finish()

    def test_every_page_appears_exactly_once_in_emission_order(self) -> None:
        keys = ["A", "", "", "B", "B", "", "C", "A", "", "A"]
        groups = group_recognized_pages(
            source_file=SRC,
            pages=[(n, _page("Co", k)) for n, k in enumerate(keys, start=1)],
        )
        flattened = [p for g in groups for p in g.pages]
        self.assertEqual(flattened, list(range(1, len(keys) + 1)))
        for g in groups:
            self.assertEqual(list(g.pages), sorted(set(g.pages)))
        self.assertEqual([g.key for g in groups], ["A", "B", "C", "A"])


if __name__ == "__main__":
    unittest.main()
