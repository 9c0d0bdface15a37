import math
import random
import unittest

from app.portfolio.layout.justified import layout_justified, natural_width, pack_rows, scale_row
from app.portfolio.layout.ratios import LayoutItem


def _photos(n, width=800, height=600, prefix="p"):
    return [LayoutItem(f"{prefix}{i}", width=width, height=height) for i in range(n)]


def _mixed(n, seed=7):
    rnd = random.Random(seed)
    return [
        LayoutItem(f"m{i}", width=rnd.randint(300, 2400), height=rnd.randint(300, 1800))
        for i in range(n)
    ]


class TestPackRows(unittest.TestCase):
    def test_fits_without_overflow(self):
        # 200*3 + 10*2 = 620 <= 650
        groups = pack_rows([1.0, 1.0, 1.0], container_width=650, target_row_height=200, gap=10)
        self.assertEqual(groups, [[0, 1, 2]])

    def test_tie_closes_row(self):
        # without 3rd: 400 (under 100), with: 600 (over 100)
        groups = pack_rows([1.0, 1.0, 1.0], container_width=500, target_row_height=200, gap=0)
        self.assertEqual(groups, [[0, 1], [2]])

    def test_small_overshoot_is_accepted(self):
        # under 180 vs over 20
        groups = pack_rows([1.0, 1.0, 1.0], container_width=580, target_row_height=200, gap=0)
        self.assertEqual(groups, [[0, 1, 2]])

    def test_overwide_item_gets_its_own_row(self):
        groups = pack_rows([5.0, 1.0], container_width=1200, target_row_height=300, gap=8)
        self.assertEqual(groups, [[0], [1]])

    def test_gaps_wider_than_container_close_the_row(self):
        # Under-fill 5.2 vs over-fill 5.1 would accept, but 7.5px cannot hold an 8px gap.
        groups = pack_rows([0.02, 0.02], container_width=7.5, target_row_height=115, gap=8)
        self.assertEqual(groups, [[0], [1]])

    def test_empty(self):
        self.assertEqual(pack_rows([], container_width=100, target_row_height=10, gap=0), [])

    def test_natural_width(self):
        self.assertEqual(natural_width([], 300, 8), 0.0)
        self.assertAlmostEqual(natural_width([4 / 3, 4 / 3], 300, 8), 808.0)


class TestScaleRow(unittest.TestCase):
    def test_row_spans_container(self):
        height, widths = scale_row([1.0, 2.0], container_width=610, target_row_height=100, gap=10)
        self.assertAlmostEqual(height, 200.0)
        self.assertAlmostEqual(sum(widths) + 10, 610.0)

    def test_panorama_scales_down(self):
        height, widths = scale_row([5.0], container_width=1200, target_row_height=300, gap=8)
        self.assertAlmostEqual(height, 240.0)
        self.assertAlmostEqual(widths[0], 1200.0)


class TestLayoutScenarios(unittest.TestCase):
    def test_three_landscape_photos_fill_one_row(self):
        # 808 without the 3rd item leaves 392px, 1216 with it overshoots 16px,
        # so the third photo joins the row.
        result = layout_justified(_photos(3), container_width=1200, target_row_height=300, gap=8)
        self.assertEqual(len(result.rows), 1)
        row = result.rows[0]
        self.assertTrue(row.filled)
        self.assertTrue(row.is_last)
        self.assertAlmostEqual(row.height, 296.0)
        self.assertEqual([p.pixel_width for p in row.placements], [395, 395, 394])
        self.assertEqual([p.x for p in row.placements], [0, 403, 806])
        self.assertEqual(row.pixel_width, 1200)
        self.assertEqual(result.total_height, 296)

    def test_short_trailing_row_keeps_target_height(self):
        result = layout_justified(_photos(4), container_width=1200, target_row_height=300, gap=8)
        self.assertEqual(len(result.rows), 2)
        last = result.rows[1]
        self.assertFalse(last.filled)
        self.assertTrue(last.is_last)
        self.assertAlmostEqual(last.height, 300.0)
        self.assertEqual(last.placements[0].pixel_width, 400)
        self.assertEqual(last.placements[0].x, 0)
        self.assertEqual(last.top, 304)
        self.assertEqual(result.total_height, 604)

    def test_last_row_exactly_filling_width_is_scaled(self):
        items = [LayoutItem(f"sq{i}", width=1, height=1) for i in range(3)]
        result = layout_justified(items, container_width=620, target_row_height=200, gap=10)
        self.assertEqual(len(result.rows), 1)
        row = result.rows[-1]
        self.assertTrue(row.is_last)
        self.assertIs(row.filled, True)
        self.assertAlmostEqual(row.height, 200.0)
        self.assertEqual(sum(p.pixel_width for p in row.placements), 600)
        self.assertEqual(row.pixel_width, 620)

    def test_empty_items(self):
        result = layout_justified([], container_width=1200, target_row_height=300, gap=8)
        self.assertEqual(result.rows, ())
        self.assertEqual(result.total_height, 0)

    def test_single_panorama(self):
        items = [LayoutItem("pano", width=5000, height=1000)]
        result = layout_justified(items, container_width=1200, target_row_height=300, gap=8)
        self.assertEqual(len(result.rows), 1)
        p = result.rows[0].placements[0]
        self.assertAlmostEqual(p.height, 240.0)
        self.assertAlmostEqual(p.width, 1200.0)
        self.assertEqual((p.pixel_width, p.pixel_height), (1200, 240))
        self.assertTrue(result.rows[0].filled)

    def test_narrower_container_never_fewer_rows(self):
        items = [LayoutItem(f"s{i}", width=1, height=1) for i in range(10)]
        wide = layout_justified(items, container_width=1200, target_row_height=200, gap=4)
        narrow = layout_justified(items, container_width=800, target_row_height=200, gap=4)
        self.assertEqual([len(r.placements) for r in wide.rows], [6, 4])
        self.assertEqual([len(r.placements) for r in narrow.rows], [4, 4, 2])
        self.assertGreaterEqual(len(narrow.rows), len(wide.rows))


class TestLayoutProperties(unittest.TestCase):
    def test_order_preserved(self):
        items = _mixed(40)
        result = layout_justified(items, container_width=1000, target_row_height=200, gap=6)
        self.assertEqual([p.key for p in result.placements()], [it.key for it in items])

    def test_filled_rows_span_container(self):
        items = _mixed(40)
        for width in (640, 1000, 1437):
            result = layout_justified(items, container_width=width, target_row_height=200, gap=6)
            for row in result.rows:
                if not row.filled:
                    continue
                n = len(row.placements)
                self.assertEqual(sum(p.pixel_width for p in row.placements) + 6 * (n - 1), width)
                self.assertAlmostEqual(sum(p.width for p in row.placements) + 6 * (n - 1), width, places=6)

    def test_only_last_row_may_be_unfilled(self):
        result = layout_justified(_mixed(40), container_width=1000, target_row_height=200, gap=6)
        for row in result.rows[:-1]:
            self.assertTrue(row.filled)
            self.assertFalse(row.is_last)
        self.assertTrue(result.rows[-1].is_last)

    def test_aspect_ratio_preserved(self):
        items = _mixed(25)
        result = layout_justified(items, container_width=900, target_row_height=180, gap=4)
        for item, p in zip(items, result.placements()):
            self.assertAlmostEqual(p.aspect_ratio, item.aspect_ratio)
            self.assertTrue(math.isclose(p.width / p.height, item.aspect_ratio, rel_tol=1e-9))

    def test_rows_share_height(self):
        result = layout_justified(_mixed(25), container_width=900, target_row_height=180, gap=4)
        for row in result.rows:
            self.assertEqual(len({p.height for p in row.placements}), 1)
            self.assertEqual(len({p.pixel_height for p in row.placements}), 1)

    def test_idempotent(self):
        items = _mixed(30)
        a = layout_justified(items, container_width=1000, target_row_height=200, gap=6)
        b = layout_justified(items, container_width=1000, target_row_height=200, gap=6)
        self.assertEqual(a, b)

    def test_row_count_monotonic_in_width(self):
        items = [LayoutItem(f"u{i}", width=3, height=2) for i in range(23)]
        counts = [
            len(layout_justified(items, container_width=w, target_row_height=150, gap=8).rows)
            for w in range(200, 3000, 37)
        ]
        self.assertEqual(counts, sorted(counts, reverse=True))

    def test_row_count_monotonic_for_mixed_items(self):
        for seed in (1, 7, 42, 2024):
            items = _mixed(30, seed=seed)
            counts = [
                len(layout_justified(items, container_width=w, target_row_height=180, gap=6).rows)
                for w in range(240, 2600, 29)
            ]
            self.assertEqual(counts, sorted(counts, reverse=True), seed)

    def test_rows_stack_with_gap(self):
        result = layout_justified(_mixed(30), container_width=1000, target_row_height=200, gap=6)
        for prev, row in zip(result.rows, result.rows[1:]):
            self.assertEqual(row.top, prev.top + prev.pixel_height + 6)
        last = result.rows[-1]
        self.assertEqual(result.total_height, last.top + last.pixel_height)


class TestLayoutErrors(unittest.TestCase):
    def test_malformed_items_become_square(self):
        items = [
            LayoutItem("zero", width=0, height=100),
            LayoutItem("none"),
            LayoutItem("nan", width=float("nan"), height=10),
            LayoutItem("neg", width=-4, height=3),
            LayoutItem("ok", width=200, height=100),
        ]
        result = layout_justified(items, container_width=1000, target_row_height=100, gap=0)
        ratios = [p.aspect_ratio for p in result.placements()]
        self.assertEqual(ratios, [1.0, 1.0, 1.0, 1.0, 2.0])

    def test_unmeasured_container_gives_empty_layout(self):
        for width in (0, -5, float("nan")):
            result = layout_justified(_photos(3), container_width=width, target_row_height=300, gap=8)
            self.assertEqual(result.rows, ())

    def test_narrow_container_never_yields_negative_sizes(self):
        items = [LayoutItem("a", aspect_ratio_hint=0.02), LayoutItem("b", aspect_ratio_hint=0.02)]
        result = layout_justified(items, container_width=7.5, target_row_height=115, gap=8)
        self.assertEqual([len(r.placements) for r in result.rows], [1, 1])
        for row in result.rows:
            self.assertGreater(row.height, 0)
            for p in row.placements:
                self.assertGreater(p.width, 0)
                self.assertEqual(p.x, 0)

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            layout_justified(_photos(2), container_width=1000, target_row_height=0, gap=4)
        with self.assertRaises(ValueError):
            layout_justified(_photos(2), container_width=1000, target_row_height=-10, gap=4)
        with self.assertRaises(ValueError):
            layout_justified(_photos(2), container_width=1000, target_row_height=float("inf"), gap=4)
        with self.assertRaises(ValueError):
            layout_justified(_photos(2), container_width=1000, target_row_height=200, gap=-1)

    def test_invalid_config_rejected_even_when_empty(self):
        with self.assertRaises(ValueError):
            layout_justified([], container_width=0, target_row_height=0, gap=0)

    def test_duplicate_keys(self):
        items = [LayoutItem("a", width=1, height=1), LayoutItem("a", width=2, height=1)]
        with self.assertRaises(ValueError):
            layout_justified(items, container_width=1000, target_row_height=200, gap=4)


if __name__ == "__main__":
    unittest.main()
