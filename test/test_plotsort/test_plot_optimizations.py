import copy
import random
import unittest

from mock import Mock

from plotsort import plot_optimizations
from plotsort.path_objects import DocDigest, LayerItem, PathItem, Point

# python -m unittest discover in top-level package dir

def make_layer(named_vertex_lists, name="layer"):
    """ Build a LayerItem from (item_id, vertices) pairs """
    paths = [PathItem.from_attrs(vertices=vertices, item_id=item_id)
        for item_id, vertices in named_vertex_lists]
    return LayerItem.from_attrs(name=name, paths=paths)


def random_layer(seed, count):
    rng = random.Random(seed)
    paths = []
    for path_number in range(count):
        vertex_count = rng.choice([0, 1, 2, 3, 5])
        vertices = [(rng.uniform(0, 300), rng.uniform(0, 200)) for _ in range(vertex_count)]
        paths.append((str(path_number), vertices))
    return make_layer(paths)


class SortTestCase(unittest.TestCase):

    def test_nearest_start_order(self):
        """ without reversal, each step goes to the closest path start """
        layer = make_layer([
            ("P1", [(10, 10.1), (0, 0)]),
            ("P2", [(3, 2.3), (10, 10)]),
            ("P3", [(1, 0), (0, 0)]),
            ("P4", [(2, 1), (1, 0.1)]),
        ])
        plot_optimizations.sort(layer, False)

        self.assertEqual([path.item_id for path in layer.paths], ["P3", "P4", "P2", "P1"])
        self.assertEqual(layer.paths[0].vertices, [Point(1, 0), Point(0, 0)])

    def test_bidirectional_flips(self):
        """ with reversal allowed, paths may be entered from their last vertex """
        layer = make_layer([
            ("P1", [(10, 10.1), (20, 20)]),
            ("P2", [(3, 2.3), (10, 10)]),
            ("P3", [(1, 0), (0, 0)]),
            ("P4", [(3, 2), (1, 0.1)]),
        ])
        plot_optimizations.sort(layer, True)

        self.assertEqual([path.item_id for path in layer.paths], ["P3", "P4", "P2", "P1"])
        self.assertEqual(layer.paths[0].vertices, [Point(0, 0), Point(1, 0)])
        self.assertEqual(layer.paths[1].vertices, [Point(1, 0.1), Point(3, 2)])
        self.assertEqual(layer.paths[2].vertices, [Point(3, 2.3), Point(10, 10)])
        self.assertEqual(layer.paths[3].vertices, [Point(10, 10.1), Point(20, 20)])

    def test_empty_path_goes_last(self):
        for bidirectional in (False, True):
            with self.subTest(bidirectional=bidirectional):
                layer = make_layer([
                    ("far", [(100, 100), (101, 100)]),
                    ("empty", []),
                    ("near", [(1, 1), (2, 1)]),
                ])
                plot_optimizations.sort(layer, bidirectional)
                self.assertEqual([path.item_id for path in layer.paths],
                    ["near", "far", "empty"])

    def test_empty_layer(self):
        layer = LayerItem()
        plot_optimizations.sort(layer, True)
        self.assertEqual(layer.paths, [])

    def test_all_empty_paths_keep_order(self):
        layer = make_layer([(str(i), []) for i in range(5)])
        plot_optimizations.sort(layer, True)
        self.assertEqual([path.item_id for path in layer.paths], ["0", "1", "2", "3", "4"])

    def test_single_point_path(self):
        """ a single-vertex path is located by its only vertex and never flipped """
        layer = make_layer([("line", [(5, 5), (6, 6)]), ("dot", [(1, 1)])])
        plot_optimizations.sort(layer, True)
        self.assertEqual([path.item_id for path in layer.paths], ["dot", "line"])
        self.assertEqual(layer.paths[0].vertices, [Point(1, 1)])

    def test_conservation(self):
        """ same paths out as in, each with the same vertices up to reversal """
        for bidirectional in (False, True):
            layer = random_layer(3, 200)
            before = {path.item_id: list(path.vertices) for path in layer.paths}

            plot_optimizations.sort(layer, bidirectional)

            self.assertEqual(len(layer.paths), len(before))
            self.assertEqual({path.item_id for path in layer.paths}, set(before))
            for path in layer.paths:
                original = before[path.item_id]
                if bidirectional:
                    self.assertIn(path.vertices, [original, original[::-1]])
                else:
                    self.assertEqual(path.vertices, original)

    def test_deterministic(self):
        layer_a = random_layer(5, 150)
        layer_b = copy.deepcopy(layer_a)

        plot_optimizations.sort(layer_a, True)
        plot_optimizations.sort(layer_b, True)

        self.assertEqual([path.item_id for path in layer_a.paths],
            [path.item_id for path in layer_b.paths])
        self.assertEqual([path.vertices for path in layer_a.paths],
            [path.vertices for path in layer_b.paths])

    def test_sorted_layer_is_stable(self):
        """ sorting an already-sorted layer again, without reversal, changes nothing """
        layer = random_layer(8, 100)
        plot_optimizations.sort(layer, False)
        order = [path.item_id for path in layer.paths]

        plot_optimizations.sort(layer, False)
        self.assertEqual([path.item_id for path in layer.paths], order)

    def test_extreme_coordinates(self):
        """ finite coordinates near the limits of float precision and range still sort """
        layer = make_layer([("far", [(1e20, 0), (1e20, 5)]), ("near", [(1e20, 1), (1e20, 2)])])
        plot_optimizations.sort(layer, False)
        self.assertEqual([path.item_id for path in layer.paths], ["far", "near"])

        layer = make_layer([("left", [(-1e308, 0), (0, 0)]), ("right", [(1e308, 0), (0, 1)])])
        plot_optimizations.sort(layer, True)
        self.assertEqual([path.item_id for path in layer.paths], ["left", "right"])
        self.assertEqual(layer.paths[0].vertices, [Point(0, 0), Point(-1e308, 0)])


class ReorderTestCase(unittest.TestCase):

    def test_reorder_each_layer(self):
        """ every layer is sorted on its own, each starting from the origin """
        digest = DocDigest()
        digest.layers = [
            make_layer([("b", [(5, 5), (6, 6)]), ("a", [(1, 1), (2, 2)])], "first"),
            make_layer([("d", [(9, 9), (8, 8)]), ("c", [(0, 1), (0, 2)])], "second"),
        ]
        progress = Mock()

        plot_optimizations.reorder(digest, False, progress)

        self.assertEqual([layer.name for layer in digest.layers], ["first", "second"])
        self.assertEqual([path.item_id for path in digest.layers[0].paths], ["a", "b"])
        self.assertEqual([path.item_id for path in digest.layers[1].paths], ["c", "d"])
        self.assertEqual(progress.call_count, 2)
        progress.assert_called_with(2)

    def test_reorder_without_progress(self):
        digest = DocDigest()
        digest.layers = [make_layer([("x", [(3, 3), (0, 0)])])]
        plot_optimizations.reorder(digest, True)
        self.assertEqual(digest.layers[0].paths[0].vertices, [Point(0, 0), Point(3, 3)])
