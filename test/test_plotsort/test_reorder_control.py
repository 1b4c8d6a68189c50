import os
import unittest

from lxml import etree
from mock import patch
from pyfakefs.fake_filesystem_unittest import TestCase as FakeFsTestCase

from plotsort import plot_status
from plotsort import reorder_control

# python -m unittest discover in top-level package dir

SAMPLE_SVG = os.path.join(os.path.dirname(__file__), '..', 'assets', 'plotsort_sample.svg')


def polyline_ids(svg_string):
    """ ids of the polylines in each layer of a plob string, in document order """
    root = etree.fromstring(svg_string.encode('utf-8'))
    return [[polyline.get('id') for polyline in layer]
        for layer in root if layer.get('{http://www.inkscape.org/namespaces/inkscape}label')]


def polyline_points(svg_string, item_id):
    root = etree.fromstring(svg_string.encode('utf-8'))
    for layer in root:
        for polyline in layer:
            if polyline.get('id') == item_id:
                return polyline.get('points')
    return None


class ReorderControlTestCase(unittest.TestCase):

    def setUp(self):
        self.messages = []
        self.rc = reorder_control.ReorderControl(default_logging=False,
            user_message_fun=self.messages.append)

    def test_default_options(self):
        self.assertEqual(self.rc.options.reordering, 1)
        self.assertFalse(self.rc.options.report_stats)
        self.assertFalse(self.rc.options.suppress_warnings)

    def test_getoptions(self):
        self.rc.getoptions(["--reordering", "2", "--report_stats", "true"])
        self.assertEqual(self.rc.options.reordering, 2)
        self.assertTrue(self.rc.options.report_stats)

    def test_basic_reordering(self):
        self.rc.setup(SAMPLE_SVG)
        output = self.rc.run(output=True)

        self.assertEqual(polyline_ids(output), [["b", "a", "c"], ["e", "d"]])
        self.assertEqual(polyline_points(output, "e"), "39.000000,39.000000 30.000000,30.000000")
        self.assertEqual(self.rc.status_code, plot_status.STATUS_OK)

    def test_full_reordering(self):
        self.rc.setup(SAMPLE_SVG)
        self.rc.options.reordering = 2
        output = self.rc.run(output=True)

        self.assertEqual(polyline_ids(output), [["b", "a", "c"], ["e", "d"]])
        self.assertEqual(polyline_points(output, "e"), "30.000000,30.000000 39.000000,39.000000")
        self.assertEqual(polyline_points(output, "d"), "40.000000,40.000000 50.000000,50.000000")

    def test_no_reordering(self):
        self.rc.setup(SAMPLE_SVG)
        self.rc.options.reordering = 0
        output = self.rc.run(output=True)
        self.assertEqual(polyline_ids(output), [["a", "b", "c"], ["d", "e"]])

    def test_unknown_reordering(self):
        self.rc.setup(SAMPLE_SVG)
        self.rc.options.reordering = 7
        with self.assertLogs('plotsort.reorder_control', level='WARNING'):
            output = self.rc.run(output=True)
        self.assertEqual(polyline_ids(output), [["a", "b", "c"], ["d", "e"]])

    def test_string_input(self):
        svg = """<svg xmlns="http://www.w3.org/2000/svg"
            xmlns:inkscape="http://www.inkscape.org/namespaces/inkscape">
            <g inkscape:label="1"><polyline id="far" points="9,9 8,8" />
            <polyline id="near" points="1,1 2,2" /></g></svg>"""
        self.rc.setup(svg)
        self.assertIsNone(self.rc.run())
        self.assertEqual(polyline_ids(self.rc.get_output()), [["near", "far"]])

    def test_stats_and_warnings(self):
        self.rc.setup(SAMPLE_SVG)
        self.rc.options.report_stats = True
        self.rc.run()

        before = self.rc.plot_status.stats_before
        after = self.rc.plot_status.stats_after
        self.assertEqual(before.path_count, after.path_count)
        self.assertLessEqual(after.pen_up_length, before.pen_up_length)
        self.assertTrue(any("Pen-up travel" in text for text in self.messages))
        self.assertTrue(any("(degenerate)" in text for text in self.messages))
        self.assertTrue(any("(short)" in text for text in self.messages))

    def test_suppress_warnings(self):
        self.rc.setup(SAMPLE_SVG)
        self.rc.options.suppress_warnings = True
        self.rc.run()
        self.assertEqual(self.messages, [])

    @patch.object(plot_status, "tqdm")
    def test_progress_needs_cli(self, m_tqdm):
        self.rc.setup(SAMPLE_SVG)
        self.rc.options.progress = True
        self.rc.run()
        m_tqdm.assert_not_called()

        self.rc.plot_status.cli_api = True
        self.rc.setup(SAMPLE_SVG)
        self.rc.run()
        m_tqdm.assert_called_once()
        self.assertEqual(m_tqdm.return_value.update.call_count, 2)

    def test_effect_without_input(self):
        with self.assertRaises(RuntimeError):
            self.rc.effect()
        self.assertIsNone(self.rc.get_output())

    def test_missing_file(self):
        with self.assertLogs('plotsort', level='ERROR'):
            with self.assertRaises(RuntimeError):
                self.rc.setup("no_such_file.svg")
        self.assertEqual(self.rc.status_code, plot_status.STATUS_FILE_ERROR)

    def test_malformed_string(self):
        with self.assertLogs('plotsort', level='ERROR'):
            with self.assertRaises(RuntimeError):
                self.rc.setup("<svg><g></svg>")
        self.assertEqual(self.rc.status_code, plot_status.STATUS_PARSE_ERROR)

    def test_set_debug(self):
        self.rc.set_debug()
        with self.assertLogs('plotsort.plot_optimizations', level='DEBUG'):
            self.rc.setup(SAMPLE_SVG)
            self.rc.run()
        self.rc.set_debug(False)


class ReorderControlFileTestCase(FakeFsTestCase):

    def setUp(self):
        self.setUpPyfakefs()

    def test_malformed_file(self):
        self.fs.create_file("broken.svg", contents="<svg><polyline points='0,0 1,1'></svg>")
        rc = reorder_control.ReorderControl(default_logging=False)
        with self.assertLogs('plotsort', level='ERROR'):
            with self.assertRaises(RuntimeError):
                rc.setup("broken.svg")
        self.assertEqual(rc.status_code, plot_status.STATUS_PARSE_ERROR)

    def test_file_input(self):
        self.fs.create_file("drawing.svg", contents="""<svg xmlns="http://www.w3.org/2000/svg">
            <g id="g1"><polyline id="two" points="5,5 6,6" /><polyline id="one" points="0,0 1,1" /></g>
            </svg>""")
        rc = reorder_control.ReorderControl(default_logging=False, user_message_fun=print)
        rc.setup("drawing.svg")
        self.assertEqual(polyline_ids(rc.run(output=True)), [["one", "two"]])
