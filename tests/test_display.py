"""Tests for utils/display.py"""

import numpy as np
from rich.console import Console
from rich.tree import Tree

from componenttree import build_filtered_component_tree, build_mser_tree
from utils.display import format_forest, print_forest, render_forest


def valley_tree():
    return build_filtered_component_tree(
        np.array([0, 1, 2, 1, 0]), min_size=1, max_size=5, dark_to_bright=True
    )


class TestRendering:
    def test_render_forest(self):
        rendered = render_forest(valley_tree(), "valley")
        assert isinstance(rendered, Tree)
        assert len(rendered.children) == 1
        assert len(rendered.children[0].children) == 2

    def test_format_forest(self):
        text = format_forest(valley_tree(), "valley")
        lines = text.splitlines()
        assert "valley" in lines[0]
        assert "(3 nodes)" in lines[0]
        assert "value=2..2 size=5..5" in text
        assert text.count("value=0..1 size=1..2") == 2

    def test_parent_before_children(self):
        text = format_forest(valley_tree())
        assert text.index("size=5..5") < text.index("size=1..2")

    def test_empty_forest(self):
        tree = build_mser_tree(
            np.full((3, 3), 1), 1, 1, 9, 1.0, 0.0, dark_to_bright=True
        )
        text = format_forest(tree, "msers")
        assert "(0 nodes)" in text

    def test_rich_protocol(self):
        console = Console(width=80, record=True, color_system=None)
        with console.capture() as capture:
            console.print(valley_tree())
        assert "FilteredComponentTree" in capture.get()

    def test_print_forest(self, capsys):
        print_forest(valley_tree(), "printed")
        assert "printed" in capsys.readouterr().out
