"""Tests for icon discovery."""

from __future__ import annotations

import pytest

from svgsprite.engine.discovery import IconScanner, is_icon_path, resolve_roots
from svgsprite.errors import DiscoveryError
from tests.conftest import CHECK_SVG, write_icon


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "icons"
    write_icon(root, "zeta.svg", CHECK_SVG)
    write_icon(root, "alpha.svg", CHECK_SVG)
    write_icon(root, "outline/b.svg", CHECK_SVG)
    write_icon(root, "outline/a.svg", CHECK_SVG)
    write_icon(root, "brand/logo.svg", CHECK_SVG)
    write_icon(root, "brand/logo.png", "not svg")
    (root / "empty.svg.d").mkdir()
    return root


class TestIconScanner:
    def test_finds_only_svg_files(self, tree):
        names = [p.name for p in IconScanner([tree]).scan()]
        assert "logo.png" not in names
        assert "empty.svg.d" not in names
        assert len(names) == 5

    def test_order_is_lexical(self, tree):
        paths = IconScanner([tree]).scan()
        rel = [p.relative_to(tree).as_posix() for p in paths]
        assert rel == ["alpha.svg", "zeta.svg", "brand/logo.svg", "outline/a.svg", "outline/b.svg"]

    def test_order_is_stable(self, tree):
        assert IconScanner([tree]).scan() == IconScanner([tree]).scan()

    def test_multiple_roots_in_configured_order(self, tmp_path):
        a = tmp_path / "a"
        b = tmp_path / "b"
        write_icon(a, "x.svg", CHECK_SVG)
        write_icon(b, "y.svg", CHECK_SVG)
        names = [p.name for p in IconScanner([b, a]).scan()]
        assert names == ["y.svg", "x.svg"]

    def test_empty_dir(self, tmp_path):
        assert IconScanner([tmp_path]).scan() == []

    def test_missing_root_is_fatal(self, tmp_path):
        with pytest.raises(DiscoveryError) as exc:
            IconScanner([tmp_path / "nope"]).scan()
        assert exc.value.root == tmp_path / "nope"

    def test_root_that_is_a_file_is_fatal(self, tmp_path):
        f = write_icon(tmp_path, "file.svg", CHECK_SVG)
        with pytest.raises(DiscoveryError):
            IconScanner([f]).scan()


def test_resolve_roots_relative_to_cwd(tmp_path):
    roots = resolve_roots(["icons", str(tmp_path / "abs")], cwd=tmp_path)
    assert roots == [(tmp_path / "icons").resolve(), (tmp_path / "abs").resolve()]


def test_is_icon_path():
    assert is_icon_path("/a/b/c.svg")
    assert not is_icon_path("/a/b/c.svg.tmp")
    assert not is_icon_path("/a/b/c.png")
