"""Tests for value_objects -- confidence clamping and the project view."""

from codebase_profiler.domain.value_objects import clamp_confidence


def test_clamp_confidence():
    assert clamp_confidence(-5) == 0
    assert clamp_confidence(42.5) == 42.5
    assert clamp_confidence(250) == 100


def test_view_normalises_paths(make_view):
    view = make_view(("Src\\Components\\Button.JSX", "x"), ("README.md", "y"))
    assert view.paths == ("src/components/button.jsx", "readme.md")
    assert view.basenames == frozenset({"button.jsx", "readme.md"})
    assert view.directories == frozenset({"src", "src/components"})
    assert view.content == "x\ny"


def test_view_queries(make_view):
    view = make_view(("packages/core/lib/index.ts", ""), ("Dockerfile", ""))
    assert view.has_path("core/lib")
    assert view.has_suffix(".ts", ".js")
    assert view.has_basename("dockerfile")
    assert view.has_segment("lib")
    assert not view.has_segment("core/lib")
    assert not view.has_basename("index.js")


def test_empty_view(make_view):
    view = make_view()
    assert view.paths == ()
    assert view.content == ""
    assert not view.has_segment("src")
