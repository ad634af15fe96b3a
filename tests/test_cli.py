"""Tests for the pagination command line driver."""

import json
from types import SimpleNamespace

from PIL import Image

from quotepaging import cli
from quotepaging.cli import main
from quotepaging.ingest import sidecar_path
from quotepaging.models import RenderedDocument


def _write_quote(path, height):
    Image.new("RGB", (515, height), "white").save(path)


def test_writes_one_fragment_per_page(tmp_path):
    image = tmp_path / "quote.png"
    _write_quote(image, 2000)
    sidecar_path(image).write_text(
        json.dumps({"elements": [{"kind": "row", "top": 600, "bottom": 740}]})
    )
    out = tmp_path / "pages"

    status = main([str(image), "-o", str(out)])

    assert status == 0
    written = sorted(path.name for path in out.iterdir())
    assert written == ["quote-p1.png", "quote-p2.png", "quote-p3.png"]


def test_batch_profile_writes_jpeg(tmp_path):
    image = tmp_path / "brand-a.png"
    _write_quote(image, 500)
    out = tmp_path / "pages"

    status = main([str(image), "-o", str(out), "--profile", "batch"])

    assert status == 0
    assert [path.name for path in out.iterdir()] == ["brand-a-p1.jpg"]
    assert (out / "brand-a-p1.jpg").read_bytes()[:2] == b"\xff\xd8"


def test_invalid_margin_is_reported(tmp_path):
    image = tmp_path / "quote.png"
    _write_quote(image, 500)

    status = main([str(image), "-o", str(tmp_path / "pages"), "--margin", "400"])

    assert status == 2


def test_failed_document_sets_exit_status(tmp_path, monkeypatch):
    image = tmp_path / "quote.png"
    _write_quote(image, 500)

    def degenerate_documents(*, image_paths, on_error=None):
        for path in image_paths:
            yield RenderedDocument(path.stem, SimpleNamespace(width=0, height=0))

    monkeypatch.setattr(cli, "iter_documents", degenerate_documents)
    out = tmp_path / "pages"

    status = main([str(image), "-o", str(out)])

    assert status == 1
    assert list(out.iterdir()) == []


def test_unreadable_image_is_reported_and_batch_continues(tmp_path):
    first = tmp_path / "a.png"
    broken = tmp_path / "b.png"
    last = tmp_path / "c.png"
    _write_quote(first, 500)
    broken.write_bytes(b"not an image")
    _write_quote(last, 500)
    out = tmp_path / "pages"

    status = main([str(first), str(broken), str(last), "-o", str(out)])

    assert status == 1
    assert sorted(path.name for path in out.iterdir()) == ["a-p1.png", "c-p1.png"]


def test_malformed_sidecar_is_reported_and_batch_continues(tmp_path):
    first = tmp_path / "a.png"
    last = tmp_path / "c.png"
    _write_quote(first, 500)
    _write_quote(last, 500)
    sidecar_path(first).write_text(
        json.dumps({"elements": [{"kind": "banner", "top": 0, "bottom": 10}]})
    )
    out = tmp_path / "pages"

    status = main([str(first), str(last), "-o", str(out)])

    assert status == 1
    assert [path.name for path in out.iterdir()] == ["c-p1.png"]
