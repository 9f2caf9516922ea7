# tests/hotboot/content/test_bundle.py
import io
import zipfile

import json5
import pytest

from hotboot.content.bundle import decodeBundle
from hotboot.core.errors import ContentDecodeError, TemplateNotFoundError


def test_decode_names_templates_by_stem(bundleBytes):
    bundle = decodeBundle(bundleBytes(
        {"Cube": {"tags": ["demo"]}, "Sphere": {}},
        extra={"prefabs/readme.txt": b"ignored", "prefabs/": b""},
    ))

    assert bundle.templateNames() == ["Cube", "Sphere"]
    assert "Cube" in bundle
    cube = bundle.getTemplate("Cube")
    assert cube.entry == "prefabs/Cube.json5"
    assert cube.spec.tags == ["demo"]
    assert cube.spec.components == []


def test_plain_json_entries_are_templates(bundleBytes):
    bundle = decodeBundle(bundleBytes({}, extra={"Cube.json": b'{"properties": {"size": 2}}'}))
    assert bundle.getTemplate("Cube").spec.properties == {"size": 2}


def test_missing_template(bundleBytes):
    bundle = decodeBundle(bundleBytes({"Sphere": {}}))
    with pytest.raises(TemplateNotFoundError):
        bundle.getTemplate("Cube")


def test_not_an_archive():
    with pytest.raises(ContentDecodeError):
        decodeBundle(b"definitely not a zip")


@pytest.mark.parametrize("raw", [b"{tags: [", b'{"unknownKey": 1}', b'{"components": [{"fields": {}}]}'])
def test_bad_template(bundleBytes, raw):
    with pytest.raises(ContentDecodeError):
        decodeBundle(bundleBytes({}, extra={"prefabs/Cube.json5": raw}))


def test_duplicate_template_names(bundleBytes):
    data = bundleBytes({"Cube": {}}, extra={"other/Cube.json": b"{}"})
    with pytest.raises(ContentDecodeError) as excInfo:
        decodeBundle(data)
    assert "Duplicate template 'Cube'" in str(excInfo.value)


def test_corrupt_deflated_entry():
    entry = "prefabs/Cube.json5"
    payload = json5.dumps({"tags": ["demo"] * 50, "properties": {"note": "x" * 400}}).encode("utf-8")
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(entry, payload)
    data = bytearray(buf.getvalue())
    # Local file header is 30 bytes plus the entry name; the deflate stream follows
    start = 30 + len(entry)
    for idx in range(start, start + 8):
        data[idx] ^= 0xFF

    with pytest.raises(ContentDecodeError):
        decodeBundle(bytes(data))


@pytest.mark.parametrize("error", [RuntimeError("File is encrypted"), NotImplementedError("compression type 99")])
def test_unreadable_entry(bundleBytes, monkeypatch, error):
    data = bundleBytes({"Cube": {}})

    def failingRead(self, name, pwd=None):
        raise error

    monkeypatch.setattr(zipfile.ZipFile, "read", failingRead)
    with pytest.raises(ContentDecodeError) as excInfo:
        decodeBundle(data)
    assert excInfo.value.__cause__ is error
