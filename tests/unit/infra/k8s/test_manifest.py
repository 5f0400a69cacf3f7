"""Tests for manifest file loading."""

from pathlib import Path

import pytest

from kubekit.infra.k8s.errors import ValidationError
from kubekit.infra.k8s.manifest import read_manifest


def test_single_document(tmp_path: Path) -> None:
    manifest = tmp_path / "pod.yaml"
    manifest.write_text("kind: Pod\nmetadata:\n  name: web\n")

    assert read_manifest(manifest) == {"kind": "Pod", "metadata": {"name": "web"}}


def test_multiple_documents_skip_empty(tmp_path: Path) -> None:
    manifest = tmp_path / "app.yaml"
    manifest.write_text(
        "---\nkind: Secret\nmetadata:\n  name: a\n---\n---\nkind: Service\nmetadata:\n  name: b\n"
    )

    docs = read_manifest(manifest)

    assert [d["kind"] for d in docs] == ["Secret", "Service"]


def test_empty_file(tmp_path: Path) -> None:
    manifest = tmp_path / "empty.yaml"
    manifest.write_text("")

    assert read_manifest(manifest) == []


def test_invalid_yaml(tmp_path: Path) -> None:
    manifest = tmp_path / "bad.yaml"
    manifest.write_text("kind: [Pod\n")

    with pytest.raises(ValidationError) as excinfo:
        read_manifest(manifest)

    assert excinfo.value.message.startswith("Error parsing YAML file")
    assert excinfo.value.details


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ValidationError) as excinfo:
        read_manifest(tmp_path / "missing.yaml")

    assert excinfo.value.message.startswith("Error reading file")


def test_directory(tmp_path: Path) -> None:
    with pytest.raises(ValidationError) as excinfo:
        read_manifest(tmp_path)

    assert excinfo.value.message.startswith("Error reading file")


def test_non_utf8_file(tmp_path: Path) -> None:
    manifest = tmp_path / "latin1.yaml"
    manifest.write_bytes(b"\xff\xfekind: Pod\n")

    with pytest.raises(ValidationError) as excinfo:
        read_manifest(manifest)

    assert excinfo.value.message.startswith("Error reading file")


def test_utf8_content(tmp_path: Path) -> None:
    manifest = tmp_path / "cm.yaml"
    manifest.write_bytes("kind: ConfigMap\ndata:\n  greeting: h\u00e9llo\n".encode("utf-8"))

    assert read_manifest(manifest)["data"]["greeting"] == "h\u00e9llo"
