"""Tests for Terraform JSON conversion."""

import json

import pytest

from grafana_tfgen.generate.convert import convert_file, convert_to_tf_json, to_terraform_json
from grafana_tfgen.generate.errors import HCLParseError


class TestToTerraformJson:
    def test_resources_folded_by_type_and_name(self):
        parsed = {
            "resource": [
                {"grafana_folder": {"a": {"title": "A"}}},
                {"grafana_folder": {"b": {"title": "B"}}},
                {"grafana_dashboard": {"d": {"config_json": "{}"}}},
            ]
        }

        assert to_terraform_json(parsed) == {
            "resource": {
                "grafana_folder": {"a": {"title": "A"}, "b": {"title": "B"}},
                "grafana_dashboard": {"d": {"config_json": "{}"}},
            }
        }

    def test_providers_are_lists_per_name(self):
        parsed = {"provider": [{"grafana": {"url": "a"}}, {"grafana": {"alias": "b", "url": "b"}}]}

        assert to_terraform_json(parsed) == {
            "provider": {"grafana": [{"url": "a"}, {"alias": "b", "url": "b"}]}
        }

    def test_import_references_unwrapped(self):
        parsed = {
            "import": [
                {"to": "${grafana_folder.abc}", "id": "abc", "provider": "${grafana.stack-a}"},
            ]
        }

        assert to_terraform_json(parsed) == {
            "import": [{"to": "grafana_folder.abc", "id": "abc", "provider": "grafana.stack-a"}]
        }

    def test_unlabeled_blocks_kept_as_lists(self):
        parsed = {"terraform": [{"required_providers": [{"grafana": {"source": "grafana/grafana"}}]}]}

        assert to_terraform_json(parsed) == parsed


class TestConvertFile:
    def test_replaces_tf_with_tf_json(self, tmp_path):
        path = tmp_path / "imports.tf"
        path.write_text('import {\n  to = grafana_folder.abc\n  id = "abc"\n}\n')

        target = convert_file(path)

        assert target == tmp_path / "imports.tf.json"
        assert not path.exists()
        document = json.loads(target.read_text())
        (block,) = document["import"]
        assert block["to"] == "grafana_folder.abc"
        assert block["id"] == "abc"

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "broken.tf"
        path.write_text('resource "a" "b" {\n')

        with pytest.raises(HCLParseError, match="broken.tf"):
            convert_file(path)

        assert path.exists()

    def test_converts_every_tf_file(self, tmp_path):
        (tmp_path / "provider.tf").write_text('provider "grafana" {\n  url = "https://g.example.com"\n}\n')
        (tmp_path / "resources.tf").write_text('resource "grafana_folder" "abc" {\n  title = "abc"\n}\n')
        (tmp_path / "notes.txt").write_text("left alone")

        converted = convert_to_tf_json(tmp_path)

        assert [p.name for p in converted] == ["provider.tf.json", "resources.tf.json"]
        assert (tmp_path / "notes.txt").exists()
        provider = json.loads((tmp_path / "provider.tf.json").read_text())
        assert provider["provider"]["grafana"][0]["url"] == "https://g.example.com"
