"""Tests for dataset module and CLI."""

import json

import pytest
import yaml
from click.testing import CliRunner
from pydantic import ValidationError

from entitylinks.cli.main import cli
from entitylinks.core.codec import IdCodec
from entitylinks.core.errors import InvalidArgumentError
from entitylinks.core.resolver import LinkResolver
from entitylinks.dataset import Dataset


@pytest.fixture
def sample_dataset_data():
    """Blog dataset with an eager user link and lazy comments."""
    return {
        "schema_version": "1.0",
        "types": {
            "user": {
                "records": [
                    {"id": 1, "name": "Ada"},
                    {"id": 2, "name": "Grace"},
                ],
            },
            "post": {
                "records": [
                    {"id": 1001, "title": "Hello", "user_id": 1, "comment_ids": [1, 2]},
                    {"id": 1002, "title": "Again", "user_id": 2, "comment_ids": []},
                ],
                "fields": ["title"],
                "links": {
                    "user": "user_id",
                    "comment": {"field": "comment_ids", "lazy": True},
                },
            },
            "comment": {
                "records": [
                    {"id": 1, "body": "First", "post_id": 1001},
                    {"id": 2, "body": "Second", "post_id": 1001},
                ],
                "links": {"post": "post_id"},
            },
        },
    }


@pytest.fixture
def dataset_file(tmp_path, sample_dataset_data):
    path = tmp_path / "dataset.yml"
    path.write_text(yaml.safe_dump(sample_dataset_data, sort_keys=False))
    return path


class TestDataset:
    """Tests for Dataset class."""

    def test_from_dict(self, sample_dataset_data):
        dataset = Dataset.from_dict(sample_dataset_data)

        assert len(dataset) == 3
        assert "post" in dataset
        assert dataset.get("user", 1) == {"id": 1, "name": "Ada"}
        assert dataset.get("user", 99) is None
        assert dataset.get("ghost", 1) is None

    def test_load(self, dataset_file):
        dataset = Dataset.load(dataset_file)

        assert dataset.schema_version == "1.0"
        assert [t.name for t in dataset] == ["user", "post", "comment"]

    def test_link_shorthand(self, sample_dataset_data):
        dataset = Dataset.from_dict(sample_dataset_data)
        post = next(t for t in dataset if t.name == "post")

        assert post.link_targets == ["user", "comment"]
        assert post.lazy_targets == ["comment"]

    def test_render_fields(self, sample_dataset_data):
        dataset = Dataset.from_dict(sample_dataset_data)
        user, post, _ = dataset.types()

        assert user.render(dataset.get("user", 1)) == {"name": "Ada"}
        assert post.render(dataset.get("post", 1001)) == {"title": "Hello"}

    def test_undeclared_link_target(self, sample_dataset_data):
        sample_dataset_data["types"]["user"]["links"] = {"team": "team_id"}

        with pytest.raises(ValidationError):
            Dataset.from_dict(sample_dataset_data)

    def test_bad_record_ids(self, sample_dataset_data):
        sample_dataset_data["types"]["user"]["records"].append({"id": 1, "name": "Dup"})

        with pytest.raises(ValidationError):
            Dataset.from_dict(sample_dataset_data)

    def test_not_a_mapping(self, tmp_path):
        """Test a top-level YAML list is rejected cleanly."""
        with pytest.raises(InvalidArgumentError):
            Dataset.from_dict(["user", "post"])

        path = tmp_path / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(InvalidArgumentError):
            Dataset.load(path)

    def test_validate_dangling(self, sample_dataset_data):
        sample_dataset_data["types"]["post"]["records"][1]["user_id"] = 42
        dataset = Dataset.from_dict(sample_dataset_data)

        errors = dataset.validate()
        assert len(errors) == 1
        assert "missing user 42" in errors[0]

    def test_resolve_over_registry(self, sample_dataset_data):
        """Test the registry built from a dataset resolves lazily."""
        codec = IdCodec()
        resolver = LinkResolver(Dataset.from_dict(sample_dataset_data).build_registry(), codec)

        default = resolver.resolve_by_id("post", 1001)
        assert [(l.type, codec.decode(l.type, l.id)) for l in default] == [("user", 1)]

        comments = resolver.resolve_by_id("post", 1001, whitelist=["comment"])
        assert [codec.decode("comment", l.id) for l in comments] == [1, 2]
        assert comments[0].data == {"body": "First", "post_id": 1001}


class TestCli:
    """Tests for the command line interface."""

    @pytest.fixture
    def runner(self, monkeypatch):
        for key in ("ENTITYLINKS_SALT", "ENTITYLINKS_MIN_LENGTH", "ENTITYLINKS_ALPHABET"):
            monkeypatch.delenv(key, raising=False)
        return CliRunner()

    def invoke(self, runner, tmp_path, dataset_file, *args):
        base = ["--config", str(tmp_path / "none.yml"), "--dataset", str(dataset_file)]
        return runner.invoke(cli, base + list(args))

    def test_encode_decode(self, runner, tmp_path, dataset_file):
        encoded = self.invoke(runner, tmp_path, dataset_file, "encode", "user", "42")
        assert encoded.exit_code == 0
        hashid = encoded.output.strip()
        assert hashid == IdCodec().encode("user", 42)

        decoded = self.invoke(runner, tmp_path, dataset_file, "decode", hashid, "--type", "user")
        assert decoded.exit_code == 0
        assert decoded.output.strip() == "42"

        untyped = self.invoke(runner, tmp_path, dataset_file, "decode", hashid)
        assert untyped.output.strip() == "42"

    def test_decode_wrong_type(self, runner, tmp_path, dataset_file):
        hashid = IdCodec().encode("user", 42)

        result = self.invoke(runner, tmp_path, dataset_file, "decode", hashid, "--type", "post")
        assert result.exit_code == 1
        assert "Decode error" in result.output

    def test_resolve_json(self, runner, tmp_path, dataset_file):
        result = self.invoke(runner, tmp_path, dataset_file, "resolve", "post", "1001", "--format", "json")

        assert result.exit_code == 0
        links = json.loads(result.output)
        assert [link["type"] for link in links] == ["user"]
        assert links[0]["data"] == {"name": "Ada"}

    def test_resolve_include(self, runner, tmp_path, dataset_file):
        result = self.invoke(
            runner, tmp_path, dataset_file, "resolve", "post", "1001", "-i", "comment", "-f", "json"
        )
        assert [link["type"] for link in json.loads(result.output)] == ["comment", "comment"]

        empty = self.invoke(runner, tmp_path, dataset_file, "resolve", "post", "1001", "-i", "", "-f", "json")
        assert json.loads(empty.output) == []

    def test_resolve_unknown_include(self, runner, tmp_path, dataset_file):
        result = self.invoke(runner, tmp_path, dataset_file, "resolve", "post", "1001", "-i", "ghost")

        assert result.exit_code == 1
        assert "ghost" in result.output

    def test_resolve_missing_dataset(self, runner, tmp_path):
        result = self.invoke(runner, tmp_path, tmp_path / "nope.yml", "resolve", "post", "1")

        assert result.exit_code == 1
        assert "Dataset not found" in result.output

    @pytest.mark.parametrize("content", ["- a\n- b\n", "types: [unclosed\n"])
    def test_malformed_dataset(self, runner, tmp_path, content):
        """Test unreadable dataset files are reported without a traceback."""
        path = tmp_path / "bad.yml"
        path.write_text(content)

        for args in (["types"], ["resolve", "post", "1"]):
            result = self.invoke(runner, tmp_path, path, *args)
            assert result.exit_code == 1
            assert "Invalid dataset" in result.output
            assert not isinstance(result.exception, (TypeError, yaml.YAMLError))

    def test_types(self, runner, tmp_path, dataset_file):
        result = self.invoke(runner, tmp_path, dataset_file, "types")

        assert result.exit_code == 0
        for name in ("user", "post", "comment"):
            assert name in result.output

    def test_validate(self, runner, tmp_path, dataset_file, sample_dataset_data):
        ok = self.invoke(runner, tmp_path, dataset_file, "validate")
        assert ok.exit_code == 0
        assert "Validation passed" in ok.output

        sample_dataset_data["types"]["comment"]["records"][0]["post_id"] = 9999
        broken = tmp_path / "broken.yml"
        broken.write_text(yaml.safe_dump(sample_dataset_data, sort_keys=False))

        failed = self.invoke(runner, tmp_path, broken, "validate")
        assert failed.exit_code == 1
        assert "Validation failed" in failed.output
