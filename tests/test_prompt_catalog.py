"""Tests for the prompt catalog and prompt definition parsing."""

from pathlib import PurePosixPath

import pytest

from manifest_mcp_server.exceptions import MalformedManifestError
from manifest_mcp_server.mcp_server.prompts import (
    DirectoryAttachment,
    FixedAttachment,
    PromptCatalog,
    PromptDefinition,
)


@pytest.fixture
def catalog(manifest):
    return PromptCatalog(manifest.root / "prompts")


class TestPromptDefinition:
    """Test parsing of individual prompt files."""

    def test_full_definition(self, manifest):
        path = manifest.prompt(
            "ms/full.json",
            {
                "id": "full",
                "name": "Full prompt",
                "description": "Everything set",
                "arguments": [{"name": "service", "required": True}],
                "template": "Describe {{service}}",
                "instructions": "rules.md",
                "resources": ["a.md", "b.md"],
                "attachments": [
                    {"kind": "directory", "path": "company"},
                    {"kind": "fixed", "name": "handbook.md"},
                ],
            },
        )

        definition = PromptDefinition.from_file(path, PurePosixPath("ms/full.json"))

        assert definition.id == "full"
        assert definition.template == "Describe {{service}}"
        assert definition.resources == ["a.md", "b.md"]
        assert isinstance(definition.attachments[0], DirectoryAttachment)
        assert isinstance(definition.attachments[1], FixedAttachment)
        assert definition.source == PurePosixPath("ms/full.json")

    def test_args_alias(self, manifest):
        path = manifest.prompt("p.json", {"id": "p", "args": [{"name": "x"}]})
        definition = PromptDefinition.from_file(path, PurePosixPath("p.json"))
        assert definition.argument_dicts() == [{"name": "x"}]

    def test_argument_extra_keys_preserved(self, manifest):
        path = manifest.prompt(
            "p.json", {"id": "p", "arguments": [{"name": "x", "default": "y"}]}
        )
        definition = PromptDefinition.from_file(path, PurePosixPath("p.json"))
        assert definition.argument_dicts() == [{"name": "x", "default": "y"}]

    def test_unknown_keys_ignored(self, manifest):
        path = manifest.prompt("p.json", {"id": "p", "owner": "team-a"})
        definition = PromptDefinition.from_file(path, PurePosixPath("p.json"))
        assert definition.id == "p"

    def test_catalog_name_falls_back_to_stem(self, manifest):
        path = manifest.prompt("nested/anonymous.json", {"template": "Hi"})
        definition = PromptDefinition.from_file(path, PurePosixPath("nested/anonymous.json"))
        assert definition.catalog_name == "anonymous"

    def test_invalid_json(self, manifest):
        path = manifest.prompt("broken.json", "{not json")
        with pytest.raises(MalformedManifestError) as exc_info:
            PromptDefinition.from_file(path, PurePosixPath("broken.json"))
        assert exc_info.value.kind == "MalformedManifest"

    def test_non_object_document(self, manifest):
        path = manifest.prompt("list.json", [1, 2, 3])
        with pytest.raises(MalformedManifestError):
            PromptDefinition.from_file(path, PurePosixPath("list.json"))

    def test_wrong_field_type(self, manifest):
        path = manifest.prompt("bad.json", {"id": "bad", "resources": "not-a-list"})
        with pytest.raises(MalformedManifestError):
            PromptDefinition.from_file(path, PurePosixPath("bad.json"))

    def test_unknown_attachment_kind(self, manifest):
        path = manifest.prompt("bad.json", {"id": "bad", "attachments": [{"kind": "url"}]})
        with pytest.raises(MalformedManifestError):
            PromptDefinition.from_file(path, PurePosixPath("bad.json"))


class TestListAll:
    """Test recursive catalog listing."""

    def test_walks_depth_first(self, manifest, catalog):
        manifest.prompt("a.json", {"id": "a"})
        manifest.prompt("m/b.json", {"id": "b"})
        manifest.prompt("m/deep/c.json", {"id": "c"})
        manifest.prompt("z.json", {"id": "z"})

        names = [p.catalog_name for p in catalog.list_all()]

        assert names == ["a", "b", "c", "z"]

    def test_ignores_other_suffixes(self, manifest, catalog):
        manifest.prompt("a.json", {"id": "a"})
        manifest.prompt("notes.txt", "not a prompt")

        assert [p.id for p in catalog.list_all()] == ["a"]

    def test_skips_malformed_files(self, manifest, catalog):
        manifest.prompt("a.json", {"id": "a"})
        manifest.prompt("b.json", "{broken")
        manifest.prompt("c.json", {"id": "c"})

        assert [p.id for p in catalog.list_all()] == ["a", "c"]

    def test_missing_root(self, tmp_path):
        assert PromptCatalog(tmp_path / "missing").list_all() == []

    def test_custom_suffix(self, manifest):
        manifest.prompt("a.prompt", {"id": "a"})
        manifest.prompt("b.json", {"id": "b"})
        catalog = PromptCatalog(manifest.root / "prompts", suffix=".prompt")

        assert [p.id for p in catalog.list_all()] == ["a"]


class TestResolveById:
    """Test prompt resolution by identifier."""

    def test_fast_path_by_file_name(self, manifest, catalog):
        manifest.prompt("greet.json", {"id": "greet", "template": "Hi"})

        resolved = catalog.resolve_by_id("greet")

        assert resolved.definition.template == "Hi"
        assert resolved.relative_path == PurePosixPath("greet.json")
        assert resolved.prompt_directory == ""

    def test_fast_path_without_id_field(self, manifest, catalog):
        manifest.prompt("plain.json", {"template": "Plain"})

        resolved = catalog.resolve_by_id("plain")

        assert resolved.definition.template == "Plain"

    def test_recursive_search_by_id(self, manifest, catalog):
        manifest.prompt("microservices/fetch.json", {"id": "fetch-ms-details"})

        resolved = catalog.resolve_by_id("fetch-ms-details")

        assert resolved.relative_path == PurePosixPath("microservices/fetch.json")
        assert resolved.prompt_directory == "microservices"

    def test_nested_prompt_directory(self, manifest, catalog):
        manifest.prompt("team/ms/deep.json", {"id": "deep"})

        resolved = catalog.resolve_by_id("deep")

        assert resolved.prompt_directory == "team/ms"

    def test_first_match_wins(self, manifest, catalog):
        manifest.prompt("a/dup.json", {"id": "dup", "template": "first"})
        manifest.prompt("b/dup.json", {"id": "dup", "template": "second"})

        assert catalog.resolve_by_id("dup").definition.template == "first"

    def test_nested_file_name_is_not_fast_path(self, manifest, catalog):
        manifest.prompt("ms/other.json", {"id": "different"})

        assert catalog.resolve_by_id("other") is None

    def test_unknown_id(self, manifest, catalog):
        manifest.prompt("a.json", {"id": "a"})
        assert catalog.resolve_by_id("nope") is None

    @pytest.mark.parametrize("prompt_id", [None, ""])
    def test_empty_id(self, catalog, prompt_id):
        assert catalog.resolve_by_id(prompt_id) is None

    def test_id_with_separator_does_not_escape_root(self, manifest, catalog):
        (manifest.root / "outside.json").write_text('{"id": "outside"}', encoding="utf-8")
        assert catalog.resolve_by_id("../outside") is None

    def test_malformed_fast_path_falls_back_to_search(self, manifest, catalog):
        manifest.prompt("x.json", "{broken")
        manifest.prompt("dir/real.json", {"id": "x", "template": "found"})

        assert catalog.resolve_by_id("x").definition.template == "found"

    def test_every_listed_prompt_resolves_to_same_content(self, manifest, catalog):
        manifest.prompt("a.json", {"id": "a", "template": "A"})
        manifest.prompt("m/b.json", {"id": "b", "template": "B"})
        manifest.prompt("m/n/c.json", {"id": "c", "template": "C", "resources": ["r.md"]})

        for prompt in catalog.list_all():
            resolved = catalog.resolve_by_id(prompt.id)
            assert resolved.definition == prompt
