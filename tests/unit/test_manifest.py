"""
Tests for build manifest loading (TOML and YAML).
"""

import logging

import pytest

from monobundle.packaging.manifest import load_manifest, parse_project
from monobundle.shared.errors import ManifestError


@pytest.fixture
def sources(project):
    project.write("src/main.py", "print('main')\n")
    project.write("src/util.py", "")
    project.write("vendor/zero.py", "")
    return project


class TestLoadManifest:

    def test_full_project(self, sources):
        path = sources.manifest("""
            require_function = "use"

            [[project]]
            name = "app"
            output = "dist"
            entry_point = "src/main.py"
            files = ["src", "vendor"]
            roots = ["", "vendor"]
        """)
        manifest = load_manifest(path)
        assert manifest.require_function == "use"
        assert len(manifest.projects) == 1

        project = manifest.get_project("app")
        base = path.resolve().parent
        assert project.base_dir == base
        assert project.entry_point == base / "src/main.py"
        assert project.files == (base / "src", base / "vendor")
        assert project.roots == ("", "vendor")
        assert project.output_file == base / "dist" / "app.py"

    def test_defaults(self, sources):
        path = sources.manifest("""
            [[project]]
            entry_point = "src/main.py"
            files = ["src"]
        """)
        manifest = load_manifest(path)
        project = manifest.projects[0]
        assert manifest.require_function == "require"
        assert project.name == "a"
        assert project.roots == ("",)
        assert project.output_file == path.resolve().parent / "build" / "a.py"

    def test_yaml_manifest(self, sources):
        path = sources.manifest(
            """
            require_function: require
            project:
              - name: app
                entry_point: src/main.py
                files: [src]
            """,
            name="build.yaml",
        )
        manifest = load_manifest(path)
        assert [p.name for p in manifest.projects] == ["app"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="could not find"):
            load_manifest(tmp_path / "build.toml")

    def test_missing_project_list(self, sources):
        path = sources.manifest('require_function = "require"\n')
        with pytest.raises(ManifestError, match=r"missing \[\[project\]\]"):
            load_manifest(path)

    def test_invalid_toml(self, sources):
        path = sources.manifest("[[project]\nname = \n")
        with pytest.raises(ManifestError, match="could not parse"):
            load_manifest(path)

    def test_unsupported_suffix(self, sources):
        path = sources.write("build.json", "{}")
        with pytest.raises(ManifestError, match="unsupported manifest format"):
            load_manifest(path)

    def test_invalid_require_function(self, sources):
        path = sources.manifest("""
            require_function = "not valid"
            [[project]]
            entry_point = "src/main.py"
            files = ["src"]
        """)
        with pytest.raises(ManifestError, match="valid identifier"):
            load_manifest(path)

    def test_invalid_projects_are_skipped(self, sources, caplog):
        path = sources.manifest("""
            [[project]]
            name = "no_entry"
            files = ["src"]

            [[project]]
            name = "bad_entry"
            entry_point = "src/nope.py"
            files = ["src"]

            [[project]]
            name = "bad_files"
            entry_point = "src/main.py"
            files = ["missing_dir"]

            [[project]]
            name = "no_files"
            entry_point = "src/main.py"

            [[project]]
            name = "good"
            entry_point = "src/main.py"
            files = ["src"]
        """)
        with caplog.at_level(logging.ERROR, logger="monobundle.packaging.manifest"):
            manifest = load_manifest(path)
        assert [p.name for p in manifest.projects] == ["good"]
        messages = caplog.text
        assert "missing an `entry_point`" in messages
        assert "invalid file in the `entry_point`" in messages
        assert "invalid file in the `files` list" in messages
        assert "missing a `files` list" in messages


class TestParseProject:

    def test_files_may_be_single_string(self, sources):
        project = parse_project({"entry_point": "src/main.py", "files": "src"}, sources.root)
        assert project.files == (sources.root / "src",)

    def test_rejects_non_string_roots(self, sources):
        table = {"entry_point": "src/main.py", "files": ["src"], "roots": [1, 2]}
        assert parse_project(table, sources.root) is None

    def test_rejects_non_table(self, sources):
        assert parse_project(["src"], sources.root) is None
