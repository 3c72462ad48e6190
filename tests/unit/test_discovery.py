"""
Tests for source discovery and ModulePath computation.
"""

import pytest

from monobundle.packaging.discovery import collect_sources, entry_key, files_from_path, module_key
from monobundle.packaging.manifest import Project
from monobundle.shared.errors import SourceError


def _project(root, files, entry="src/main.py"):
    return Project(
        name="t",
        output=root / "build",
        entry_point=root / entry,
        files=tuple(root / f for f in files),
        base_dir=root,
    )


class TestModuleKey:

    def test_strips_extension(self, tmp_path):
        assert module_key(tmp_path / "src" / "main.py", tmp_path) == "src/main"

    def test_package_init_files(self, tmp_path):
        assert module_key(tmp_path / "pkg" / "__init__.py", tmp_path) == "pkg/init"
        assert module_key(tmp_path / "pkg" / "init.py", tmp_path) == "pkg/init"

    def test_root_level_file(self, tmp_path):
        assert module_key(tmp_path / "main.py", tmp_path) == "main"

    def test_outside_base_dir(self, tmp_path):
        with pytest.raises(SourceError, match="outside the project directory"):
            module_key(tmp_path.parent / "elsewhere.py", tmp_path)


class TestFilesFromPath:

    def test_walks_directories_sorted(self, project):
        project.write("src/b.py", "")
        project.write("src/a.py", "")
        project.write("src/sub/c.py", "")
        project.write("src/notes.txt", "")
        project.write("src/__pycache__/a.cpython-311.py", "")
        project.write("src/.hidden/d.py", "")
        found = [p.relative_to(project.root).as_posix() for p in files_from_path(project.root / "src")]
        assert found == ["src/a.py", "src/b.py", "src/sub/c.py"]

    def test_single_file(self, project):
        path = project.write("one.py", "")
        assert files_from_path(path) == [path]


class TestCollectSources:

    def test_collects_and_includes_entry(self, project):
        project.write("src/main.py", "x = 1\n")
        project.write("lib/util.py", "y = 2\n")
        project.write("lib/pkg/__init__.py", "")
        sources = collect_sources(_project(project.root, ["lib"]))
        assert list(sources) == ["lib/pkg/init", "lib/util", "src/main"]
        assert sources["src/main"] == "x = 1\n"

    def test_entry_listed_twice_is_not_duplicate(self, project):
        project.write("src/main.py", "")
        sources = collect_sources(_project(project.root, ["src", "src/main.py"]))
        assert list(sources) == ["src/main"]

    def test_colliding_keys(self, project):
        project.write("src/main.py", "")
        project.write("pkg/__init__.py", "")
        project.write("pkg/init.py", "")
        with pytest.raises(SourceError, match="both map to module `pkg/init`"):
            collect_sources(_project(project.root, ["pkg"]))

    def test_entry_key(self, project):
        project.write("src/main.py", "")
        assert entry_key(_project(project.root, ["src"])) == "src/main"
