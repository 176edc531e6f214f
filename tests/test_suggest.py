"""
Unit tests for the suggester: FileCategorizer, TypeInferencer, MessageSynthesizer.

Run with:
    pytest tests/test_suggest.py -v
"""

import pytest

from smartgit.config import Config
from smartgit.git.changes import ChangeKind, FileChange, paths_by_kind
from smartgit.suggest import (
    FileCategorizer, MessageSynthesizer, TypeInferencer, format_message, infer_feature,
)
from smartgit.suggest.inferencer import common_directory


def make_files(*specs):
    """Build FileChanges from (path, kind) pairs."""
    return [FileChange(path=path, kind=kind) for path, kind in specs]


@pytest.fixture
def categorizer():
    return FileCategorizer()


@pytest.fixture
def suggest(categorizer):
    """Return a function mapping FileChanges to (type, scope, description)."""
    inferencer = TypeInferencer()
    synthesizer = MessageSynthesizer()

    def _suggest(files):
        paths = [f.path for f in files]
        categorized = categorizer.categorize(paths)
        by_kind = paths_by_kind(files)
        commit_type, scope = inferencer.infer(paths, categorized, by_kind)
        return commit_type, scope, synthesizer.describe(categorized, by_kind, files)

    return _suggest


# ---------------------------------------------------------------------------
# FileCategorizer
# ---------------------------------------------------------------------------

class TestFileCategorizer:
    """FileCategorizer.bucket_for() pattern table."""

    @pytest.mark.parametrize("path", [
        "README.md",
        "docs/guide.md",
        "LICENSE",
        "CHANGELOG",
        "notes.txt",
    ])
    def test_documentation(self, categorizer, path):
        assert categorizer.bucket_for(path) == "documentation"

    @pytest.mark.parametrize("path", [
        "test/foo.spec.js",
        "src/utils.test.ts",
        "__tests__/App.js",
        "tests/test_main.py",
    ])
    def test_test_files(self, categorizer, path):
        assert categorizer.bucket_for(path) == "test"

    @pytest.mark.parametrize("path", [
        "package.json",
        "docker-compose.yml",
        "pyproject.toml",
        "app.config.js",
        "config/settings.py",
        ".env.local",
    ])
    def test_configuration(self, categorizer, path):
        assert categorizer.bucket_for(path) == "configuration"

    @pytest.mark.parametrize("path", [
        "styles/main.css",
        "theme.scss",
        "button.style.ts",
    ])
    def test_style(self, categorizer, path):
        assert categorizer.bucket_for(path) == "style"

    @pytest.mark.parametrize("path", [
        "src/app.js",
        "lib/parser.py",
        "main.go",
    ])
    def test_source(self, categorizer, path):
        assert categorizer.bucket_for(path) == "source"

    def test_priority_documentation_before_test(self, categorizer):
        # Matches both the docs and test patterns
        assert categorizer.bucket_for("tests/README.md") == "documentation"

    def test_case_insensitive(self, categorizer):
        assert categorizer.bucket_for("Docs/INSTALL.MD") == "documentation"

    def test_every_path_in_exactly_one_bucket(self, categorizer):
        paths = ["README.md", "src/a.py", "tests/test_a.py", "setup.toml", "site.css", "src/b.py"]
        categorized = categorizer.categorize(paths)
        assigned = [p for bucket in categorized.values() for p in bucket]
        assert sorted(assigned) == sorted(paths)
        assert set(categorized) == {"documentation", "test", "configuration", "style", "source"}

    def test_order_independent(self, categorizer):
        paths = ["src/a.py", "README.md", "tests/x.py"]
        forward = {p: categorizer.bucket_for(p) for p in paths}
        categorizer.categorize(reversed(paths))
        assert {p: categorizer.bucket_for(p) for p in paths} == forward

    def test_custom_pattern_table(self):
        config = Config(file_patterns={"style": [".styl"], "documentation": [".adoc"]})
        categorizer = FileCategorizer(config)
        assert categorizer.bucket_for("guide.adoc") == "documentation"
        assert categorizer.bucket_for("theme.styl") == "style"
        assert categorizer.bucket_for("README.md") == "source"

    def test_priority_ignores_pattern_table_order(self):
        config = Config(file_patterns={"style": [".css"], "test": ["tests/"]})
        categorizer = FileCategorizer(config)
        assert categorizer.bucket_for("tests/app.css") == "test"
        assert [bucket for bucket, _ in categorizer.rules] == ["test", "style"]

    def test_unknown_bucket_is_ignored(self):
        config = Config(file_patterns={"vendor": ["vendor/"], "style": [".css"]})
        categorizer = FileCategorizer(config)
        categorized = categorizer.categorize(["vendor/lib.js", "site.css"])
        assert categorized["source"] == ["vendor/lib.js"]
        assert "vendor" not in categorized


# ---------------------------------------------------------------------------
# TypeInferencer
# ---------------------------------------------------------------------------

class TestInferType:
    """Commit type decision order."""

    def test_docs_only(self, suggest):
        files = make_files(("README.md", ChangeKind.MODIFIED), ("docs/api.md", ChangeKind.CREATED))
        assert suggest(files)[0] == "docs"

    def test_single_new_spec_file(self, suggest):
        files = make_files(("test/foo.spec.js", ChangeKind.CREATED))
        commit_type, scope, description = suggest(files)
        assert commit_type == "test"
        assert scope == "foo"
        assert description == "add tests"

    def test_tests_only_multiple(self, suggest):
        files = make_files(("test/foo.spec.js", ChangeKind.CREATED), ("test/bar.spec.js", ChangeKind.CREATED))
        commit_type, scope, description = suggest(files)
        assert commit_type == "test"
        assert description == "add tests"

    def test_config_only_is_chore(self, suggest):
        files = make_files(("package.json", ChangeKind.MODIFIED), (".eslintrc.yml", ChangeKind.MODIFIED))
        assert suggest(files)[0] == "chore"

    def test_style_only(self, suggest):
        files = make_files(("a.css", ChangeKind.MODIFIED), ("b.scss", ChangeKind.MODIFIED))
        assert suggest(files)[0] == "style"

    def test_only_created_is_feat(self, suggest):
        files = make_files(("src/bugfix.js", ChangeKind.CREATED), ("src/other.js", ChangeKind.CREATED))
        # New-files-only check runs before the fix keyword check
        assert suggest(files)[0] == "feat"

    def test_fix_keyword(self, suggest):
        files = make_files(("src/bugfix.js", ChangeKind.MODIFIED), ("src/other.js", ChangeKind.MODIFIED))
        assert suggest(files)[0] == "fix"

    def test_refactor_keyword(self, suggest):
        files = make_files(("src/refactor/io.py", ChangeKind.MODIFIED), ("src/app.py", ChangeKind.MODIFIED))
        assert suggest(files)[0] == "refactor"

    def test_modified_source_defaults_to_feat(self, suggest):
        files = make_files(("src/app.py", ChangeKind.MODIFIED), ("src/cli.py", ChangeKind.MODIFIED))
        assert suggest(files)[0] == "feat"

    def test_mixed_docs_and_source(self, suggest):
        files = [
            FileChange("src/app.js", ChangeKind.MODIFIED, 3, 1),
            FileChange("README.md", ChangeKind.CREATED),
        ]
        # Source present and something modified, so neither docs nor new-files-only applies
        assert suggest(files)[0] == "feat"

    def test_no_source_falls_back_to_default(self):
        inferencer = TypeInferencer()
        categorized = {"documentation": [], "test": [], "configuration": [], "style": [], "source": []}
        assert inferencer.infer_type(categorized, {}) == "chore"

    def test_custom_fix_tokens(self):
        config = Config(fix_tokens=["hotfix"])
        inferencer = TypeInferencer(config)
        categorized = {"source": ["src/hotfix.py", "src/app.py"]}
        by_kind = {ChangeKind.MODIFIED: ["src/hotfix.py", "src/app.py"]}
        assert inferencer.infer_type(categorized, by_kind) == "fix"


class TestInferScope:

    @pytest.fixture
    def inferencer(self):
        return TypeInferencer()

    def test_single_file_uses_stem(self, inferencer):
        assert inferencer.infer_scope(["src/UserProfile.test.js"], {}) == "userprofile"

    def test_single_dotfile_has_no_scope(self, inferencer):
        assert inferencer.infer_scope([".env"], {}) is None

    def test_common_directory(self, inferencer):
        paths = ["src/auth/login.py", "src/auth/logout.py"]
        assert inferencer.infer_scope(paths, {}) == "auth"

    def test_falls_back_to_bucket_scope(self, inferencer):
        paths = ["README.md", "docs/guide.md"]
        categorized = {"documentation": paths}
        assert inferencer.infer_scope(paths, categorized) == "docs"

    def test_tests_bucket_scope(self, inferencer):
        paths = ["a.test.js", "b.spec.js"]
        assert inferencer.infer_scope(paths, {"test": paths}) == "tests"

    def test_no_scope_for_mixed_root_files(self, inferencer):
        paths = ["app.py", "README.md"]
        categorized = {"source": ["app.py"], "documentation": ["README.md"]}
        assert inferencer.infer_scope(paths, categorized) is None

    def test_common_directory_helper(self):
        assert common_directory(["a/b/c.py", "a/b/d/e.py"]) == "a/b"
        assert common_directory(["a/x.py", "b/y.py"]) is None
        assert common_directory(["top.py"]) == "."
        assert common_directory([]) is None


# ---------------------------------------------------------------------------
# MessageSynthesizer
# ---------------------------------------------------------------------------

class TestDescribe:

    @pytest.mark.parametrize("kind, expected", [
        (ChangeKind.CREATED, "add parser.py"),
        (ChangeKind.DELETED, "remove parser.py"),
        (ChangeKind.MODIFIED, "update parser.py"),
    ])
    def test_single_file(self, suggest, kind, expected):
        files = make_files(("lib/parser.py", kind))
        assert suggest(files)[2] == expected

    def test_single_rename_uses_general_rules(self, suggest):
        files = [FileChange("new.js", ChangeKind.RENAMED, from_path="old.js")]
        assert suggest(files)[2] == "update project files"

    def test_documentation(self, suggest):
        files = make_files(("README.md", ChangeKind.MODIFIED), ("docs/a.md", ChangeKind.MODIFIED))
        assert suggest(files)[2] == "update documentation"

    def test_update_tests(self, suggest):
        files = make_files(("tests/a.py", ChangeKind.MODIFIED), ("tests/b.py", ChangeKind.MODIFIED))
        assert suggest(files)[2] == "update tests"

    def test_configuration(self, suggest):
        files = make_files(("package.json", ChangeKind.MODIFIED), ("tsconfig.json", ChangeKind.MODIFIED))
        assert suggest(files)[2] == "update configuration"

    def test_styles(self, suggest):
        files = make_files(("a.css", ChangeKind.MODIFIED), ("b.less", ChangeKind.MODIFIED))
        assert suggest(files)[2] == "update styles"

    def test_add_inferred_feature(self, suggest):
        files = make_files(
            ("src/userProfile.js", ChangeKind.CREATED),
            ("src/user-settings.js", ChangeKind.CREATED),
            ("src/app.js", ChangeKind.MODIFIED),
        )
        assert suggest(files)[2] == "add user"

    def test_add_new_features_without_repeated_word(self, suggest):
        files = make_files(
            ("src/alpha.js", ChangeKind.CREATED),
            ("src/beta.js", ChangeKind.CREATED),
            ("src/app.js", ChangeKind.MODIFIED),
        )
        assert suggest(files)[2] == "add new features"

    def test_update_inferred_feature(self, suggest):
        files = make_files(("src/auth_login.py", ChangeKind.MODIFIED), ("src/auth_token.py", ChangeKind.MODIFIED))
        assert suggest(files)[2] == "update auth"

    def test_update_implementation(self, suggest):
        files = make_files(("src/app.py", ChangeKind.MODIFIED), ("src/cli.py", ChangeKind.MODIFIED))
        assert suggest(files)[2] == "update implementation"

    def test_remove_deprecated_code(self, suggest):
        files = make_files(("src/old.py", ChangeKind.DELETED), ("src/legacy.py", ChangeKind.DELETED))
        assert suggest(files)[2] == "remove deprecated code"

    def test_mixed_small(self, suggest):
        files = [
            FileChange("a.js", ChangeKind.RENAMED, from_path="x.js"),
            FileChange("b.js", ChangeKind.RENAMED, from_path="y.js"),
        ]
        assert suggest(files)[2] == "update project files"

    def test_mixed_large(self, suggest):
        files = [FileChange(f"m{i}.js", ChangeKind.RENAMED, from_path=f"o{i}.js") for i in range(4)]
        assert suggest(files)[2] == "update multiple components"


class TestInferFeature:

    def test_splits_camel_kebab_snake(self):
        paths = ["src/PaymentForm.tsx", "src/payment-api.ts", "src/payment_utils.py"]
        assert infer_feature(paths) == "payment"

    def test_requires_repetition(self):
        assert infer_feature(["src/alpha.py"]) is None

    def test_ignores_short_words(self):
        assert infer_feature(["src/ui-a.js", "src/ui-b.js"]) is None

    def test_first_seen_wins_ties(self):
        paths = ["order_item.py", "order_line.py", "item_line.py"]
        assert infer_feature(paths) == "order"


class TestFormatMessage:

    def test_with_scope(self):
        assert format_message("feat", "auth", "add login") == "feat(auth): add login"

    def test_without_scope(self):
        assert format_message("docs", None, "update documentation") == "docs: update documentation"

    def test_alternatives_are_unique(self):
        synthesizer = MessageSynthesizer()
        options = synthesizer.alternatives("feat", None, "add user", 1)
        assert options == ["feat: add user"]

    def test_alternatives_for_many_files(self):
        synthesizer = MessageSynthesizer()
        options = synthesizer.alternatives("fix", "api", "update auth", 3)
        assert options == ["fix(api): update auth", "fix: update auth", "fix: update 3 files"]
