"""Tests for the migration runner, backups and package.json updates."""

import json
import os
from unittest.mock import patch

import pytest

from ngui_migrate.core.errors import BackupMissingError, FileIOError, ProjectNotFoundError
from ngui_migrate.core.mappings import MappingRegistry
from ngui_migrate.core.runner import (
    MigrationRunner,
    MigrationScope,
    MigrationStage,
    create_backup,
    find_latest_backup,
    restore_backup,
    update_manifest,
)
from ngui_migrate.core.scanner import scan_project

from .conftest import GRID_COMPONENT_HTML, snapshot


MIGRATED_HTML = '<ngui-grid class="ngui-theme-alpine" [data]="rows" [columns]="cols"></ngui-grid>\n'


def _read(root, rel_path):
    return (root / rel_path).read_text(encoding="utf-8")


# =========================================================================
# Tests: migrate
# =========================================================================

class TestMigrate:
    def test_full_migration(self, angular_project):
        result = MigrationRunner().migrate(str(angular_project))

        assert result.success
        assert result.files_processed == 3
        assert result.files_modified == 3
        assert result.errors == []
        assert result.failed_stage is None

        ts = _read(angular_project, "src/app/grid.component.ts")
        assert "import { NgUiGridComponent } from '@ng-ui/grid';" in ts
        assert "import { NgUiColumnDefinition } from '@ng-ui/core';" in ts
        assert "imports: [NgUiGridComponent]," in ts
        assert "columns: NgUiColumnDefinition[] = [];" in ts
        assert "gridOptions = { data: [], paginated: true };" in ts

        assert _read(angular_project, "src/app/grid.component.html") == MIGRATED_HTML
        assert _read(angular_project, "src/styles.css") == ".ngui-theme-alpine { height: 500px; }\n"

    def test_no_leftover_usage_after_migration(self, angular_project):
        MigrationRunner().migrate(str(angular_project))
        records = scan_project(str(angular_project))
        assert all(not r.imports and not r.components for r in records)

    def test_manifest_updated(self, angular_project):
        MigrationRunner().migrate(str(angular_project))
        package = json.loads(_read(angular_project, "package.json"))
        assert package["dependencies"] == {
            "@angular/core": "^17.0.0",
            "@ng-ui/grid": "^1.0.0",
            "@ng-ui/core": "^1.0.0",
        }

    def test_backup_created(self, angular_project):
        result = MigrationRunner().migrate(str(angular_project))
        assert result.backup_path is not None
        assert os.path.basename(result.backup_path).startswith("backup-")
        backed_up = os.path.join(result.backup_path, "src", "app", "grid.component.html")
        with open(backed_up, encoding="utf-8") as f:
            assert f.read() == GRID_COMPONENT_HTML

    def test_no_backup(self, angular_project):
        result = MigrationRunner().migrate(str(angular_project), create_backup=False)
        assert result.backup_path is None
        assert not (angular_project / ".migration-backups").exists()

    def test_dry_run_leaves_project_untouched(self, angular_project):
        before = snapshot(angular_project)
        result = MigrationRunner().migrate(str(angular_project), dry_run=True)

        assert result.success
        assert result.transformations
        assert result.files_modified == 0
        assert result.backup_path is None
        assert snapshot(angular_project) == before

    def test_interactive_decline(self, angular_project):
        before = snapshot(angular_project)
        with patch("click.confirm", return_value=False) as confirm:
            result = MigrationRunner().migrate(str(angular_project), interactive=True)

        confirm.assert_called_once()
        assert result.cancelled
        assert not result.success
        assert snapshot(angular_project) == before

    def test_force_skips_prompt(self, angular_project):
        with patch("click.confirm") as confirm:
            result = MigrationRunner().migrate(str(angular_project), interactive=True, force=True)
        confirm.assert_not_called()
        assert result.success

    def test_templates_scope(self, angular_project):
        original_ts = _read(angular_project, "src/app/grid.component.ts")
        result = MigrationRunner().migrate(str(angular_project), scope=MigrationScope.TEMPLATES)
        assert result.files_modified == 1
        assert _read(angular_project, "src/app/grid.component.html") == MIGRATED_HTML
        assert _read(angular_project, "src/app/grid.component.ts") == original_ts

    def test_selected_files(self, angular_project):
        result = MigrationRunner().migrate(str(angular_project), files=["src/styles.css"])
        assert result.files_modified == 1
        assert _read(angular_project, "src/app/grid.component.html") == GRID_COMPONENT_HTML

    def test_generator_warnings_carried(self, angular_project):
        (angular_project / "src" / "app" / "extra.ts").write_text(
            "const options = { enableCharts: true };\n", encoding="utf-8"
        )
        result = MigrationRunner().migrate(str(angular_project))
        assert any("enableCharts" in w.message for w in result.warnings)

    def test_project_shape_warnings(self, angular_project):
        (angular_project / "angular.json").unlink()
        result = MigrationRunner().migrate(str(angular_project), dry_run=True)
        assert any("angular.json not found" in w.message for w in result.warnings)

    def test_no_usage(self, tmp_path):
        (tmp_path / "app.ts").write_text("export const x = 1;\n", encoding="utf-8")
        result = MigrationRunner().migrate(str(tmp_path))
        assert result.success
        assert result.files_processed == 0
        assert result.backup_path is None

    def test_missing_project(self, tmp_path):
        with pytest.raises(ProjectNotFoundError):
            MigrationRunner().migrate(str(tmp_path / "missing"))

    def test_failure_records_stage(self, angular_project):
        with patch(
            "ngui_migrate.core.runner.migration_runner.generate_transformations",
            side_effect=RuntimeError("boom"),
        ):
            result = MigrationRunner().migrate(str(angular_project))

        assert not result.success
        assert result.failed_stage == MigrationStage.GENERATING_TRANSFORMATIONS
        assert "boom" in result.errors[0].message

    def test_failed_backup_not_returned(self, angular_project):
        before = snapshot(angular_project)
        with patch("ngui_migrate.core.runner.backup.shutil.copytree", side_effect=OSError("disk full")):
            result = MigrationRunner().migrate(str(angular_project))

        assert not result.success
        assert result.failed_stage == MigrationStage.BACKING_UP
        assert result.backup_path is None
        assert snapshot(angular_project) == before

    def test_custom_registry(self, angular_project):
        registry = MappingRegistry.default()
        registry.add_custom_mapping("css", "ag-theme-alpine", "ngui-theme-compact")
        MigrationRunner(registry=registry).migrate(str(angular_project))
        assert _read(angular_project, "src/styles.css") == ".ngui-theme-compact { height: 500px; }\n"


# =========================================================================
# Tests: analyze, rollback, wizard
# =========================================================================

class TestAnalyze:
    def test_analyze_does_not_modify(self, angular_project):
        before = snapshot(angular_project)
        report = MigrationRunner().analyze(str(angular_project))
        assert report.affected_files == 3
        assert report.total_files == 3
        assert snapshot(angular_project) == before

    def test_analyze_writes_report(self, angular_project, tmp_path):
        out = tmp_path / "report.html"
        MigrationRunner().analyze(str(angular_project), report_path=str(out))
        assert "Compatibility" in out.read_text(encoding="utf-8")


class TestRollback:
    def test_rollback_restores_latest_backup(self, angular_project):
        runner = MigrationRunner()
        migration = runner.migrate(str(angular_project))
        assert _read(angular_project, "src/app/grid.component.html") == MIGRATED_HTML

        result = runner.rollback(str(angular_project))
        assert result.backup_path == migration.backup_path
        assert result.files_restored == 6
        assert _read(angular_project, "src/app/grid.component.html") == GRID_COMPONENT_HTML
        assert "ag-grid-angular" in json.loads(_read(angular_project, "package.json"))["dependencies"]

    def test_rollback_without_backup(self, angular_project):
        before = snapshot(angular_project)
        with pytest.raises(BackupMissingError):
            MigrationRunner().rollback(str(angular_project))
        assert snapshot(angular_project) == before

    def test_rollback_explicit_missing_backup(self, angular_project):
        with pytest.raises(BackupMissingError):
            MigrationRunner().rollback(str(angular_project), backup_path=str(angular_project / "nope"))


class TestWizard:
    def test_full_scope(self, angular_project):
        with patch("click.confirm", side_effect=[True, False, False, False]), patch(
            "click.prompt", return_value="full"
        ):
            result = MigrationRunner().wizard(str(angular_project))

        assert result.success
        assert result.files_modified == 3
        assert result.backup_path is None

    def test_selective_scope(self, angular_project):
        with patch("click.confirm", side_effect=[True, False, False, False]), patch(
            "click.prompt", side_effect=["selective", "2"]
        ):
            result = MigrationRunner().wizard(str(angular_project))

        assert result.files_modified == 1
        assert _read(angular_project, "src/app/grid.component.html") == MIGRATED_HTML

    def test_declined(self, angular_project):
        before = snapshot(angular_project)
        with patch("click.confirm", return_value=False):
            assert MigrationRunner().wizard(str(angular_project)) is None
        assert snapshot(angular_project) == before


# =========================================================================
# Tests: backups and manifest
# =========================================================================

class TestBackups:
    def test_excludes_dependencies(self, angular_project):
        (angular_project / "node_modules" / "ag-grid-angular").mkdir(parents=True)
        (angular_project / "node_modules" / "ag-grid-angular" / "index.js").write_text("x")
        backup = create_backup(str(angular_project))
        assert not os.path.exists(os.path.join(backup, "node_modules"))
        assert os.path.isfile(os.path.join(backup, "package.json"))

    def test_latest_backup_is_lexicographically_last(self, tmp_path):
        for name in ("backup-20240101T000000000000", "backup-20250101T000000000000", "other"):
            (tmp_path / ".migration-backups" / name).mkdir(parents=True)
        latest = find_latest_backup(str(tmp_path))
        assert os.path.basename(latest) == "backup-20250101T000000000000"

    def test_no_backups(self, tmp_path):
        assert find_latest_backup(str(tmp_path)) is None

    def test_restore_missing(self, tmp_path):
        with pytest.raises(BackupMissingError):
            restore_backup(str(tmp_path), str(tmp_path / "missing"))


class TestManifest:
    def _write(self, root, package):
        (root / "package.json").write_text(json.dumps(package), encoding="utf-8")

    def test_swaps_packages(self, tmp_path):
        self._write(tmp_path, {
            "dependencies": {"ag-grid-community": "^31.0.0"},
            "devDependencies": {"@ag-grid-enterprise/charts": "^31.0.0", "jest": "^29.0.0"},
        })
        modified, removed = update_manifest(str(tmp_path), MappingRegistry.default(), {"@ng-ui/grid": "^1.0.0"})

        assert modified
        assert sorted(removed) == ["@ag-grid-enterprise/charts", "ag-grid-community"]
        package = json.loads((tmp_path / "package.json").read_text())
        assert package["dependencies"] == {"@ng-ui/grid": "^1.0.0"}
        assert package["devDependencies"] == {"jest": "^29.0.0"}
        assert (tmp_path / "package.json").read_text().endswith("}\n")

    def test_existing_target_kept(self, tmp_path):
        self._write(tmp_path, {"dependencies": {"@ng-ui/grid": "^2.0.0"}})
        modified, removed = update_manifest(str(tmp_path), MappingRegistry.default(), {"@ng-ui/grid": "^1.0.0"})
        assert (modified, removed) == (False, [])

    def test_missing_manifest(self, tmp_path):
        assert update_manifest(str(tmp_path), MappingRegistry.default(), {}) == (False, [])

    def test_invalid_manifest(self, tmp_path):
        (tmp_path / "package.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(FileIOError):
            update_manifest(str(tmp_path), MappingRegistry.default(), {"@ng-ui/grid": "^1.0.0"})
