"""Shared fixtures: a small Angular project that uses ag-Grid."""

import json

import pytest

GRID_COMPONENT_TS = """import { Component } from '@angular/core';
import { AgGridAngular } from 'ag-grid-angular';
import { ColDef } from 'ag-grid-community';

@Component({
  selector: 'app-grid',
  standalone: true,
  imports: [AgGridAngular],
  templateUrl: './grid.component.html',
})
export class GridComponent {
  columns: ColDef[] = [];
  gridOptions = { rowData: [], pagination: true };
}
"""

GRID_COMPONENT_HTML = (
    '<ag-grid-angular class="ag-theme-alpine" [rowData]="rows" [columnDefs]="cols"></ag-grid-angular>\n'
)

STYLES_CSS = ".ag-theme-alpine { height: 500px; }\n"

PACKAGE_JSON = {
    "name": "demo",
    "dependencies": {
        "@angular/core": "^17.0.0",
        "ag-grid-angular": "^31.0.0",
        "ag-grid-community": "^31.0.0",
    },
}


def write_project(root):
    app = root / "src" / "app"
    app.mkdir(parents=True)
    (app / "grid.component.ts").write_text(GRID_COMPONENT_TS, encoding="utf-8")
    (app / "grid.component.html").write_text(GRID_COMPONENT_HTML, encoding="utf-8")
    (root / "src" / "styles.css").write_text(STYLES_CSS, encoding="utf-8")
    (root / "package.json").write_text(json.dumps(PACKAGE_JSON, indent=2), encoding="utf-8")
    (root / "angular.json").write_text("{}", encoding="utf-8")
    (root / "tsconfig.json").write_text("{}", encoding="utf-8")
    return root


def snapshot(root):
    """Every file under root (bytes), keyed by relative path."""
    return {
        str(path.relative_to(root)): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def angular_project(tmp_path):
    return write_project(tmp_path / "demo")
